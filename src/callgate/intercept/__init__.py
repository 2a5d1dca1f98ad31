# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Interception engine — rules, locator, interception points and installer."""

from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.installer import HookInstaller, InterceptionOutcome, OutcomeStatus
from callgate.intercept.locator import ImportLoadContext, LoadContext, NamespaceLoadContext, find_method, locate
from callgate.intercept.matchers import (
    AnyTextContains,
    AnyTextEquals,
    ArgumentPredicate,
    FirstTextEquals,
    evaluate,
)
from callgate.intercept.point import HookBinding, InterceptionPoint, Invocation, attach, interceptable, point_of
from callgate.intercept.rule import HookRule
from callgate.intercept.values import (
    AbsentValue,
    ArgumentValue,
    NumericValue,
    OpaqueValue,
    TextValue,
    classify,
    classify_all,
)

__all__ = [
    "AbsentValue",
    "AnyTextContains",
    "AnyTextEquals",
    "ArgumentPredicate",
    "ArgumentValue",
    "FirstTextEquals",
    "HookBinding",
    "HookInstaller",
    "HookRule",
    "ImportLoadContext",
    "InterceptionOutcome",
    "InterceptionPoint",
    "Invocation",
    "LoadContext",
    "NamespaceLoadContext",
    "NumericValue",
    "OpaqueValue",
    "OutcomeStatus",
    "SubstitutionAction",
    "TextValue",
    "attach",
    "classify",
    "classify_all",
    "evaluate",
    "find_method",
    "interceptable",
    "locate",
    "point_of",
]
