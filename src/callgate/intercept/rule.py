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
"""HookRule — binds a target method to a matcher and a substitution."""

from __future__ import annotations

from dataclasses import dataclass

from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.matchers import ArgumentPredicate


@dataclass(frozen=True)
class HookRule:
    """Static description of one hook.

    Attributes:
        target_class: Fully-qualified class identifier, resolved through a
            :class:`~callgate.intercept.locator.LoadContext`.
        target_method: Method name on the class.
        matcher: Predicate run over the live arguments of every call.
        action: Result substituted when *matcher* returns ``True``.
    """

    target_class: str
    target_method: str
    matcher: ArgumentPredicate
    action: SubstitutionAction

    @property
    def target(self) -> str:
        return f"{self.target_class}#{self.target_method}"
