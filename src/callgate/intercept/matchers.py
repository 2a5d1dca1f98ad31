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
"""Argument predicates — decide whether a rule applies to an invocation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from callgate.intercept.values import AbsentValue, ArgumentValue, TextValue, describe


@runtime_checkable
class ArgumentPredicate(Protocol):
    """Pure function from classified arguments to a match decision."""

    def __call__(self, values: Sequence[ArgumentValue]) -> bool: ...

    def describe(self) -> str: ...


@dataclass(frozen=True)
class FirstTextEquals:
    """Match when the first string argument equals *subject*.

    Only the first string is compared; later strings are ignored even if
    they would match.
    """

    subject: str

    def __call__(self, values: Sequence[ArgumentValue]) -> bool:
        for value in values:
            if isinstance(value, TextValue):
                return value.text == self.subject
        return False

    def describe(self) -> str:
        return f"first-text-equals({self.subject!r})"


@dataclass(frozen=True)
class AnyTextEquals:
    """Match when any string argument equals *subject*."""

    subject: str

    def __call__(self, values: Sequence[ArgumentValue]) -> bool:
        return any(isinstance(v, TextValue) and v.text == self.subject for v in values)

    def describe(self) -> str:
        return f"any-text-equals({self.subject!r})"


@dataclass(frozen=True)
class AnyTextContains:
    """Match when the textual form of any non-absent argument contains *substring*."""

    substring: str

    def __call__(self, values: Sequence[ArgumentValue]) -> bool:
        for value in values:
            if isinstance(value, AbsentValue):
                continue
            text = describe(value)
            if text is not None and self.substring in text:
                return True
        return False

    def describe(self) -> str:
        return f"any-text-contains({self.substring!r})"


MATCHER_TYPES: dict[str, type] = {
    "first-text-equals": FirstTextEquals,
    "any-text-equals": AnyTextEquals,
    "any-text-contains": AnyTextContains,
}


def evaluate(predicate: ArgumentPredicate, values: Sequence[ArgumentValue]) -> bool:
    """Run *predicate* over *values*; any fault counts as no match."""
    try:
        return bool(predicate(values))
    except Exception:
        return False
