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
"""Argument value variants seen by matchers.

Host methods hand over untyped argument lists. Each live argument is
classified once into exactly one variant so predicates can dispatch on
the variant instead of probing types themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any

_NUMERIC_TYPES = (bool, int, float, complex, Decimal, Fraction)


@dataclass(frozen=True)
class TextValue:
    """A string argument."""

    text: str


@dataclass(frozen=True)
class NumericValue:
    """A numeric argument (booleans included)."""

    number: Any


@dataclass(frozen=True)
class OpaqueValue:
    """Any other object; only its textual representation is inspectable."""

    obj: Any


@dataclass(frozen=True)
class AbsentValue:
    """A ``None`` argument."""


ArgumentValue = TextValue | NumericValue | OpaqueValue | AbsentValue

_ABSENT = AbsentValue()


def classify(obj: Any) -> ArgumentValue:
    """Map a live argument to its variant.

    Dispatches on ``type(obj)``, which never runs code on the argument;
    ``isinstance`` would consult a possibly overridden ``__class__``.
    """
    if obj is None:
        return _ABSENT
    kind = type(obj)
    if issubclass(kind, str):
        return TextValue(obj)
    if issubclass(kind, _NUMERIC_TYPES):
        return NumericValue(obj)
    return OpaqueValue(obj)


def classify_all(args: Iterable[Any]) -> tuple[ArgumentValue, ...]:
    """Classify every argument, preserving order."""
    return tuple(classify(arg) for arg in args)


def describe(value: ArgumentValue) -> str | None:
    """Return the textual representation of *value*, or ``None`` when absent.

    ``str()`` runs arbitrary host code for opaque objects and may raise;
    callers treat that as a non-match.
    """
    if isinstance(value, AbsentValue):
        return None
    if isinstance(value, TextValue):
        return value.text
    if isinstance(value, NumericValue):
        return str(value.number)
    return str(value.obj)
