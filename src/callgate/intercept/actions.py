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
"""Substitution actions — the fixed result returned for a matched call."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class SubstitutionAction(StrEnum):
    """Value returned in place of the original method's result."""

    RETURN_TRUE = "return-true"
    RETURN_FALSE = "return-false"
    RETURN_NONE = "return-none"

    @property
    def result(self) -> Any:
        return _RESULTS[self]

    @classmethod
    def parse(cls, raw: str) -> SubstitutionAction:
        """Parse ``return-true`` / ``RETURN_TRUE`` / ``return_true`` spellings."""
        normalized = raw.strip().lower().replace("_", "-")
        return cls(normalized)


_RESULTS: dict[SubstitutionAction, Any] = {
    SubstitutionAction.RETURN_TRUE: True,
    SubstitutionAction.RETURN_FALSE: False,
    SubstitutionAction.RETURN_NONE: None,
}
