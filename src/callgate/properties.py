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
"""Configuration properties for the hook module (callgate.*)."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from callgate.core.config import Config, config_properties
from callgate.exceptions import ConfigurationException
from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.matchers import MATCHER_TYPES
from callgate.intercept.rule import HookRule


@config_properties(prefix="callgate")
@dataclass
class CallgateProperties:
    """Settings for the load entry point (callgate.*)."""

    host_process: str = "android"
    subject: str = "com.clipboardsync"
    presets: bool = True
    log_matches: bool = False


class RuleProperties(BaseModel):
    """One entry of ``callgate.rules``.

    ``value`` is the subject or substring handed to the matcher; it
    defaults to ``callgate.subject``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target_class: str = Field(alias="target-class", min_length=1)
    target_method: str = Field(alias="target-method", min_length=1)
    matcher: str = "first-text-equals"
    value: str | None = None
    action: SubstitutionAction = SubstitutionAction.RETURN_NONE

    @field_validator("matcher")
    @classmethod
    def _known_matcher(cls, v: str) -> str:
        if v not in MATCHER_TYPES:
            raise ValueError(f"unknown matcher '{v}', expected one of {sorted(MATCHER_TYPES)}")
        return v

    @field_validator("action", mode="before")
    @classmethod
    def _parse_action(cls, v: object) -> object:
        if isinstance(v, str):
            return SubstitutionAction.parse(v)
        return v

    def to_rule(self, subject: str) -> HookRule:
        matcher_cls = MATCHER_TYPES[self.matcher]
        return HookRule(
            target_class=self.target_class,
            target_method=self.target_method,
            matcher=matcher_cls(self.value if self.value is not None else subject),
            action=self.action,
        )


def configured_rules(config: Config, subject: str) -> list[HookRule]:
    """Build the rules listed under ``callgate.rules``, in order.

    Raises:
        ConfigurationException: An entry is malformed.
    """
    raw_rules = config.get("callgate.rules") or []
    if not isinstance(raw_rules, list):
        raise ConfigurationException("callgate.rules must be a list")

    rules: list[HookRule] = []
    for index, raw in enumerate(raw_rules):
        if not isinstance(raw, dict):
            raise ConfigurationException(f"callgate.rules[{index}] must be a mapping", context={"index": index})
        try:
            rules.append(RuleProperties.model_validate(raw).to_rule(subject))
        except (ValidationError, ValueError) as exc:
            raise ConfigurationException(
                f"Invalid hook rule at callgate.rules[{index}]:\n{exc}", context={"index": index}
            ) from exc
    return rules
