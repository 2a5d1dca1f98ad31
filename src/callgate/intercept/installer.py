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
"""HookInstaller — installs an ordered rule list, one rule at a time.

Each rule ends in exactly one :class:`InterceptionOutcome`. A failure while
locating or attaching rule *i* is recorded and never stops rule *i + 1*.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from callgate.diagnostics import DiagnosticSink, NullDiagnosticSink, record_safely
from callgate.intercept.locator import LoadContext, find_method, locate
from callgate.intercept.point import InterceptionPoint, attach
from callgate.intercept.rule import HookRule


class OutcomeStatus(StrEnum):
    """Terminal state of one installation attempt."""

    ATTACHED = "ATTACHED"
    TARGET_MISSING = "TARGET_MISSING"
    ATTACH_FAILED = "ATTACH_FAILED"


@dataclass(frozen=True)
class InterceptionOutcome:
    """Diagnostic record of one installation attempt."""

    target: str
    status: OutcomeStatus
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.ATTACHED


class HookInstaller:
    """Walks hook rules in declaration order and attaches each independently.

    Usage::

        installer = HookInstaller(LoggingDiagnosticSink())
        outcomes = installer.install_all(rules, ImportLoadContext())
    """

    def __init__(self, sink: DiagnosticSink | None = None, log_matches: bool = False) -> None:
        self._sink: DiagnosticSink = sink if sink is not None else NullDiagnosticSink()
        self._log_matches = log_matches
        self._points: list[InterceptionPoint] = []

    @property
    def points(self) -> list[InterceptionPoint]:
        """Interception points attached by this installer, in attach order."""
        return list(self._points)

    def install_all(self, rules: Iterable[HookRule], load_context: LoadContext) -> list[InterceptionOutcome]:
        """Install every rule and return one outcome per rule, in order."""
        outcomes: list[InterceptionOutcome] = []
        for rule in rules:
            outcome = self.install(rule, load_context)
            record_safely(self._sink, outcome)
            outcomes.append(outcome)
        return outcomes

    def install(self, rule: HookRule, load_context: LoadContext) -> InterceptionOutcome:
        """Install a single rule; failures come back as outcomes, not exceptions."""
        try:
            cls = locate(rule.target_class, load_context)
            if cls is None:
                return InterceptionOutcome(rule.target, OutcomeStatus.TARGET_MISSING, "class not found")
            if not find_method(cls, rule.target_method):
                return InterceptionOutcome(rule.target, OutcomeStatus.TARGET_MISSING, "method not found")

            point = attach(
                cls,
                rule.target_method,
                rule.matcher,
                rule.action,
                log_matches=self._log_matches,
            )
        except Exception as exc:
            return InterceptionOutcome(rule.target, OutcomeStatus.ATTACH_FAILED, f"{type(exc).__name__}: {exc}")

        if point not in self._points:
            self._points.append(point)
        return InterceptionOutcome(rule.target, OutcomeStatus.ATTACHED)
