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
"""DiagnosticSink — the port installation outcomes are reported through."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from callgate.intercept.installer import InterceptionOutcome


@runtime_checkable
class DiagnosticSink(Protocol):
    """Fire-and-forget receiver of installation outcomes."""

    def record(self, outcome: InterceptionOutcome) -> None: ...


class NullDiagnosticSink:
    """Drops every outcome."""

    def record(self, outcome: InterceptionOutcome) -> None:
        return None


class LoggingDiagnosticSink:
    """Writes outcomes through structlog."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("callgate.install")

    def record(self, outcome: InterceptionOutcome) -> None:
        from callgate.intercept.installer import OutcomeStatus

        if outcome.status is OutcomeStatus.ATTACH_FAILED:
            self._logger.warning("hook_attach_failed", target=outcome.target, reason=outcome.reason)
        elif outcome.status is OutcomeStatus.TARGET_MISSING:
            self._logger.info("hook_target_missing", target=outcome.target, reason=outcome.reason)
        else:
            self._logger.info("hook_attached", target=outcome.target)


def record_safely(sink: DiagnosticSink, outcome: InterceptionOutcome) -> None:
    """Hand *outcome* to *sink*; a failing sink never affects the caller."""
    try:
        sink.record(outcome)
    except Exception:
        pass
