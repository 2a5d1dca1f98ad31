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
"""Callgate exception hierarchy.

Exceptions are raised inside the engine only; the installer converts them
into :class:`~callgate.intercept.installer.InterceptionOutcome` values so
no failure ever crosses into the host's own control flow.
"""

from __future__ import annotations


class CallgateException(Exception):
    """Base exception for all Callgate errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ATTACH_FAILED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class AttachException(CallgateException):
    """The interception point could not be attached to a resolved class."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="ATTACH_FAILED", context=context)


class ConfigurationException(CallgateException):
    """Hook configuration is invalid and cannot be turned into rules."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CONFIG_INVALID", context=context)
