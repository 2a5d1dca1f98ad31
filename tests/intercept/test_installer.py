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
"""Tests for HookInstaller — ordered, isolated installation."""

from __future__ import annotations

from callgate.diagnostics import DiagnosticSink
from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.installer import HookInstaller, InterceptionOutcome, OutcomeStatus
from callgate.intercept.locator import NamespaceLoadContext
from callgate.intercept.matchers import AnyTextEquals, FirstTextEquals
from callgate.intercept.rule import HookRule

SUBJECT = "com.example.protected"


class RecordingSink:
    def __init__(self) -> None:
        self.outcomes: list[InterceptionOutcome] = []

    def record(self, outcome: InterceptionOutcome) -> None:
        self.outcomes.append(outcome)


class ExplodingSink:
    def record(self, outcome: InterceptionOutcome) -> None:
        raise OSError("log device gone")


class ExplodingContext:
    def resolve(self, class_identifier: str):
        raise RuntimeError("loader crashed")


class _CallableGate:
    def __call__(self, *args):
        return True


def _host_classes():
    class ClipboardService:
        def clipboardAccessAllowed(self, op, package, uid):
            return False

    class ActivityManagerService:
        def forceStopPackage(self, package, user_id):
            return "stopped"

        gate = _CallableGate()

        @property
        def flag(self):
            return False

    return ClipboardService, ActivityManagerService


def _rule(target_class: str, method: str, action=SubstitutionAction.RETURN_NONE) -> HookRule:
    return HookRule(target_class, method, AnyTextEquals(SUBJECT), action)


class TestInstallIsolation:
    def test_missing_class_does_not_block_later_rules(self):
        clipboard, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ClipboardService": clipboard, "host.ActivityManagerService": ams})
        rules = [
            HookRule("host.ClipboardService", "clipboardAccessAllowed", FirstTextEquals(SUBJECT),
                     SubstitutionAction.RETURN_TRUE),
            _rule("host.CachedAppOptimizer", "freezeAppAsyncLSP"),
            _rule("host.ActivityManagerService", "forceStopPackage"),
        ]

        outcomes = HookInstaller().install_all(rules, ctx)

        assert [o.status for o in outcomes] == [
            OutcomeStatus.ATTACHED,
            OutcomeStatus.TARGET_MISSING,
            OutcomeStatus.ATTACHED,
        ]
        assert ams().forceStopPackage(SUBJECT, 0) is None
        assert clipboard().clipboardAccessAllowed(0, SUBJECT, 1) is True

    def test_missing_method_is_target_missing(self):
        clipboard, _ = _host_classes()
        ctx = NamespaceLoadContext({"host.ClipboardService": clipboard})

        [outcome] = HookInstaller().install_all([_rule("host.ClipboardService", "removedInThisBuild")], ctx)

        assert outcome.status is OutcomeStatus.TARGET_MISSING
        assert outcome.reason == "method not found"

    def test_existing_non_method_is_attach_failed(self):
        _, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ActivityManagerService": ams})

        [outcome] = HookInstaller().install_all([_rule("host.ActivityManagerService", "flag")], ctx)

        assert outcome.status is OutcomeStatus.ATTACH_FAILED
        assert "property" in outcome.reason
        assert ams().flag is False

    def test_attach_failure_is_recorded_and_isolated(self):
        _, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ActivityManagerService": ams})
        rules = [
            _rule("host.ActivityManagerService", "gate"),
            _rule("host.ActivityManagerService", "forceStopPackage"),
        ]

        outcomes = HookInstaller().install_all(rules, ctx)

        assert outcomes[0].status is OutcomeStatus.ATTACH_FAILED
        assert "AttachException" in outcomes[0].reason
        assert outcomes[1].status is OutcomeStatus.ATTACHED

    def test_loader_exception_is_attach_failed(self):
        [outcome] = HookInstaller().install_all([_rule("host.Anything", "m")], ExplodingContext())

        assert outcome.status is OutcomeStatus.ATTACH_FAILED
        assert outcome.reason == "RuntimeError: loader crashed"
        assert not outcome.ok

    def test_outcomes_follow_rule_order(self):
        clipboard, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ClipboardService": clipboard, "host.ActivityManagerService": ams})
        rules = [
            _rule("host.ActivityManagerService", "forceStopPackage"),
            _rule("host.Missing", "m"),
            _rule("host.ClipboardService", "clipboardAccessAllowed"),
        ]

        outcomes = HookInstaller().install_all(rules, ctx)

        assert [o.target for o in outcomes] == [r.target for r in rules]

    def test_empty_rule_list(self):
        assert HookInstaller().install_all([], NamespaceLoadContext({})) == []


class TestInstallerDiagnostics:
    def test_every_outcome_reaches_sink(self):
        clipboard, _ = _host_classes()
        sink = RecordingSink()
        ctx = NamespaceLoadContext({"host.ClipboardService": clipboard})
        rules = [_rule("host.ClipboardService", "clipboardAccessAllowed"), _rule("host.Missing", "m")]

        outcomes = HookInstaller(sink).install_all(rules, ctx)

        assert isinstance(sink, DiagnosticSink)
        assert sink.outcomes == outcomes

    def test_failing_sink_never_affects_installation(self):
        clipboard, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ClipboardService": clipboard, "host.ActivityManagerService": ams})
        rules = [
            _rule("host.ClipboardService", "clipboardAccessAllowed"),
            _rule("host.ActivityManagerService", "forceStopPackage"),
        ]

        outcomes = HookInstaller(ExplodingSink()).install_all(rules, ctx)

        assert all(o.ok for o in outcomes)


class TestInstallerPoints:
    def test_points_are_tracked_once_per_pair(self):
        _, ams = _host_classes()
        ctx = NamespaceLoadContext({"host.ActivityManagerService": ams})
        rules = [
            _rule("host.ActivityManagerService", "forceStopPackage"),
            HookRule("host.ActivityManagerService", "forceStopPackage", FirstTextEquals("com.other"),
                     SubstitutionAction.RETURN_FALSE),
        ]

        installer = HookInstaller()
        installer.install_all(rules, ctx)

        assert len(installer.points) == 1
        assert len(installer.points[0].bindings) == 2
        assert ams().forceStopPackage("com.other", 0) is False
