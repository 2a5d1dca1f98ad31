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
"""Tests for HookModule — the host load entry point."""

from __future__ import annotations

import logging
import logging.handlers

from callgate.core.config import Config
from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.installer import HookInstaller, OutcomeStatus
from callgate.intercept.locator import NamespaceLoadContext
from callgate.intercept.matchers import AnyTextContains, FirstTextEquals
from callgate.intercept.rule import HookRule
from callgate.logging.structlog_adapter import StructlogAdapter
from callgate.module import HookModule, LoadRequest
from callgate.presets import (
    ACTIVITY_MANAGER_SERVICE,
    CACHED_APP_OPTIMIZER,
    CLIPBOARD_SERVICE,
    PROCESS_LIST,
)
from callgate.properties import CallgateProperties

SUBJECT = "com.clipboardsync"


def _android_services():
    """Fake system_server classes with the argument shapes of the real ones."""

    class ClipboardService:
        def __init__(self) -> None:
            self.notified: list[str] = []

        def clipboardAccessAllowed(self, op, calling_package, attribution_tag, uid, user_id, should_note_op):
            return False

        def showAccessNotificationLocked(self, calling_package, uid, user_id, clipboard):
            self.notified.append(calling_package)

    class ActivityManagerService:
        def __init__(self) -> None:
            self.stopped: list[str] = []

        def forceStopPackage(self, package_name, user_id):
            self.stopped.append(package_name)

        def killBackgroundProcesses(self, package_name, user_id):
            self.stopped.append(package_name)

    class ProcessList:
        def killPackageProcessesLocked(self, package_name, app_id, user_id, min_oom_adj, reason):
            return True

    return {
        CLIPBOARD_SERVICE: ClipboardService,
        ACTIVITY_MANAGER_SERVICE: ActivityManagerService,
        PROCESS_LIST: ProcessList,
    }


class TestHandleLoad:
    def test_other_process_is_ignored(self):
        services = _android_services()
        module = HookModule(CallgateProperties(), [
            HookRule(CLIPBOARD_SERVICE, "clipboardAccessAllowed", FirstTextEquals(SUBJECT),
                     SubstitutionAction.RETURN_TRUE),
        ])

        outcomes = module.handle_load(LoadRequest("com.android.systemui", NamespaceLoadContext(services)))

        assert outcomes == []
        clipboard = services[CLIPBOARD_SERVICE]()
        assert clipboard.clipboardAccessAllowed(29, SUBJECT, None, 10123, 0, True) is False

    def test_host_process_installs_presets(self):
        services = _android_services()
        module = HookModule.from_config(Config({}))

        outcomes = module.handle_load(LoadRequest("android", NamespaceLoadContext(services)))

        statuses = {o.target: o.status for o in outcomes}
        assert statuses[f"{CLIPBOARD_SERVICE}#clipboardAccessAllowed"] is OutcomeStatus.ATTACHED
        assert statuses[f"{PROCESS_LIST}#killPackageProcessesLocked"] is OutcomeStatus.ATTACHED
        assert statuses[f"{CACHED_APP_OPTIMIZER}#freezeAppAsyncLSP"] is OutcomeStatus.TARGET_MISSING

        clipboard = services[CLIPBOARD_SERVICE]()
        assert clipboard.clipboardAccessAllowed(29, SUBJECT, None, 10123, 0, True) is True
        assert clipboard.clipboardAccessAllowed(29, "com.other", None, 10124, 0, True) is False
        clipboard.showAccessNotificationLocked(SUBJECT, 10123, 0, object())
        clipboard.showAccessNotificationLocked("com.other", 10124, 0, object())
        assert clipboard.notified == ["com.other"]

        ams = services[ACTIVITY_MANAGER_SERVICE]()
        ams.forceStopPackage(SUBJECT, 0)
        ams.killBackgroundProcesses(SUBJECT, 0)
        ams.forceStopPackage("com.other", 0)
        assert ams.stopped == ["com.other"]

        processes = services[PROCESS_LIST]()
        assert processes.killPackageProcessesLocked(SUBJECT, 10123, 0, 900, "stop") is False
        assert processes.killPackageProcessesLocked("com.other", 10124, 0, 900, "stop") is True

    def test_configured_host_process_and_extra_rules(self):
        class Freezer:
            def freeze(self, record):
                return "frozen"

        config = Config({
            "callgate": {
                "host_process": "com.example.host",
                "subject": "com.example.app",
                "presets": False,
                "rules": [
                    {"target-class": "host.Freezer", "target-method": "freeze",
                     "matcher": "any-text-contains", "action": "return-none"},
                ],
            }
        })
        module = HookModule.from_config(config)

        assert module.handle_load(LoadRequest("android", NamespaceLoadContext({}))) == []
        outcomes = module.handle_load(
            LoadRequest("com.example.host", NamespaceLoadContext({"host.Freezer": Freezer}))
        )

        assert [o.status for o in outcomes] == [OutcomeStatus.ATTACHED]
        assert module.rules[0].matcher == AnyTextContains("com.example.app")
        assert Freezer().freeze("ProcessRecord{com.example.app}") is None
        assert Freezer().freeze("ProcessRecord{com.other}") == "frozen"

    def test_injected_installer_is_used(self):
        installer = HookInstaller()
        module = HookModule(CallgateProperties(), [], installer=installer)
        assert module.installer is installer
        assert module.handle_load(LoadRequest("android", NamespaceLoadContext({}))) == []

    def test_load_request_defaults_to_import_context(self):
        request = LoadRequest("android")
        assert request.load_context.resolve("collections.OrderedDict").__name__ == "OrderedDict"


class TestLoggingWiring:
    def test_from_config_routes_logging_through_a_queue(self):
        HookModule.from_config(Config({"callgate": {"logging": {"level": {"root": "WARNING"}}}}))
        try:
            root = logging.getLogger()
            assert [type(h) for h in root.handlers] == [logging.handlers.QueueHandler]
            assert root.level == logging.WARNING
        finally:
            StructlogAdapter().shutdown()

    def test_match_logging_keeps_substitution(self):
        services = _android_services()
        module = HookModule.from_config(Config({"callgate": {"log_matches": True}}))
        try:
            assert module.installer.points == []
            module.handle_load(LoadRequest("android", NamespaceLoadContext(services)))
            assert all(point._log_matches for point in module.installer.points)

            processes = services[PROCESS_LIST]()
            assert processes.killPackageProcessesLocked(SUBJECT, 10123, 0, 900, "stop") is False
            assert processes.killPackageProcessesLocked("com.other", 10124, 0, 900, "stop") is True
        finally:
            StructlogAdapter().shutdown()
