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
"""HookModule — the load entry point invoked by the host's plugin loader."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from callgate.core.config import Config
from callgate.diagnostics import LoggingDiagnosticSink
from callgate.intercept.installer import HookInstaller, InterceptionOutcome
from callgate.intercept.locator import ImportLoadContext, LoadContext
from callgate.intercept.rule import HookRule
from callgate.logging.structlog_adapter import StructlogAdapter
from callgate.presets import subject_protection_rules
from callgate.properties import CallgateProperties, configured_rules

logger = structlog.get_logger("callgate.module")


@dataclass(frozen=True)
class LoadRequest:
    """What the host hands over when it loads a process or package."""

    package_name: str
    load_context: LoadContext = field(default_factory=ImportLoadContext)


class HookModule:
    """Installs the configured rules when the host process of interest loads.

    Every other load request is ignored.
    """

    def __init__(
        self,
        settings: CallgateProperties,
        rules: Sequence[HookRule],
        installer: HookInstaller | None = None,
    ) -> None:
        self.settings = settings
        self.rules: tuple[HookRule, ...] = tuple(rules)
        self.installer = installer or HookInstaller(LoggingDiagnosticSink(), log_matches=settings.log_matches)

    @classmethod
    def from_config(cls, config: Config) -> HookModule:
        """Build the module from ``callgate.*`` settings.

        Logging is configured from ``callgate.logging.*`` before anything
        else. Preset rules come first (unless ``callgate.presets`` is
        false), followed by ``callgate.rules`` in file order.
        """
        StructlogAdapter().configure(config)
        settings = config.bind(CallgateProperties)
        rules: list[HookRule] = []
        if settings.presets:
            rules.extend(subject_protection_rules(settings.subject))
        rules.extend(configured_rules(config, settings.subject))
        return cls(settings, rules)

    def handle_load(self, request: LoadRequest) -> list[InterceptionOutcome]:
        """Install hooks if *request* is for the host process of interest."""
        if request.package_name != self.settings.host_process:
            return []

        logger.info("hooking_host_process", package=request.package_name, rules=len(self.rules))
        outcomes = self.installer.install_all(self.rules, request.load_context)
        logger.info(
            "hooking_complete",
            attached=sum(1 for o in outcomes if o.ok),
            total=len(outcomes),
        )
        return outcomes
