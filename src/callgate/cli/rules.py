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
"""'callgate rules' — List the hook rules the current configuration produces."""

from __future__ import annotations

import click
from rich.table import Table

from callgate.cli.console import console, load_config
from callgate.exceptions import ConfigurationException
from callgate.module import HookModule


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Config file to load.")
@click.option("--profile", "profiles", multiple=True, help="Active config profile (repeatable).")
def rules_command(config_path: str | None, profiles: tuple[str, ...]) -> None:
    """List configured hook rules in installation order."""
    try:
        module = HookModule.from_config(load_config(config_path, profiles))
    except ConfigurationException as exc:
        console.print(str(exc), style="error", markup=False)
        raise SystemExit(1) from exc

    console.print(
        f"\n[callgate]Host process[/callgate] {module.settings.host_process}  "
        f"[callgate]Subject[/callgate] {module.settings.subject}\n"
    )

    table = Table(title="Hook rules", border_style="dim")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Target", style="info")
    table.add_column("Matcher")
    table.add_column("Action")
    for index, rule in enumerate(module.rules, start=1):
        table.add_row(str(index), rule.target, rule.matcher.describe(), rule.action.value)
    console.print(table)
