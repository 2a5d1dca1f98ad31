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
"""'callgate probe' — Resolve rule targets without attaching anything."""

from __future__ import annotations

import inspect

import click
from rich.table import Table

from callgate.cli.console import console, load_config
from callgate.exceptions import ConfigurationException
from callgate.intercept.locator import ImportLoadContext, LoadContext, find_method, locate
from callgate.intercept.point import interceptable
from callgate.intercept.rule import HookRule
from callgate.module import HookModule


def probe_rule(rule: HookRule, load_context: LoadContext) -> tuple[str, str]:
    """Return ``(status, detail)`` for one rule's target."""
    try:
        cls = locate(rule.target_class, load_context)
    except Exception as exc:
        return "error", f"{type(exc).__name__}: {exc}"
    if cls is None:
        return "missing", "class not found"
    if not find_method(cls, rule.target_method):
        return "missing", "method not found"
    declared = inspect.getattr_static(cls, rule.target_method)
    if not interceptable(declared):
        return "error", f"{type(declared).__name__} is not an interceptable method"
    return "found", ""


_STATUS_STYLE = {"found": "success", "missing": "warning", "error": "error"}


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Config file to load.")
@click.option("--profile", "profiles", multiple=True, help="Active config profile (repeatable).")
def probe_command(config_path: str | None, profiles: tuple[str, ...]) -> None:
    """Check which rule targets exist in this interpreter."""
    try:
        module = HookModule.from_config(load_config(config_path, profiles))
    except ConfigurationException as exc:
        console.print(str(exc), style="error", markup=False)
        raise SystemExit(1) from exc

    load_context = ImportLoadContext()
    table = Table(title="Target probe", border_style="dim")
    table.add_column("Target", style="info")
    table.add_column("Status")
    table.add_column("Detail", style="dim")

    found = 0
    for rule in module.rules:
        status, detail = probe_rule(rule, load_context)
        found += status == "found"
        style = _STATUS_STYLE[status]
        table.add_row(rule.target, f"[{style}]{status}[/{style}]", detail)

    console.print(table)
    console.print(f"\n  {found} of {len(module.rules)} targets found\n")
