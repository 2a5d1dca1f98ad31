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
"""Callgate CLI — inspect configured hook rules and probe their targets."""

from __future__ import annotations

import click

from callgate.cli.probe import probe_command
from callgate.cli.rules import rules_command


@click.group()
@click.version_option(package_name="callgate")
def cli() -> None:
    """Callgate — conditional call interception diagnostics."""


cli.add_command(rules_command, name="rules")
cli.add_command(probe_command, name="probe")
