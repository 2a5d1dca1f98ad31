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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.theme import Theme

from callgate.core.config import Config

CALLGATE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "callgate": "bold magenta",
    "dim": "dim",
})

console = Console(theme=CALLGATE_THEME)


def load_config(config_path: str | None, profiles: tuple[str, ...] = ()) -> Config:
    """Load an explicit config file, or discover one in the working directory."""
    if config_path:
        return Config.from_file(config_path)
    return Config.from_sources(Path.cwd(), active_profiles=list(profiles))
