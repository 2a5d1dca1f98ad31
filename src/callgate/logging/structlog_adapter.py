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
"""StructlogAdapter — structlog configured from ``callgate.logging.*``.

Records leave the calling thread through a :class:`logging.handlers.QueueHandler`
and are written by a :class:`logging.handlers.QueueListener` thread, so a
log line emitted inside an intercepted host call never waits on stream I/O.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
import queue
import sys

import structlog

from callgate.core.config import Config

_active_listener: logging.handlers.QueueListener | None = None


def _stop_active_listener() -> None:
    global _active_listener
    if _active_listener is not None:
        _active_listener.stop()
        _active_listener = None


atexit.register(_stop_active_listener)


class StructlogAdapter:
    """Logging adapter backed by structlog.

    Reads ``callgate.logging.level.root``, per-logger levels under
    ``callgate.logging.level.<name>`` and ``callgate.logging.format``
    (``console`` or ``json``).
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    @property
    def listener(self) -> logging.handlers.QueueListener | None:
        """The listener draining the log queue, while one is running."""
        return _active_listener

    def configure(self, config: Config) -> None:
        level_section = dict(config.get_section("callgate.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("callgate.logging.format", "console")).lower()

        self._setup_structlog()
        self._setup_queue()
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def shutdown(self) -> None:
        """Flush queued records and stop the listener thread."""
        _stop_active_listener()

    def _setup_structlog(self) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        if self._format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        # Module-level loggers are created at import time, before the host
        # hands over its config; they must pick up this configuration.
        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _setup_queue(self) -> None:
        global _active_listener
        _stop_active_listener()

        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter("%(message)s"))

        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.addHandler(logging.handlers.QueueHandler(log_queue))
        root.setLevel(getattr(logging, self._root_level, logging.INFO))

        _active_listener = logging.handlers.QueueListener(log_queue, stream_handler, respect_handler_level=True)
        _active_listener.start()
