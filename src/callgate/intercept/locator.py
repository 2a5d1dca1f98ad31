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
"""Target locator — resolve class identifiers inside a load context.

A host build that lacks a class is normal: :func:`locate` returns ``None``
instead of raising, and the installer records the rule as missing.
"""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger("callgate.locator")


@runtime_checkable
class LoadContext(Protocol):
    """Resolves class identifiers the way the host's loader would.

    ``resolve`` raises :class:`LookupError` or :class:`AttributeError` when
    the identifier does not exist. Any other error means the target exists
    but could not be loaded.
    """

    def resolve(self, class_identifier: str) -> Any: ...


class ImportLoadContext:
    """Resolve dotted paths (``package.module.Class[.Nested]``) via importlib.

    The longest importable module prefix wins; the remaining segments are
    walked as attributes.
    """

    def resolve(self, class_identifier: str) -> Any:
        parts = class_identifier.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                obj: Any = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                # Only skip when the prefix itself is absent; a missing
                # dependency inside an existing module is a real failure.
                if exc.name is not None and not _is_prefix(exc.name, module_name):
                    raise
                continue
            for attr in parts[split:]:
                obj = getattr(obj, attr)
            return obj
        raise LookupError(f"No importable module in '{class_identifier}'")


class NamespaceLoadContext:
    """Resolve identifiers from an explicit name → class mapping."""

    def __init__(self, classes: Mapping[str, Any]) -> None:
        self._classes = dict(classes)

    def resolve(self, class_identifier: str) -> Any:
        try:
            return self._classes[class_identifier]
        except KeyError:
            raise LookupError(class_identifier) from None


def _is_prefix(package: str, module_name: str) -> bool:
    return module_name == package or module_name.startswith(package + ".")


def locate(class_identifier: str, load_context: LoadContext) -> type | None:
    """Return the class named *class_identifier*, or ``None`` if absent.

    Identifiers that resolve to something other than a class also count
    as absent.
    """
    try:
        candidate = load_context.resolve(class_identifier)
    except (LookupError, AttributeError):
        logger.debug("target_class_missing", target_class=class_identifier)
        return None

    if not inspect.isclass(candidate):
        logger.debug(
            "target_not_a_class",
            target_class=class_identifier,
            resolved_type=type(candidate).__name__,
        )
        return None
    return candidate


def find_method(cls: type, method_name: str) -> bool:
    """Return whether *cls* (or its MRO) declares *method_name* at all.

    Whether the attribute is a method that can be intercepted is decided
    by :func:`~callgate.intercept.point.attach`.
    """
    try:
        inspect.getattr_static(cls, method_name)
    except AttributeError:
        return False
    return True
