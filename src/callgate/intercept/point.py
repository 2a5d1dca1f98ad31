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
"""Interception points — before-call gates attached to host methods.

:func:`attach` replaces a method on its class with a wrapper. On every
call the wrapper classifies the arguments, runs the bound predicates and
either returns the substitute result without touching the original body,
or calls the original with the untouched arguments and returns whatever
it returns.

Supported method kinds: plain functions (instance methods),
``staticmethod``, ``classmethod``, and coroutine functions of each kind.
A Python attribute covers every call signature of the method, so one
wrapper intercepts all of its "overloads".
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from callgate.exceptions import AttachException
from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.matchers import ArgumentPredicate, evaluate
from callgate.intercept.values import ArgumentValue, classify_all

logger = structlog.get_logger("callgate.point")

_POINT_ATTR = "__callgate_point__"


@dataclass
class Invocation:
    """One live call observed by an interception point.

    Attributes:
        receiver: Instance or class the method was invoked on; ``None``
            for static methods.
        method_name: Name of the intercepted method.
        args: Positional arguments, receiver excluded.
        kwargs: Keyword arguments.
        values: Classified arguments (positional, then keyword values).
        handled: ``True`` when a binding matched and the original is skipped.
        result: Substitute result when *handled*.
    """

    receiver: Any
    method_name: str
    args: tuple
    kwargs: dict[str, Any]
    values: tuple[ArgumentValue, ...] = field(default_factory=tuple)
    handled: bool = False
    result: Any = None


@dataclass(frozen=True)
class HookBinding:
    """A predicate paired with the substitution it triggers."""

    matcher: ArgumentPredicate
    action: SubstitutionAction


class InterceptionPoint:
    """Live attachment between one (class, method) pair and its bindings.

    Bindings are held in a tuple that is only ever replaced, never mutated,
    so concurrent callers read a consistent snapshot without locking.
    """

    def __init__(self, owner: type, method_name: str, original: Any, log_matches: bool = False) -> None:
        self.owner = owner
        self.method_name = method_name
        self._original = original
        self._log_matches = log_matches
        self._bindings: tuple[HookBinding, ...] = ()

    @property
    def target(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}#{self.method_name}"

    @property
    def original(self) -> Any:
        """The attribute as it was declared before attachment."""
        return self._original

    @property
    def bindings(self) -> tuple[HookBinding, ...]:
        return self._bindings

    def add_binding(self, binding: HookBinding) -> None:
        self._bindings = (*self._bindings, binding)

    def before_call(self, receiver: Any, args: tuple, kwargs: dict[str, Any]) -> Invocation:
        """Decide whether this call is handled.

        Never raises: an argument that faults while being classified, or a
        predicate that faults, leaves the invocation unhandled so the
        original runs.
        """
        invocation = Invocation(receiver=receiver, method_name=self.method_name, args=args, kwargs=kwargs)
        try:
            invocation.values = classify_all((*args, *kwargs.values()))
        except Exception:
            return invocation
        for binding in self._bindings:
            if evaluate(binding.matcher, invocation.values):
                invocation.handled = True
                invocation.result = binding.action.result
                if self._log_matches:
                    self._record_match(binding)
                break
        return invocation

    def _record_match(self, binding: HookBinding) -> None:
        try:
            logger.info(
                "call_intercepted",
                target=self.target,
                matcher=binding.matcher.describe(),
                action=binding.action.value,
            )
        except Exception:
            # Logging is best-effort on the host's call path.
            pass

    def __repr__(self) -> str:
        return f"InterceptionPoint({self.target}, bindings={len(self._bindings)})"


def interceptable(declared: Any) -> bool:
    """Return whether a statically looked-up attribute is a supported method kind."""
    if isinstance(declared, (staticmethod, classmethod)):
        return inspect.isfunction(declared.__func__)
    return inspect.isfunction(declared)


def point_of(attr: Any) -> InterceptionPoint | None:
    """Return the interception point behind a class attribute, if any."""
    fn = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
    return getattr(fn, _POINT_ATTR, None)


def attach(
    cls: type,
    method_name: str,
    predicate: ArgumentPredicate,
    action: SubstitutionAction,
    *,
    log_matches: bool = False,
) -> InterceptionPoint:
    """Attach a before-call gate for *method_name* on *cls*.

    A second attach for the same (class, method) pair appends a binding to
    the existing point; bindings are evaluated in attach order and the
    first match wins.

    Raises:
        AttachException: The attribute is missing, is not a supported
            method kind, or the class refuses the replacement.
    """
    context = {"target_class": f"{cls.__module__}.{cls.__qualname__}", "target_method": method_name}
    try:
        declared = inspect.getattr_static(cls, method_name)
    except AttributeError:
        raise AttachException(f"{cls.__qualname__} has no attribute '{method_name}'", context=context) from None

    binding = HookBinding(matcher=predicate, action=action)

    existing = point_of(declared)
    if existing is not None and existing.owner is cls:
        existing.add_binding(binding)
        return existing

    point = InterceptionPoint(cls, method_name, declared, log_matches=log_matches)
    point.add_binding(binding)
    replacement = _build_replacement(point, declared, context)

    try:
        setattr(cls, method_name, replacement)
    except (TypeError, AttributeError) as exc:
        raise AttachException(f"Cannot replace {point.target}: {exc}", context=context) from exc
    return point


def _build_replacement(point: InterceptionPoint, declared: Any, context: dict[str, Any]) -> Any:
    if not interceptable(declared):
        raise AttachException(
            f"{point.target} is a {type(declared).__name__}, not an interceptable method",
            context=context,
        )
    if isinstance(declared, staticmethod):
        return staticmethod(_wrap(point, declared.__func__, has_receiver=False))
    if isinstance(declared, classmethod):
        return classmethod(_wrap(point, declared.__func__, has_receiver=True))
    return _wrap(point, declared, has_receiver=True)


def _wrap(point: InterceptionPoint, fn: Callable[..., Any], has_receiver: bool) -> Callable[..., Any]:
    """Build the wrapper that gates *fn* behind *point*."""
    skip = 1 if has_receiver else 0

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            receiver = args[0] if skip and args else None
            invocation = point.before_call(receiver, args[skip:], kwargs)
            if invocation.handled:
                return invocation.result
            return await fn(*args, **kwargs)

        setattr(async_wrapper, _POINT_ATTR, point)
        return async_wrapper

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        receiver = args[0] if skip and args else None
        invocation = point.before_call(receiver, args[skip:], kwargs)
        if invocation.handled:
            return invocation.result
        return fn(*args, **kwargs)

    setattr(wrapper, _POINT_ATTR, point)
    return wrapper
