"""Instrumentation engine: user class -> instrumented subclass.

The engine runs the frontend, returns the class unchanged when nothing
needs an override, and otherwise generates (once) a final subclass named
``<Parent>Instrumented``. Generated classes are cached per module scope in
an InstrumentationRegistry that the owner tears down explicitly.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future

from . import frontend
from .backend import ORIGIN_ATTR, PrivateMemberAccessor, synthesize
from .host import Component

logger = logging.getLogger(__name__)


class _ScopeState:
    """Single-flight map from parent class to its generated class."""

    def __init__(self) -> None:
        self.slots: dict[type, Future] = {}

    def claim(self, parent: type) -> tuple[Future, bool]:
        """Return the slot for parent and whether this caller created it."""
        future: Future = Future()
        existing = self.slots.setdefault(parent, future)
        return existing, existing is future

    def discard(self, parent: type, future: Future) -> None:
        if self.slots.get(parent) is future:
            del self.slots[parent]


class InstrumentationRegistry:
    """Scope name -> per-scope generated classes. Coarse-locked."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._scopes: dict[str, _ScopeState] = {}

    def scope(self, name: str) -> _ScopeState:
        with self._lock:
            state = self._scopes.get(name)
            if state is None:
                state = _ScopeState()
                self._scopes[name] = state
            return state

    def lookup(self, parent: type) -> type | None:
        """The generated class for parent, if generation finished successfully."""
        with self._lock:
            state = self._scopes.get(parent.__module__)
        if state is None:
            return None
        future = state.slots.get(parent)
        if future is None or not future.done() or future.exception() is not None:
            return None
        return future.result()

    def scopes(self) -> list[str]:
        with self._lock:
            return list(self._scopes)

    def release_scope(self, name: str) -> None:
        with self._lock:
            self._scopes.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._scopes.clear()


class InstrumentationEngine:
    """Instrument component classes for one host strategy.

    ``legacy`` engines only re-mark legacy callables; modern engines also
    convert JSON arguments and results between representations.
    """

    def __init__(self, legacy: bool = False, base: type | None = Component, log_source: bool = False) -> None:
        self.legacy = legacy
        self.base = base
        self.log_source = log_source
        self.registry = InstrumentationRegistry()
        self.accessor = PrivateMemberAccessor()
        self.generation_count = 0
        self._count_lock = threading.Lock()

    def instrument(self, parent: type) -> type:
        """Return parent itself, or its cached instrumented subclass."""
        if isinstance(parent, type):
            if ORIGIN_ATTR in vars(parent):
                return parent
            cached = self.registry.lookup(parent)
            if cached is not None:
                return cached
        methods = frontend.analyze(parent, self.base, self.legacy)
        if not methods:
            logger.debug("%s needs no instrumentation", parent.__qualname__)
            return parent
        state = self.registry.scope(parent.__module__)
        future, owner = state.claim(parent)
        if not owner:
            return future.result()
        try:
            cls = synthesize(parent, methods, self.accessor, convert=not self.legacy, log_source=self.log_source)
        except BaseException as exc:
            state.discard(parent, future)
            future.set_exception(exc)
            raise
        with self._count_lock:
            self.generation_count += 1
        logger.info("generated %s.%s with %d override(s)", cls.__module__, cls.__qualname__, len(methods))
        future.set_result(cls)
        return cls

    def release_scope(self, scope: str) -> None:
        """Forget every class generated for the given module."""
        self.registry.release_scope(scope)
        self.accessor.forget_scope(scope)

    def clear(self) -> None:
        self.registry.clear()
        self.accessor.clear()
