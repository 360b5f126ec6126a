"""Invocation handles for private client callables.

A private method is stored under its mangled name in the declaring class's
own namespace. The generated override reaches it through a MethodHandle
held as a class attribute of the generated class, resolved once on first
use and reused afterwards.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from ..errors import InstrumentationError
from ..ir import CallableMethod


class MethodHandle:
    """Lazily resolved reference to a function in a class namespace.

    Arguments and results pass through unchanged. Conversion is done by the
    override that calls the handle.
    """

    def __init__(self, declaring: type, attr_name: str) -> None:
        self.declaring = declaring
        self.attr_name = attr_name
        self._target: Callable | None = None
        self._lock = threading.Lock()

    @property
    def resolved(self) -> bool:
        return self._target is not None

    def resolve(self) -> Callable:
        target = self._target
        if target is not None:
            return target
        with self._lock:
            if self._target is None:
                self._target = self._lookup()
            return self._target

    def _lookup(self) -> Callable:
        where = f"{self.declaring.__qualname__}.{self.attr_name}"
        try:
            attr = vars(self.declaring)[self.attr_name]
        except KeyError as exc:
            raise InstrumentationError(f"Cannot resolve handle for {where}") from exc
        if not callable(attr):
            raise InstrumentationError(f"Cannot resolve handle for {where}: not callable")
        return attr

    def invoke(self, instance: object, /, *args: Any, **kwargs: Any) -> Any:
        return self.resolve()(instance, *args, **kwargs)

    __call__ = invoke

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else "unresolved"
        return f"MethodHandle({self.declaring.__qualname__}.{self.attr_name}, {state})"


class PrivateMemberAccessor:
    """Hands out one MethodHandle per (declaring class, attribute name)."""

    def __init__(self) -> None:
        self._handles: dict[tuple[type, str], MethodHandle] = {}
        self._lock = threading.Lock()

    def handle_for(self, method: CallableMethod) -> MethodHandle:
        key = (method.declaring, method.name)
        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                handle = MethodHandle(method.declaring, method.name)
                self._handles[key] = handle
            return handle

    def forget_scope(self, scope: str) -> None:
        """Drop handles for classes declared in the given module."""
        with self._lock:
            for key in [k for k in self._handles if k[0].__module__ == scope]:
                del self._handles[key]

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()
