"""Callable markers: method-level metadata the host discovers.

Two decorators mark a method as invocable from the client:

    @client_callable            modern marker, the only one the host knows
    @legacy_client_callable     JSON parameters and return value converted

Both may be used bare or called with a ``raises`` tuple declaring the
exceptions the method is documented to raise. The marker is stored on the
function as ``__client_callable__``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

MARKER_ATTR = "__client_callable__"


class MarkerKind(Enum):
    PLAIN = "callable"
    LEGACY = "legacy"


@dataclass(frozen=True)
class CallableMarker:
    kind: MarkerKind
    raises: tuple[type[BaseException], ...] = ()


def _marker(kind: MarkerKind, func: Callable | None, raises: tuple[type[BaseException], ...]):
    def apply(f: Callable) -> Callable:
        if isinstance(f, (staticmethod, classmethod)):
            raise TypeError(f"@{_DECORATOR_NAMES[kind]} cannot mark a {type(f).__name__}")
        setattr(f, MARKER_ATTR, CallableMarker(kind, tuple(raises)))
        return f

    if func is not None:
        return apply(func)
    return apply


_DECORATOR_NAMES = {
    MarkerKind.PLAIN: "client_callable",
    MarkerKind.LEGACY: "legacy_client_callable",
}


def client_callable(func: Callable | None = None, *, raises: tuple[type[BaseException], ...] = ()):
    """Mark a method as callable from the client."""
    return _marker(MarkerKind.PLAIN, func, raises)


def legacy_client_callable(func: Callable | None = None, *, raises: tuple[type[BaseException], ...] = ()):
    """Mark a method whose JSON parameters and result need conversion."""
    return _marker(MarkerKind.LEGACY, func, raises)


def get_marker(obj: object) -> CallableMarker | None:
    marker = getattr(obj, MARKER_ATTR, None)
    if isinstance(marker, CallableMarker):
        return marker
    return None


def find_client_callables(cls: type) -> dict[str, Callable]:
    """Return what the host would dispatch to: attribute name -> function.

    The most-derived definition of each name wins, and it is listed only if
    it carries the plain marker. Legacy markers are invisible to the host.
    """
    result: dict[str, Callable] = {}
    seen: set[str] = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            marker = get_marker(attr)
            if marker is not None and marker.kind is MarkerKind.PLAIN:
                result[name] = attr
    return result
