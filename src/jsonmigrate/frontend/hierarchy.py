"""Phase 2: Class hierarchy analysis.

Validates the shape of the class to instrument, walks its ancestors for
marked methods, and decides which of them need a converting override.
Every failure here is a ConfigurationError raised before any code is
generated.
"""

from __future__ import annotations

import array
import inspect
import logging
import typing

from ..errors import ConfigurationError
from ..ir import CallableMethod
from ..markers import MarkerKind, get_marker
from .signatures import extract_callable

logger = logging.getLogger(__name__)

_PRIMITIVES = (int, float, complex, bool, str, bytes, type(None))
_ARRAYS = (list, tuple, bytearray, array.array)


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


def is_final(cls: type) -> bool:
    return bool(getattr(cls, "__final__", False))


def check_parent_shape(parent: object) -> None:
    """Reject anything that cannot be subclassed into an instrumented class."""
    if parent is None:
        raise ConfigurationError("Class to instrument must not be None")
    if not isinstance(parent, type):
        raise ConfigurationError(f"{parent!r} is not a class")
    name = parent.__qualname__
    if getattr(parent, "_is_protocol", False) and typing.Protocol in parent.__mro__:
        raise ConfigurationError(f"{name} is an interface")
    if parent in _PRIMITIVES or issubclass(parent, _PRIMITIVES):
        raise ConfigurationError(f"{name} is a primitive type")
    if issubclass(parent, _ARRAYS):
        raise ConfigurationError(f"{name} is an array type")
    if is_final(parent):
        raise ConfigurationError(f"{name} is final")


def check_constructor(parent: type) -> None:
    """Require a constructor callable with no arguments.

    The class signature is tried first. If it cannot be read, one escalation
    attempt reads __init__ directly.
    """
    name = parent.__qualname__
    try:
        params = list(inspect.signature(parent).parameters.values())
    except (TypeError, ValueError):
        try:
            params = list(inspect.signature(parent.__init__).parameters.values())[1:]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{name} must have an accessible no-argument constructor") from exc
    required = [
        p
        for p in params
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if not required:
        return
    names = ", ".join(p.name for p in required)
    if all(p.name.startswith("_") for p in required):
        raise ConfigurationError(
            f"{name} must have an accessible no-argument constructor (requires private {names})"
        )
    raise ConfigurationError(f"{name} must have a no-argument constructor (requires {names})")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def ancestors(parent: type, base: type | None) -> list[type]:
    """parent and its ancestors, most-derived first, without base and its own ancestors."""
    stop = set(base.__mro__) if base is not None else {object}
    return [klass for klass in parent.__mro__ if klass not in stop]


def discover(parent: type, base: type | None) -> list[CallableMethod]:
    """Collect marked methods declared between parent and base.

    The most-derived definition of a name wins. An unmarked member of the
    same name, method or not, hides the marked method above it. A
    less-derived marked definition with a different parameter list is a
    collision.
    """
    found: dict[str, CallableMethod] = {}
    hidden: set[str] = set()
    for klass in ancestors(parent, base):
        for attr_name, attr in vars(klass).items():
            marker = get_marker(attr) if inspect.isfunction(attr) else None
            if marker is None:
                # properties and plain attributes hide marked methods too
                if attr_name not in found:
                    hidden.add(attr_name)
                continue
            method = extract_callable(attr_name, attr, klass, marker)
            if attr_name in found:
                winner = found[attr_name]
                if winner.param_key() != method.param_key():
                    raise ConfigurationError(
                        f"Method name collision: {attr_name} is declared in {winner.declaring.__qualname__} "
                        f"and {klass.__qualname__} with different parameters"
                    )
                continue
            if attr_name in hidden:
                continue
            found[attr_name] = method
    methods = list(found.values())
    logger.debug("discovered %d client callable(s) on %s: %s", len(methods), parent.__qualname__, [m.name for m in methods])
    return methods


def check_markers(methods: list[CallableMethod]) -> None:
    """The modern marker cannot take JSON parameters; those need the legacy marker."""
    for method in methods:
        if method.marker_kind is MarkerKind.PLAIN and method.json_params:
            param = method.json_params[0]
            raise ConfigurationError(
                f"{method.qualified()}: parameter '{param.name}' is a JSON value; "
                f"use @legacy_client_callable instead of @client_callable"
            )


def select_instrumentable(methods: list[CallableMethod], legacy: bool) -> list[CallableMethod]:
    """Methods that get a converting override under the given strategy.

    Legacy hosts only need legacy-marked methods re-marked. Modern hosts
    also need modern-marked methods that return a JSON value.
    """
    if legacy:
        return [m for m in methods if m.is_legacy]
    return [m for m in methods if m.is_legacy or m.returns_json]
