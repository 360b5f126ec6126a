"""Assemble the instrumented subclass from emitted overrides."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .. import converter
from ..elemental import JsonValue
from ..errors import InstrumentationError
from ..ir import CallableMethod
from ..markers import MARKER_ATTR, CallableMarker, MarkerKind
from ..nodes import JsonNode
from .accessor import PrivateMemberAccessor
from .emit import OverrideEmitter

logger = logging.getLogger(__name__)

CLASS_SUFFIX = "Instrumented"
ORIGIN_ATTR = "__instrumented_from__"


# ---------------------------------------------------------------------------
# Runtime support called from generated code
# ---------------------------------------------------------------------------


def convert_argument(value: object, json_type: type, name: str) -> JsonValue | None:
    """B -> A for one incoming argument. A values of the right kind pass through."""
    if value is None:
        return None
    if isinstance(value, JsonNode):
        value = converter.to_value(value)
    if not isinstance(value, json_type):
        raise TypeError(f"argument '{name}': {type(value).__name__} cannot be cast to {json_type.__name__}")
    return value


def convert_sequence(values: Iterable | None, json_type: type, name: str, carrier: Callable) -> object:
    """Element-wise convert_argument. The result has the same length."""
    if values is None:
        return None
    return carrier(convert_argument(v, json_type, f"{name}[{i}]") for i, v in enumerate(values))


def _final_init_subclass(cls, **kwargs):
    raise TypeError(f"{cls.__mro__[1].__qualname__} is final and cannot be subclassed")


# ---------------------------------------------------------------------------
# Class assembly
# ---------------------------------------------------------------------------


def class_name_for(parent: type) -> str:
    return parent.__name__ + CLASS_SUFFIX


def synthesize(
    parent: type,
    methods: list[CallableMethod],
    accessor: PrivateMemberAccessor,
    convert: bool = True,
    log_source: bool = False,
) -> type:
    """Generate a final subclass of parent overriding each of methods.

    With convert=False the overrides only forward and re-mark; this is what
    a host that knows a single JSON representation needs.
    """
    name = class_name_for(parent)
    emitter = OverrideEmitter(parent, name, convert)
    source = emitter.emit(methods)
    if log_source:
        logger.debug("generated source for %s:\n%s", name, source)
    namespace = emitter.namespace
    namespace["_jm_arg"] = convert_argument
    namespace["_jm_seq"] = convert_sequence
    namespace["_jm_result"] = converter.to_client_callable_result
    namespace["__name__"] = parent.__module__
    try:
        code = compile(source, f"<jsonmigrate {parent.__module__}.{name}>", "exec", dont_inherit=True)
        exec(code, namespace)
    except Exception as exc:
        raise InstrumentationError(f"Failed to generate overrides for {parent.__qualname__}: {exc}") from exc

    attrs: dict[str, object] = {
        "__module__": parent.__module__,
        "__qualname__": name,
        "__doc__": parent.__doc__,
        "__final__": True,
        "__init_subclass__": classmethod(_final_init_subclass),
        ORIGIN_ATTR: parent,
    }
    for method in methods:
        override = namespace[method.name]
        override.__doc__ = method.function.__doc__
        override.__module__ = parent.__module__
        override.__qualname__ = f"{name}.{method.name}"
        setattr(override, MARKER_ATTR, CallableMarker(MarkerKind.PLAIN, method.raises))
        attrs[method.name] = override
        logger.debug("override %s.%s (%s, %s)", name, method.name, method.marker_kind.value, method.visibility.value)
    for method in methods:
        handle_attr = emitter.handle_attrs.get(method.name)
        if handle_attr is not None:
            attrs[handle_attr] = accessor.handle_for(method)
    try:
        cls = type(parent)(name, (parent,), attrs)
    except TypeError as exc:
        raise InstrumentationError(f"Failed to create {name}: {exc}") from exc
    namespace["_jm_owner"] = cls
    return cls
