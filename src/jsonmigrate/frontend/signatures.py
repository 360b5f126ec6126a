"""Phase 1: Callable signature collection.

Turns one marked function into a CallableMethod: visibility from the
attribute name, parameters and return type from the resolved signature,
and which of them are JSON-tree-shaped.
"""

from __future__ import annotations

import collections.abc
import inspect
import types
import typing
from typing import Any, Callable

from ..elemental import JsonValue
from ..errors import ConfigurationError
from ..ir import CallableMethod, ParamInfo, SequenceKind, Visibility
from ..markers import CallableMarker

_SEQUENCE_ORIGINS = {
    list: SequenceKind.LIST,
    tuple: SequenceKind.TUPLE,
    collections.abc.Sequence: SequenceKind.LIST,
}


def visibility_of(attr_name: str, declaring: type) -> Visibility:
    """Classify an attribute name. Dunder names are public."""
    if attr_name.startswith("__") and attr_name.endswith("__"):
        return Visibility.PUBLIC
    stripped = declaring.__name__.lstrip("_")
    if stripped and attr_name.startswith("_" + stripped + "__"):
        return Visibility.PRIVATE
    if attr_name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def json_type_of(annotation: Any) -> type | None:
    """A type when the annotation is a representation-A class, else None."""
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, type) and issubclass(annotation, JsonValue):
        return annotation
    return None


def json_sequence_of(annotation: Any) -> tuple[type | None, SequenceKind]:
    """Element type and carrier for list[X], tuple[X, ...] and Sequence[X] of A types."""
    annotation = _unwrap_optional(annotation)
    direct = json_type_of(annotation)
    if direct is not None:
        return direct, SequenceKind.NONE
    origin = typing.get_origin(annotation)
    if origin not in _SEQUENCE_ORIGINS:
        return None, SequenceKind.NONE
    args = typing.get_args(annotation)
    if origin is tuple:
        # Only homogeneous tuples: tuple[X, ...]
        if len(args) != 2 or args[1] is not Ellipsis:
            return None, SequenceKind.NONE
        args = args[:1]
    if len(args) != 1:
        return None, SequenceKind.NONE
    element = json_type_of(args[0])
    if element is None:
        return None, SequenceKind.NONE
    return element, _SEQUENCE_ORIGINS[origin]


def resolve_signature(func: Callable, where: str) -> inspect.Signature:
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, SyntaxError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"{where}: cannot resolve signature: {exc}") from exc


def _make_param(param: inspect.Parameter) -> ParamInfo:
    json_type: type | None = None
    sequence = SequenceKind.NONE
    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        # *args: JsonObject annotates each element
        json_type = json_type_of(param.annotation)
        if json_type is not None:
            sequence = SequenceKind.VARARGS
    elif param.kind is not inspect.Parameter.VAR_KEYWORD:
        json_type, sequence = json_sequence_of(param.annotation)
    return ParamInfo(
        name=param.name,
        kind=param.kind,
        annotation=param.annotation,
        default=param.default,
        json_type=json_type,
        sequence=sequence,
    )


def extract_callable(
    attr_name: str,
    func: Callable,
    declaring: type,
    marker: CallableMarker,
) -> CallableMethod:
    """Build a CallableMethod from a marked function found in vars(declaring)."""
    where = f"{declaring.__qualname__}.{attr_name}"
    sig = resolve_signature(func, where)
    params = list(sig.parameters.values())
    if not params or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        raise ConfigurationError(f"{where}: client callable must take self as first parameter")
    return CallableMethod(
        name=attr_name,
        declaring=declaring,
        function=func,
        marker_kind=marker.kind,
        visibility=visibility_of(attr_name, declaring),
        params=[_make_param(p) for p in params[1:]],
        return_annotation=sig.return_annotation,
        return_json_type=json_type_of(sig.return_annotation),
        raises=marker.raises,
        is_async=inspect.iscoroutinefunction(func),
    )
