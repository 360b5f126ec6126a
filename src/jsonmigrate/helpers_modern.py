"""Dispatch strategy for hosts that speak representation B."""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable

from . import converter
from .elemental import JsonValue
from .helpers import JsonMigrationHelper
from .nodes import JsonNode

_ANY_ELEMENT = (inspect.Parameter.empty, object, typing.Any)


def _accepts_node(annotation: Any) -> bool:
    """Whether a parameter declared this way takes a B node."""
    return isinstance(annotation, type) and issubclass(annotation, JsonNode)


def _element_accepts_node(annotation: Any) -> bool:
    """Whether a *args element declared this way may be a B node."""
    if annotation in _ANY_ELEMENT:
        return True
    return isinstance(annotation, type) and (issubclass(annotation, JsonNode) or issubclass(JsonNode, annotation))


def _signature(method: Callable) -> inspect.Signature:
    try:
        return inspect.signature(method, eval_str=True)
    except NameError:
        return inspect.signature(method)


def _as_node(value: Any) -> Any:
    if isinstance(value, JsonValue) and not isinstance(value, JsonNode):
        return converter.to_node(value)
    return value


class ModernJsonMigrationHelper(JsonMigrationHelper):
    """Hosts with representation B. Values cross the boundary converted."""

    legacy = False

    def convert_to_json_value(self, obj: object) -> JsonValue | None:
        return converter.to_canonical(obj)

    def convert_to_client_callable_result(self, value: Any) -> Any:
        return converter.to_client_callable_result(value)

    def invoke(self, method: Callable, instance: object, *args: Any) -> Any:
        """Call method(instance, *args), converting A arguments the host declares as B.

        Positional parameters annotated with a JsonNode type get the matching
        argument converted. Arguments beyond them fill *args, and each A
        element is converted when the *args element type admits a node.
        """
        params = list(_signature(method).parameters.values())[1:]
        positional = [
            p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
        var_positional = next((p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
        converted = list(args)
        for i, value in enumerate(args):
            if i < len(positional):
                if _accepts_node(positional[i].annotation):
                    converted[i] = _as_node(value)
            elif var_positional is not None and _element_accepts_node(var_positional.annotation):
                converted[i] = _as_node(value)
        return method(instance, *converted)
