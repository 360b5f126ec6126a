"""Intermediate description of client callables.

Discovery (frontend) reads user classes into these records, synthesis
(backend) emits overrides from them. Records are built per instrument()
call and dropped once the generated class exists.

Architecture:
    user class -> frontend (signatures, hierarchy) -> [CallableMethod] -> backend -> derived class
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .elemental import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)
from .markers import MarkerKind
from .nodes import (
    ArrayNode,
    BooleanNode,
    DoubleNode,
    JsonNode,
    NullNode,
    ObjectNode,
    TextNode,
)

# ============================================================
# TYPE MAPPING
#
# Representation-A parameter and return types and the B types the
# converting override declares in their place.
# ============================================================

NODE_TYPE_FOR: dict[type, type] = {
    JsonObject: ObjectNode,
    JsonArray: ArrayNode,
    JsonString: TextNode,
    JsonNumber: DoubleNode,
    JsonBoolean: BooleanNode,
    JsonNull: NullNode,
    JsonValue: JsonNode,
}


def node_type_for(json_type: type) -> type:
    """B type standing in for an A type. Unknown A subclasses map to JsonNode."""
    for klass in json_type.__mro__:
        if klass in NODE_TYPE_FOR:
            return NODE_TYPE_FOR[klass]
    return JsonNode


# ============================================================
# RECORDS
# ============================================================


class Visibility(Enum):
    """Python's naming conventions standing in for access modifiers.

    | Visibility | Spelling | Reachable from a subclass body by name |
    |------------|----------|----------------------------------------|
    | public     | name     | yes                                    |
    | protected  | _name    | yes                                    |
    | private    | __name   | no, the attribute is mangled           |
    """

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class SequenceKind(Enum):
    """How a JSON parameter carries several values."""

    NONE = "none"
    VARARGS = "varargs"
    LIST = "list"
    TUPLE = "tuple"


@dataclass
class ParamInfo:
    """One parameter of a client callable, self excluded."""

    name: str
    kind: inspect._ParameterKind
    annotation: Any = inspect.Parameter.empty
    default: Any = inspect.Parameter.empty
    json_type: type | None = None
    sequence: SequenceKind = SequenceKind.NONE

    @property
    def is_json(self) -> bool:
        return self.json_type is not None

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty


@dataclass
class CallableMethod:
    """A marked method found on a user class.

    ``name`` is the attribute name as stored in the class namespace, so a
    private ``__reset`` declared on ``Panel`` is ``_Panel__reset``.
    """

    name: str
    declaring: type
    function: Callable
    marker_kind: MarkerKind
    visibility: Visibility = Visibility.PUBLIC
    params: list[ParamInfo] = field(default_factory=list)
    return_annotation: Any = inspect.Signature.empty
    return_json_type: type | None = None
    raises: tuple[type[BaseException], ...] = ()
    is_async: bool = False

    @property
    def is_legacy(self) -> bool:
        return self.marker_kind is MarkerKind.LEGACY

    @property
    def returns_json(self) -> bool:
        return self.return_json_type is not None

    @property
    def json_params(self) -> list[ParamInfo]:
        return [p for p in self.params if p.is_json]

    def param_key(self) -> tuple:
        """Parameter list identity used for collision checks."""
        return tuple((p.kind, p.annotation) for p in self.params)

    def qualified(self) -> str:
        return f"{self.declaring.__qualname__}.{self.name}"
