"""Representation B: the newer host's persistent JSON node tree.

Nodes are immutable and compare structurally. Updating an object or array
node returns a new node that shares the untouched children. Numbers are
stored as float only; the int/float distinction does not survive here.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Iterable, Iterator, Mapping


class JsonNodeType(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    MISSING = "missing"
    BINARY = "binary"


class JsonNode:
    """Base of all representation-B nodes. Abstract."""

    __slots__ = ()

    @property
    def node_type(self) -> JsonNodeType:
        raise NotImplementedError

    def size(self) -> int:
        return 0

    def get(self, key: str | int) -> JsonNode | None:
        return None

    def property_names(self) -> list[str]:
        return []

    def elements(self) -> Iterator[JsonNode]:
        return iter(())

    def as_text(self) -> str:
        return ""

    def as_double(self) -> float:
        return 0.0

    def as_boolean(self) -> bool:
        return False

    def is_container(self) -> bool:
        return False

    def to_string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()})"


class ObjectNode(JsonNode):
    __slots__ = ("_children", "_index")

    def __init__(self, children: Mapping[str, JsonNode] | Iterable[tuple[str, JsonNode]] = ()) -> None:
        items = children.items() if isinstance(children, Mapping) else children
        index: dict[str, JsonNode] = {}
        for name, child in items:
            if not isinstance(child, JsonNode):
                raise TypeError(f"child '{name}' is not a JsonNode: {type(child).__name__}")
            index[str(name)] = child
        self._index = index
        self._children = tuple(index.items())

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.OBJECT

    def size(self) -> int:
        return len(self._children)

    def get(self, key: str | int) -> JsonNode | None:
        if not isinstance(key, str):
            return None
        return self._index.get(key)

    def property_names(self) -> list[str]:
        return [name for name, _ in self._children]

    def properties(self) -> tuple[tuple[str, JsonNode], ...]:
        return self._children

    def elements(self) -> Iterator[JsonNode]:
        return (child for _, child in self._children)

    def is_container(self) -> bool:
        return True

    def with_property(self, name: str, child: JsonNode) -> ObjectNode:
        updated = dict(self._index)
        updated[name] = child
        return ObjectNode(updated)

    def without_property(self, name: str) -> ObjectNode:
        return ObjectNode((k, v) for k, v in self._children if k != name)

    def to_string(self) -> str:
        parts = [json.dumps(k) + ":" + v.to_string() for k, v in self._children]
        return "{" + ",".join(parts) + "}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectNode):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
        return hash((JsonNodeType.OBJECT, frozenset(self._children)))


class ArrayNode(JsonNode):
    __slots__ = ("_items",)

    def __init__(self, items: Iterable[JsonNode] = ()) -> None:
        items = tuple(items)
        for i, item in enumerate(items):
            if not isinstance(item, JsonNode):
                raise TypeError(f"element {i} is not a JsonNode: {type(item).__name__}")
        self._items = items

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.ARRAY

    def size(self) -> int:
        return len(self._items)

    def get(self, key: str | int) -> JsonNode | None:
        if isinstance(key, int) and 0 <= key < len(self._items):
            return self._items[key]
        return None

    def elements(self) -> Iterator[JsonNode]:
        return iter(self._items)

    def is_container(self) -> bool:
        return True

    def with_element(self, item: JsonNode) -> ArrayNode:
        return ArrayNode(self._items + (item,))

    def to_string(self) -> str:
        return "[" + ",".join(v.to_string() for v in self._items) + "]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayNode):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((JsonNodeType.ARRAY, self._items))


class TextNode(JsonNode):
    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = str(value)

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.STRING

    def as_text(self) -> str:
        return self._value

    def to_string(self) -> str:
        return json.dumps(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextNode):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((JsonNodeType.STRING, self._value))


class DoubleNode(JsonNode):
    __slots__ = ("_value",)

    def __init__(self, value: float) -> None:
        if isinstance(value, bool):
            raise TypeError("boolean is not a number")
        self._value = float(value)

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.NUMBER

    def double_value(self) -> float:
        return self._value

    def as_double(self) -> float:
        return self._value

    def as_text(self) -> str:
        return repr(self._value)

    def to_string(self) -> str:
        if math.isfinite(self._value):
            return repr(self._value)
        return json.dumps(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoubleNode):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((JsonNodeType.NUMBER, self._value))


class BooleanNode(JsonNode):
    __slots__ = ("_value",)

    def __init__(self, value: bool) -> None:
        self._value = bool(value)

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.BOOLEAN

    def as_boolean(self) -> bool:
        return self._value

    def as_text(self) -> str:
        return "true" if self._value else "false"

    def to_string(self) -> str:
        return self.as_text()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BooleanNode):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((JsonNodeType.BOOLEAN, self._value))


class NullNode(JsonNode):
    __slots__ = ()

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.NULL

    def as_text(self) -> str:
        return "null"

    def to_string(self) -> str:
        return "null"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NullNode):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(JsonNodeType.NULL)


class MissingNode(JsonNode):
    """Placeholder for a path that resolved to nothing. Not a JSON value."""

    __slots__ = ()

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.MISSING

    def to_string(self) -> str:
        return ""


class BinaryNode(JsonNode):
    """Raw bytes. Has no JSON tree counterpart."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @property
    def node_type(self) -> JsonNodeType:
        return JsonNodeType.BINARY

    def binary_value(self) -> bytes:
        return self._data

    def to_string(self) -> str:
        return json.dumps(self._data.hex())


class JsonNodeFactory:
    """Factory for representation-B nodes."""

    TRUE = BooleanNode(True)
    FALSE = BooleanNode(False)
    NULL = NullNode()
    MISSING = MissingNode()

    def object_node(self, children: Mapping[str, JsonNode] | Iterable[tuple[str, JsonNode]] = ()) -> ObjectNode:
        return ObjectNode(children)

    def array_node(self, items: Iterable[JsonNode] = ()) -> ArrayNode:
        return ArrayNode(items)

    def text_node(self, value: str) -> TextNode:
        return TextNode(value)

    def number_node(self, value: float) -> DoubleNode:
        return DoubleNode(value)

    def boolean_node(self, value: bool) -> BooleanNode:
        return self.TRUE if value else self.FALSE

    def null_node(self) -> NullNode:
        return self.NULL

    def missing_node(self) -> MissingNode:
        return self.MISSING


node_factory = JsonNodeFactory()
