"""Nodes that belong to both representations.

A client callable that was written against representation A returns A values,
but a newer host only accepts B nodes. The converting override returns one of
these instead: a real B node (children are plain B nodes) that still answers
the A API for callers that hold on to the result.

Scalar accessors that A defines on every value (as_boolean, as_number,
as_string) are not meaningful on containers seen as nodes and raise TypeError.
"""

from __future__ import annotations

from .elemental import JsonType, JsonValue, format_number
from .nodes import ArrayNode, BooleanNode, DoubleNode, JsonNode, NullNode, ObjectNode, TextNode


class _ElementalNode(JsonValue):
    """Mixin giving a B node the A surface. Listed first in the bases, so A methods win."""

    __slots__ = ()

    def to_json(self) -> str:
        return self.to_string()

    def js_equals(self, other: JsonValue) -> bool:
        if isinstance(other, JsonNode):
            return self == other
        return JsonValue.js_equals(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()})"


class _ElementalContainer(_ElementalNode):
    __slots__ = ()

    def as_boolean(self) -> bool:
        raise TypeError(f"{type(self).__name__} does not support as_boolean()")

    def as_number(self) -> float:
        raise TypeError(f"{type(self).__name__} does not support as_number()")

    def as_string(self) -> str:
        raise TypeError(f"{type(self).__name__} does not support as_string()")


class ElementalObjectNode(_ElementalContainer, ObjectNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.OBJECT

    def to_native(self) -> object:
        return {name: _native(child) for name, child in self.properties()}


class ElementalArrayNode(_ElementalContainer, ArrayNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.ARRAY

    def to_native(self) -> object:
        return [_native(item) for item in self.elements()]


class ElementalNumberNode(_ElementalNode, DoubleNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.NUMBER

    def as_boolean(self) -> bool:
        return self.double_value() != 0

    def as_number(self) -> float:
        return self.double_value()

    def as_string(self) -> str:
        return format_number(self.double_value())

    def to_json(self) -> str:
        # 42.0 renders as 42; fractions keep their full expansion
        return format_number(self.double_value())

    def to_native(self) -> object:
        return self.double_value()


class ElementalTextNode(_ElementalNode, TextNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.STRING

    def as_boolean(self) -> bool:
        return len(self.as_text()) > 0

    def as_number(self) -> float:
        try:
            return float(self.as_text())
        except ValueError:
            return float("nan")

    def as_string(self) -> str:
        return self.as_text()

    def to_native(self) -> object:
        return self.as_text()


class ElementalBooleanNode(_ElementalNode, BooleanNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.BOOLEAN

    def as_boolean(self) -> bool:
        return BooleanNode.as_boolean(self)

    def as_number(self) -> float:
        return 1.0 if self.as_boolean() else 0.0

    def as_string(self) -> str:
        return self.as_text()

    def to_native(self) -> object:
        return self.as_boolean()


class ElementalNullNode(_ElementalNode, NullNode):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.NULL

    def as_boolean(self) -> bool:
        return False

    def as_number(self) -> float:
        return 0.0

    def as_string(self) -> str:
        return "null"

    def to_native(self) -> object:
        return None


def _native(node: JsonNode) -> object:
    if isinstance(node, ObjectNode):
        return {name: _native(child) for name, child in node.properties()}
    if isinstance(node, ArrayNode):
        return [_native(item) for item in node.elements()]
    if isinstance(node, DoubleNode):
        return node.double_value()
    if isinstance(node, TextNode):
        return node.as_text()
    if isinstance(node, BooleanNode):
        return node.as_boolean()
    return None
