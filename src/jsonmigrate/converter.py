"""Structural conversion between the two JSON tree representations.

Representation A (elemental) is the canonical carrier. Every conversion goes
through it: to_canonical() brings any value into A, from_canonical() builds
the requested representation from A.

    | Kind    | A            | B            | Round trip                 |
    |---------|--------------|--------------|----------------------------|
    | object  | JsonObject   | ObjectNode   | exact, key order preserved |
    | array   | JsonArray    | ArrayNode    | exact, position preserved  |
    | string  | JsonString   | TextNode     | exact                      |
    | boolean | JsonBoolean  | BooleanNode  | exact                      |
    | null    | JsonNull     | NullNode     | exact, distinct from None  |
    | number  | JsonNumber   | DoubleNode   | int/float distinction lost |

A DoubleNode read back through A renders integral values without a
fractional suffix (42.0 becomes 42). That loss is accepted behavior.
"""

from __future__ import annotations

from enum import Enum

from .bridge import (
    ElementalArrayNode,
    ElementalBooleanNode,
    ElementalNullNode,
    ElementalNumberNode,
    ElementalObjectNode,
    ElementalTextNode,
)
from .elemental import (
    Json,
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)
from .errors import UnsupportedSourceKindError, UnsupportedTargetKindError
from .nodes import (
    ArrayNode,
    BooleanNode,
    DoubleNode,
    JsonNode,
    NullNode,
    ObjectNode,
    TextNode,
    node_factory,
)

NODE_TO_ELEMENTAL = "node -> elemental"
ELEMENTAL_TO_NODE = "elemental -> node"
TO_CANONICAL = "to canonical"
FROM_CANONICAL = "from canonical"


class Representation(Enum):
    ELEMENTAL = "elemental"
    NODE = "node"


def _kind_of(value: object) -> str:
    if isinstance(value, JsonNode):
        return value.node_type.value
    if isinstance(value, JsonValue):
        return value.get_type().value
    return type(value).__name__


# ---------------------------------------------------------------------------
# Canonical entry points
# ---------------------------------------------------------------------------


def to_canonical(value: object) -> JsonValue | None:
    """Bring a value of either representation into representation A.

    A values pass through untouched (same object). B nodes, hybrid nodes
    included, are converted into fresh A values. None stays None.
    """
    if value is None:
        return None
    if isinstance(value, JsonNode):
        return to_value(value)
    if isinstance(value, JsonValue):
        return value
    raise UnsupportedSourceKindError(_kind_of(value), TO_CANONICAL)


def from_canonical(value: JsonValue | None, target: Representation) -> JsonValue | JsonNode | None:
    """Build the target representation from an A value."""
    if target is Representation.ELEMENTAL:
        return to_canonical(value)
    if target is Representation.NODE:
        if value is None:
            return None
        return to_node(value)
    raise UnsupportedTargetKindError(str(target), FROM_CANONICAL)


# ---------------------------------------------------------------------------
# B -> A
# ---------------------------------------------------------------------------


def to_value(node: JsonNode) -> JsonValue:
    """Convert a B node into a fresh A value graph."""
    if isinstance(node, ObjectNode):
        obj = Json.create_object()
        for name, child in node.properties():
            obj.put(name, to_value(child))
        return obj
    if isinstance(node, ArrayNode):
        arr = Json.create_array()
        for item in node.elements():
            arr.append(to_value(item))
        return arr
    if isinstance(node, TextNode):
        return JsonString(node.as_text())
    if isinstance(node, DoubleNode):
        return JsonNumber(node.double_value())
    if isinstance(node, BooleanNode):
        return JsonBoolean(node.as_boolean())
    if isinstance(node, NullNode):
        return JsonNull()
    raise UnsupportedSourceKindError(_kind_of(node), NODE_TO_ELEMENTAL)


# ---------------------------------------------------------------------------
# A -> B
# ---------------------------------------------------------------------------


def to_node(value: JsonValue) -> JsonNode:
    """Convert an A value into a B node tree. B nodes pass through."""
    if isinstance(value, JsonNode):
        return value
    if not isinstance(value, JsonValue):
        raise UnsupportedSourceKindError(_kind_of(value), ELEMENTAL_TO_NODE)
    if isinstance(value, JsonObject):
        return node_factory.object_node((name, to_node(value.get(name))) for name in value.keys())
    if isinstance(value, JsonArray):
        return node_factory.array_node(to_node(item) for item in value)
    if isinstance(value, JsonString):
        return node_factory.text_node(value.as_string())
    if isinstance(value, JsonNumber):
        return node_factory.number_node(value.as_number())
    if isinstance(value, JsonBoolean):
        return node_factory.boolean_node(value.as_boolean())
    if isinstance(value, JsonNull):
        return node_factory.null_node()
    # A JsonValue subclass of a kind B has no builder for
    raise UnsupportedTargetKindError(_kind_of(value), ELEMENTAL_TO_NODE)


def to_client_callable_result(value: object) -> JsonNode | None:
    """Convert a callable's A result into a hybrid node.

    The result is a real B node whose children are plain B nodes, and it
    still answers the A API (get_type, to_json, to_native).
    """
    if value is None:
        return None
    canonical = to_canonical(value)
    if isinstance(canonical, JsonObject):
        return ElementalObjectNode((name, to_node(canonical.get(name))) for name in canonical.keys())
    if isinstance(canonical, JsonArray):
        return ElementalArrayNode(to_node(item) for item in canonical)
    if isinstance(canonical, JsonString):
        return ElementalTextNode(canonical.as_string())
    if isinstance(canonical, JsonNumber):
        return ElementalNumberNode(canonical.as_number())
    if isinstance(canonical, JsonBoolean):
        return ElementalBooleanNode(canonical.as_boolean())
    if isinstance(canonical, JsonNull):
        return ElementalNullNode()
    raise UnsupportedTargetKindError(_kind_of(canonical), ELEMENTAL_TO_NODE)
