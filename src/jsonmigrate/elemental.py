"""Representation A: the host's default JSON value graph.

Values are mutable and shared by reference. Objects keep insertion order,
numbers keep the int/float distinction of the Python value they were built
from, and null is a value of its own (JsonNull), distinct from a missing key.

    | Kind    | Class       | Python value   |
    |---------|-------------|----------------|
    | object  | JsonObject  | dict[str, ...] |
    | array   | JsonArray   | list[...]      |
    | string  | JsonString  | str            |
    | number  | JsonNumber  | int or float   |
    | boolean | JsonBoolean | bool           |
    | null    | JsonNull    | None           |
"""

from __future__ import annotations

import json
import math
from enum import Enum


class JsonType(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


_LONG_MIN = -(2**63)
_LONG_MAX = 2**63


def format_number(value: int | float) -> str:
    """Render a number the way the host does.

    Integral doubles within the 64-bit integer range lose their fraction.
    Larger ones keep exponent form.
    """
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and _LONG_MIN <= value < _LONG_MAX and value == int(value):
        return str(int(value))
    return json.dumps(value)


class JsonValue:
    """Base of all representation-A values. Abstract."""

    __slots__ = ()

    def get_type(self) -> JsonType:
        raise NotImplementedError

    def as_boolean(self) -> bool:
        raise NotImplementedError

    def as_number(self) -> float:
        raise NotImplementedError

    def as_string(self) -> str:
        raise NotImplementedError

    def to_json(self) -> str:
        raise NotImplementedError

    def to_native(self) -> object:
        raise NotImplementedError

    def js_equals(self, other: JsonValue) -> bool:
        """Loose equality: same kind and same JSON text."""
        if not isinstance(other, JsonValue):
            return False
        return self.get_type() == other.get_type() and self.to_json() == other.to_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()})"


class JsonNull(JsonValue):
    __slots__ = ()

    def get_type(self) -> JsonType:
        return JsonType.NULL

    def as_boolean(self) -> bool:
        return False

    def as_number(self) -> float:
        return 0.0

    def as_string(self) -> str:
        return "null"

    def to_json(self) -> str:
        return "null"

    def to_native(self) -> object:
        return None


class JsonBoolean(JsonValue):
    __slots__ = ("value",)

    def __init__(self, value: bool) -> None:
        self.value = bool(value)

    def get_type(self) -> JsonType:
        return JsonType.BOOLEAN

    def as_boolean(self) -> bool:
        return self.value

    def as_number(self) -> float:
        return 1.0 if self.value else 0.0

    def as_string(self) -> str:
        return "true" if self.value else "false"

    def to_json(self) -> str:
        return self.as_string()

    def to_native(self) -> object:
        return self.value


class JsonNumber(JsonValue):
    __slots__ = ("value",)

    def __init__(self, value: int | float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"not a number: {value!r}")
        self.value = value

    def get_type(self) -> JsonType:
        return JsonType.NUMBER

    def is_integer(self) -> bool:
        return isinstance(self.value, int)

    def as_boolean(self) -> bool:
        return self.value != 0 and not (isinstance(self.value, float) and math.isnan(self.value))

    def as_number(self) -> float:
        return float(self.value)

    def as_string(self) -> str:
        return format_number(self.value)

    def to_json(self) -> str:
        return format_number(self.value)

    def to_native(self) -> object:
        return self.value


class JsonString(JsonValue):
    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = str(value)

    def get_type(self) -> JsonType:
        return JsonType.STRING

    def as_boolean(self) -> bool:
        return len(self.value) > 0

    def as_number(self) -> float:
        try:
            return float(self.value)
        except ValueError:
            return math.nan

    def as_string(self) -> str:
        return self.value

    def to_json(self) -> str:
        return json.dumps(self.value)

    def to_native(self) -> object:
        return self.value


class JsonArray(JsonValue):
    """Ordered sequence of values. Setting past the end pads with JsonNull."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[JsonValue] = []

    def get_type(self) -> JsonType:
        return JsonType.ARRAY

    def length(self) -> int:
        return len(self._items)

    def get(self, index: int) -> JsonValue:
        return self._items[index]

    def set(self, index: int, value: object) -> None:
        item = Json.wrap(value)
        while len(self._items) < index:
            self._items.append(JsonNull())
        if index == len(self._items):
            self._items.append(item)
        else:
            self._items[index] = item

    def append(self, value: object) -> None:
        self._items.append(Json.wrap(value))

    def remove(self, index: int) -> None:
        del self._items[index]

    def get_object(self, index: int) -> JsonObject:
        return _expect(self._items[index], JsonObject)

    def get_array(self, index: int) -> JsonArray:
        return _expect(self._items[index], JsonArray)

    def get_string(self, index: int) -> str:
        return self._items[index].as_string()

    def get_number(self, index: int) -> float:
        return self._items[index].as_number()

    def get_boolean(self, index: int) -> bool:
        return self._items[index].as_boolean()

    def __iter__(self):
        return iter(list(self._items))

    def as_boolean(self) -> bool:
        return True

    def as_number(self) -> float:
        return math.nan

    def as_string(self) -> str:
        return ",".join(v.as_string() for v in self._items)

    def to_json(self) -> str:
        return "[" + ",".join(v.to_json() for v in self._items) + "]"

    def to_native(self) -> object:
        return [v.to_native() for v in self._items]


class JsonObject(JsonValue):
    """String-keyed values in insertion order. A missing key reads as None."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, JsonValue] = {}

    def get_type(self) -> JsonType:
        return JsonType.OBJECT

    def keys(self) -> list[str]:
        return list(self._entries)

    def has_key(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> JsonValue | None:
        return self._entries.get(key)

    def put(self, key: str, value: object) -> None:
        self._entries[key] = Json.wrap(value)

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def get_object(self, key: str) -> JsonObject:
        return _expect(self._entries[key], JsonObject)

    def get_array(self, key: str) -> JsonArray:
        return _expect(self._entries[key], JsonArray)

    def get_string(self, key: str) -> str:
        return self._entries[key].as_string()

    def get_number(self, key: str) -> float:
        return self._entries[key].as_number()

    def get_boolean(self, key: str) -> bool:
        return self._entries[key].as_boolean()

    def as_boolean(self) -> bool:
        return True

    def as_number(self) -> float:
        return math.nan

    def as_string(self) -> str:
        return "[object Object]"

    def to_json(self) -> str:
        parts = [json.dumps(k) + ":" + v.to_json() for k, v in self._entries.items()]
        return "{" + ",".join(parts) + "}"

    def to_native(self) -> object:
        return {k: v.to_native() for k, v in self._entries.items()}


def _expect(value: JsonValue, cls: type) -> JsonValue:
    if not isinstance(value, cls):
        raise TypeError(f"{type(value).__name__} cannot be cast to {cls.__name__}")
    return value


class Json:
    """Factory for representation-A values."""

    @staticmethod
    def create(value: str | int | float | bool) -> JsonValue:
        if isinstance(value, bool):
            return JsonBoolean(value)
        if isinstance(value, (int, float)):
            return JsonNumber(value)
        if isinstance(value, str):
            return JsonString(value)
        raise TypeError(f"cannot create a JSON value from {type(value).__name__}")

    @staticmethod
    def create_null() -> JsonNull:
        return JsonNull()

    @staticmethod
    def create_object() -> JsonObject:
        return JsonObject()

    @staticmethod
    def create_array() -> JsonArray:
        return JsonArray()

    @staticmethod
    def wrap(value: object) -> JsonValue:
        """Accept a JsonValue as is; build one from a Python scalar; None is null."""
        if isinstance(value, JsonValue):
            return value
        if value is None:
            return JsonNull()
        return Json.create(value)

    @staticmethod
    def from_native(value: object) -> JsonValue:
        """Build a value graph from dicts, lists and scalars."""
        if isinstance(value, dict):
            obj = JsonObject()
            for k, v in value.items():
                obj.put(str(k), Json.from_native(v))
            return obj
        if isinstance(value, (list, tuple)):
            arr = JsonArray()
            for v in value:
                arr.append(Json.from_native(v))
            return arr
        return Json.wrap(value)

    @staticmethod
    def parse(text: str) -> JsonValue:
        return Json.from_native(json.loads(text))
