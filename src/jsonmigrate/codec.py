"""Encoding of plain Python values to and from representation A.

Supported value types are str, bool, int, float and every JsonValue
subclass. NaN and infinity decode but cannot be rendered as JSON text.
"""

from __future__ import annotations

import math
from typing import TypeVar

from .elemental import Json, JsonType, JsonValue

T = TypeVar("T")

_SCALAR_TYPES = (str, int, float, bool)

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class JsonCodec:
    """Decode A values as Python types and encode Python values as A values."""

    @staticmethod
    def decode_as(json: JsonValue, type_: type[T]) -> T | None:
        """Decode an A value as the given type.

        A JSON null decodes as None for every type. bool is checked before
        int since bool is an int subclass. int truncates toward zero and
        saturates at the 32-bit bounds.
        """
        if json is None:
            raise ValueError("json must not be None")
        if json.get_type() is JsonType.NULL:
            return None
        if type_ is str:
            return json.as_string()
        if type_ is bool:
            return json.as_boolean()
        if type_ is float:
            return json.as_number()
        if type_ is int:
            return _to_int(json.as_number())
        if isinstance(type_, type) and issubclass(type_, JsonValue):
            if not isinstance(json, type_):
                raise TypeError(f"{type(json).__name__} cannot be cast to {type_.__name__}")
            return json
        raise ValueError(f"Unknown type {getattr(type_, '__name__', type_)}")

    @staticmethod
    def can_encode_without_type_info(type_: type) -> bool:
        if type_ is None:
            raise ValueError("type must not be None")
        return type_ in _SCALAR_TYPES or (isinstance(type_, type) and issubclass(type_, JsonValue))

    @staticmethod
    def encode_without_type_info(value: object) -> JsonValue:
        """Encode a JSON-native value. None encodes as JSON null."""
        if value is None:
            return Json.create_null()
        if isinstance(value, JsonValue):
            return value
        if type(value) is bool:
            return Json.create(value)
        if type(value) in (int, float):
            return Json.create(float(value))
        if type(value) is str:
            return Json.create(value)
        raise ValueError(f"Can't encode {type(value).__name__} to json")


def _to_int(number: float) -> int:
    """Truncate toward zero into the 32-bit range. NaN decodes as 0."""
    if math.isnan(number):
        return 0
    if number >= INT_MAX:
        return INT_MAX
    if number <= INT_MIN:
        return INT_MIN
    return int(number)
