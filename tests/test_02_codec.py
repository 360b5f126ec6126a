"""Pytest-based JsonCodec tests."""

import math

import pytest

from jsonmigrate.codec import INT_MAX, INT_MIN, JsonCodec
from jsonmigrate.elemental import Json, JsonBoolean, JsonNumber, JsonObject, JsonString, JsonValue


@pytest.mark.parametrize(
    "json, type_, expected",
    [
        (JsonString("abc"), str, "abc"),
        (JsonNumber(2.9), int, 2),
        (JsonNumber(-2.9), int, -2),
        (JsonNumber(3), float, 3.0),
        (JsonBoolean(True), bool, True),
        (JsonString(""), bool, False),
        (JsonNumber(0), bool, False),
        (JsonNumber(5), str, "5"),
    ],
)
def test_decode_scalars(json, type_, expected):
    result = JsonCodec.decode_as(json, type_)
    assert result == expected
    assert type(result) is type_


def test_decode_bool_is_not_int():
    assert JsonCodec.decode_as(JsonNumber(1), bool) is True


@pytest.mark.parametrize(
    "json, expected",
    [
        (JsonString("abc"), 0),
        (Json.create_array(), 0),
        (Json.create_object(), 0),
        (JsonNumber(math.nan), 0),
        (JsonNumber(math.inf), INT_MAX),
        (JsonNumber(-math.inf), INT_MIN),
        (JsonNumber(1e12), INT_MAX),
        (JsonNumber(-1e12), INT_MIN),
        (JsonString("-7.8"), -7),
    ],
)
def test_decode_int_saturates(json, expected):
    assert JsonCodec.decode_as(json, int) == expected


@pytest.mark.parametrize("type_", [str, int, float, bool, JsonObject])
def test_decode_null_is_none(type_):
    assert JsonCodec.decode_as(Json.create_null(), type_) is None


def test_decode_json_value_subclass():
    obj = Json.create_object()
    assert JsonCodec.decode_as(obj, JsonValue) is obj
    assert JsonCodec.decode_as(obj, JsonObject) is obj
    with pytest.raises(TypeError):
        JsonCodec.decode_as(JsonString("x"), JsonObject)


def test_decode_unknown_type():
    with pytest.raises(ValueError, match="Unknown type"):
        JsonCodec.decode_as(JsonString("x"), bytes)


@pytest.mark.parametrize("type_, expected", [(str, True), (int, True), (float, True), (bool, True), (JsonObject, True), (bytes, False), (list, False)])
def test_can_encode_without_type_info(type_, expected):
    assert JsonCodec.can_encode_without_type_info(type_) is expected


def test_encode_without_type_info():
    assert JsonCodec.encode_without_type_info(None).to_json() == "null"
    assert JsonCodec.encode_without_type_info("s").to_json() == '"s"'
    assert JsonCodec.encode_without_type_info(True).to_json() == "true"
    encoded = JsonCodec.encode_without_type_info(3)
    assert isinstance(encoded.value, float)
    assert encoded.to_json() == "3"
    obj = Json.create_object()
    assert JsonCodec.encode_without_type_info(obj) is obj
    with pytest.raises(ValueError, match="Can't encode"):
        JsonCodec.encode_without_type_info(b"raw")
