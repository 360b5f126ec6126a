"""jsonmigrate - call client callables across two JSON tree representations."""

import logging

from .codec import JsonCodec
from .converter import Representation, from_canonical, to_canonical, to_client_callable_result, to_node, to_value
from .elemental import Json, JsonArray, JsonBoolean, JsonNull, JsonNumber, JsonObject, JsonString, JsonType, JsonValue
from .errors import (
    ConfigurationError,
    ConversionError,
    HelperInitError,
    InstrumentationError,
    JsonMigrationError,
    UnsupportedSourceKindError,
    UnsupportedTargetKindError,
)
from .host import Component
from .instrumentation import InstrumentationEngine
from .markers import client_callable, find_client_callables, legacy_client_callable
from .migration import (
    configure,
    convert_to_client_callable_result,
    convert_to_json_value,
    convert_to_json_values,
    execute_js,
    get_event_data,
    instrument_class,
    set_property_json,
)
from .nodes import ArrayNode, BooleanNode, DoubleNode, JsonNode, JsonNodeFactory, NullNode, ObjectNode, TextNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArrayNode",
    "BooleanNode",
    "Component",
    "ConfigurationError",
    "ConversionError",
    "DoubleNode",
    "HelperInitError",
    "InstrumentationEngine",
    "InstrumentationError",
    "Json",
    "JsonArray",
    "JsonBoolean",
    "JsonCodec",
    "JsonMigrationError",
    "JsonNode",
    "JsonNodeFactory",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonType",
    "JsonValue",
    "NullNode",
    "ObjectNode",
    "Representation",
    "TextNode",
    "UnsupportedSourceKindError",
    "UnsupportedTargetKindError",
    "client_callable",
    "configure",
    "convert_to_client_callable_result",
    "convert_to_json_value",
    "convert_to_json_values",
    "execute_js",
    "find_client_callables",
    "from_canonical",
    "get_event_data",
    "instrument_class",
    "legacy_client_callable",
    "set_property_json",
    "to_canonical",
    "to_client_callable_result",
    "to_node",
    "to_value",
]
