"""Pytest-based migration facade tests."""

import logging

import pytest

from conftest import FakeEvent, LegacyElement, ModernElement
from jsonmigrate import migration
from jsonmigrate.bridge import ElementalObjectNode
from jsonmigrate.config import DEFAULT_HOST_VERSION, Settings, load_settings
from jsonmigrate.elemental import Json, JsonArray, JsonObject, JsonValue
from jsonmigrate.errors import ConfigurationError, HelperInitError, UnsupportedSourceKindError
from jsonmigrate.helpers import LegacyJsonMigrationHelper
from jsonmigrate.host import Component
from jsonmigrate.markers import legacy_client_callable
from jsonmigrate.nodes import ArrayNode, JsonNode, ObjectNode, TextNode, node_factory

F = node_factory


class Widget(Component):
    @legacy_client_callable
    def read(self) -> JsonObject:
        return Json.parse('{"w": 1}')


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_defaults():
    settings = load_settings(environ={})
    assert settings == Settings(host_version=DEFAULT_HOST_VERSION, log_generated_source=False)
    assert settings.host_version == 25
    assert not settings.is_legacy_host


def test_settings_from_environment():
    settings = load_settings(environ={"JSONMIGRATE_HOST_VERSION": "24.3.1", "JSONMIGRATE_LOG_SOURCE": "yes"})
    assert settings.host_version == 24
    assert settings.is_legacy_host
    assert settings.log_generated_source


def test_explicit_settings_win():
    settings = load_settings(host_version=26, log_generated_source=False, environ={"JSONMIGRATE_HOST_VERSION": "24", "JSONMIGRATE_LOG_SOURCE": "1"})
    assert settings.host_version == 26
    assert not settings.log_generated_source


@pytest.mark.parametrize(
    "environ",
    [
        {"JSONMIGRATE_HOST_VERSION": "latest"},
        {"JSONMIGRATE_HOST_VERSION": "0"},
        {"JSONMIGRATE_LOG_SOURCE": "maybe"},
    ],
)
def test_invalid_environment(environ):
    with pytest.raises(ConfigurationError):
        load_settings(environ=environ)


def test_invalid_explicit_version():
    with pytest.raises(ConfigurationError):
        load_settings(host_version=True)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def test_resolves_modern_by_default():
    assert not migration.is_resolved()
    helper = migration.get_helper()
    assert type(helper).__name__ == "ModernJsonMigrationHelper"
    assert migration.get_helper() is helper


def test_resolves_legacy_for_old_hosts():
    migration.configure(host_version=24)
    assert isinstance(migration.get_helper(), LegacyJsonMigrationHelper)


def test_resolves_from_environment(monkeypatch):
    monkeypatch.setenv("JSONMIGRATE_HOST_VERSION", "23")
    assert isinstance(migration.get_helper(), LegacyJsonMigrationHelper)


def test_invalid_environment_fails_first_call(monkeypatch):
    monkeypatch.setenv("JSONMIGRATE_HOST_VERSION", "next")
    with pytest.raises(ConfigurationError):
        migration.convert_to_json_value(None)


def test_configure_after_resolution():
    migration.get_helper()
    with pytest.raises(ConfigurationError, match="before the first adapter call"):
        migration.configure(host_version=24)


def test_missing_modern_strategy(monkeypatch):
    monkeypatch.setattr(migration, "MODERN_HELPER_MODULE", "jsonmigrate.no_such_helper")
    with pytest.raises(HelperInitError) as exc_info:
        migration.get_helper()
    assert isinstance(exc_info.value, ImportError)
    assert "Host version 25" in exc_info.value.msg
    assert not migration.is_resolved()


def test_missing_modern_strategy_not_needed_for_legacy(monkeypatch):
    monkeypatch.setattr(migration, "MODERN_HELPER_MODULE", "jsonmigrate.no_such_helper")
    migration.configure(host_version=24)
    assert isinstance(migration.get_helper(), LegacyJsonMigrationHelper)


def test_resolution_logged(caplog):
    caplog.set_level(logging.INFO, logger="jsonmigrate")
    migration.get_helper()
    assert "host version 25: using ModernJsonMigrationHelper" in caplog.text


def test_generated_source_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="jsonmigrate")
    migration.configure(log_generated_source=True)
    migration.instrument_class(Widget)
    assert "generated source for WidgetInstrumented" in caplog.text
    assert "def read(self) -> _jm_t0:" in caplog.text
    assert "return _jm_result(_jm_parent.read(self))" in caplog.text


# ---------------------------------------------------------------------------
# Modern host
# ---------------------------------------------------------------------------


def test_instrument_class():
    cls = migration.instrument_class(Widget)
    assert cls.__name__ == "WidgetInstrumented"
    assert migration.instrument_class(Widget) is cls
    assert isinstance(cls().read(), ElementalObjectNode)


def test_convert_to_json_value():
    value = migration.convert_to_json_value(F.object_node({"a": F.text_node("b")}))
    assert isinstance(value, JsonObject)
    assert value.get_string("a") == "b"
    same = Json.create_array()
    assert migration.convert_to_json_value(same) is same
    assert migration.convert_to_json_value(None) is None


def test_convert_to_json_values():
    source = [F.text_node("a"), Json.create(1), None]
    values = migration.convert_to_json_values(source)
    assert [v.to_json() if v is not None else None for v in values] == ['"a"', "1", None]
    target = [None, None, None]
    assert migration.convert_to_json_values(source, target) is target
    assert target[0].as_string() == "a"
    with pytest.raises(ValueError, match="source.length=3, target.length=2"):
        migration.convert_to_json_values(source, [None, None])


def test_convert_to_client_callable_result():
    result = migration.convert_to_client_callable_result(Json.parse('{"k": [1]}'))
    assert isinstance(result, ElementalObjectNode)
    assert result.get("k") == F.array_node([F.number_node(1)])


def test_set_property_json_converts_to_node():
    element = ModernElement()
    migration.set_property_json(element, "config", Json.parse('{"x": true}'))
    value = element.properties["config"]
    assert isinstance(value, ObjectNode)
    assert value.get("x") == F.boolean_node(True)


def test_execute_js_converts_parameters_and_result():
    element = ModernElement()
    pending = migration.execute_js(element, "return $0.x", Json.parse('{"x": 1}'), "plain", 3)
    expression, parameters, host_pending = element.scripts[-1]
    assert expression == "return $0.x"
    assert isinstance(parameters[0], ObjectNode)
    assert parameters[1:] == ("plain", 3)

    received = []
    pending.then(received.append)
    host_pending.complete(F.array_node([F.text_node("r")]))
    assert len(received) == 1
    assert isinstance(received[0], JsonArray)
    assert received[0].get_string(0) == "r"


def test_execute_js_then_as():
    element = ModernElement()
    pending = migration.execute_js(element, "return 41.9")
    _, _, host_pending = element.scripts[-1]
    received = []
    pending.then_as(int, received.append)
    host_pending.complete(F.number_node(41.9))
    assert received == [41]


def test_execute_js_then_as_int_from_text():
    element = ModernElement()
    pending = migration.execute_js(element, "return 'x'")
    _, _, host_pending = element.scripts[-1]
    received, errors = [], []
    pending.then_as(int, received.append, errors.append)
    host_pending.complete(F.text_node("x"))
    assert received == [0]
    assert errors == []


def test_execute_js_error_handler():
    element = ModernElement()
    pending = migration.execute_js(element, "throw 1")
    _, _, host_pending = element.scripts[-1]
    results, errors = [], []
    pending.then(results.append, errors.append)
    host_pending.fail("boom")
    assert results == []
    assert errors == ["boom"]


def test_pending_handlers_required():
    pending = migration.execute_js(ModernElement(), "1")
    with pytest.raises(ValueError):
        pending.then(None)
    with pytest.raises(ValueError):
        pending.then_as(None, print)


def test_execute_js_to_future():
    element = ModernElement()
    pending = migration.execute_js(element, "return {}")
    _, _, host_pending = element.scripts[-1]
    as_value = pending.to_future()
    as_text = pending.to_future(str)
    assert not as_value.done()
    host_pending.complete(F.text_node("done"))
    assert as_value.result(timeout=1).as_string() == "done"
    assert as_text.result(timeout=1) == "done"


def test_to_future_propagates_failure():
    element = ModernElement()
    pending = migration.execute_js(element, "throw 1")
    _, _, host_pending = element.scripts[-1]
    future = pending.to_future()
    host_pending.fail("bad script")
    with pytest.raises(RuntimeError, match="bad script"):
        future.result(timeout=1)


def test_get_event_data():
    data = migration.get_event_data(FakeEvent(F.object_node({"key": F.text_node("Enter")})))
    assert isinstance(data, JsonObject)
    assert data.get_string("key") == "Enter"
    with pytest.raises(TypeError):
        migration.get_event_data(FakeEvent(F.array_node()))


def test_invoke_varargs_element_types():
    class Host:
        def typed(self, *values: JsonNode):
            return values

        def narrow(self, *values: str):
            return values

    helper = migration.get_helper()
    value = Json.create("x")
    typed = helper.invoke(Host.typed, Host(), value, F.text_node("y"))
    assert typed == (TextNode("x"), TextNode("y"))
    narrow = helper.invoke(Host.narrow, Host(), value)
    assert narrow[0] is value


def test_invoke_empty_varargs():
    class Host:
        def run(self, expression: str, *values: object):
            return expression, values

    assert migration.get_helper().invoke(Host.run, Host(), "x") == ("x", ())


# ---------------------------------------------------------------------------
# Legacy host
# ---------------------------------------------------------------------------


@pytest.fixture
def legacy_host():
    migration.configure(host_version=24)


def test_legacy_passes_values_through(legacy_host):
    value = Json.create_object()
    assert migration.convert_to_json_value(value) is value
    assert migration.convert_to_client_callable_result(value) is value
    with pytest.raises(UnsupportedSourceKindError):
        migration.convert_to_json_value(F.object_node())


def test_legacy_set_property_json(legacy_host):
    element = LegacyElement()
    value = Json.create_array()
    migration.set_property_json(element, "items", value)
    assert element.properties["items"] is value


def test_legacy_execute_js(legacy_host):
    element = LegacyElement()
    param = Json.create_object()
    pending = migration.execute_js(element, "f($0)", param)
    _, parameters, host_pending = element.scripts[-1]
    assert parameters == (param,)
    received = []
    pending.then_as(JsonValue, received.append)
    result = Json.create("ok")
    host_pending.complete(result)
    assert received == [result]


def test_legacy_instrument_class(legacy_host):
    cls = migration.instrument_class(Widget)
    assert isinstance(cls().read(), JsonObject)
    assert not isinstance(cls().read(), JsonNode)


def test_legacy_event_data(legacy_host):
    data = Json.create_object()
    assert migration.get_event_data(FakeEvent(data)) is data


def test_array_node_event_data_rejected_by_legacy(legacy_host):
    with pytest.raises(UnsupportedSourceKindError):
        migration.get_event_data(FakeEvent(ArrayNode()))
