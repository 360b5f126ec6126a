"""Migration facade: one adapter API whatever JSON representation the host uses.

The strategy is resolved exactly once, on the first adapter call, from the
configured host major version. Call configure() before that call to
override the environment; afterwards the choice is fixed until reset().
"""

from __future__ import annotations

import importlib
import logging
import threading
from typing import Any, MutableSequence, Sequence

from .config import Settings, load_settings
from .elemental import JsonObject, JsonValue
from .errors import ConfigurationError, HelperInitError
from .helpers import JsonMigrationHelper, LegacyJsonMigrationHelper
from .host import DomEvent, Element
from .pending import ElementalPendingJavaScriptResult

logger = logging.getLogger(__name__)

MODERN_HELPER_MODULE = f"{__package__}.helpers_modern"

_lock = threading.Lock()
_helper: JsonMigrationHelper | None = None
_settings: Settings | None = None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def configure(host_version: int | None = None, log_generated_source: bool | None = None) -> Settings:
    """Fix the settings used for resolution. Unset values come from the environment."""
    global _settings
    with _lock:
        if _helper is not None:
            raise ConfigurationError("configure() must be called before the first adapter call")
        _settings = load_settings(host_version, log_generated_source)
        return _settings


def _resolve(settings: Settings) -> JsonMigrationHelper:
    if settings.is_legacy_host:
        helper: JsonMigrationHelper = LegacyJsonMigrationHelper(settings)
    else:
        try:
            module = importlib.import_module(MODERN_HELPER_MODULE)
        except ImportError as exc:
            raise HelperInitError(
                f"Host version {settings.host_version} requires {MODERN_HELPER_MODULE}, "
                f"which cannot be imported: {exc}"
            ) from exc
        helper = module.ModernJsonMigrationHelper(settings)
    logger.info("host version %d: using %s", settings.host_version, type(helper).__name__)
    return helper


def get_helper() -> JsonMigrationHelper:
    global _helper
    helper = _helper
    if helper is None:
        with _lock:
            if _helper is None:
                _helper = _resolve(_settings or load_settings())
            helper = _helper
    return helper


def is_resolved() -> bool:
    return _helper is not None


def reset() -> None:
    """Drop the resolved strategy, its generated classes and the settings."""
    global _helper, _settings
    with _lock:
        if _helper is not None:
            _helper.engine.clear()
        _helper = None
        _settings = None


def release_scope(module: str) -> None:
    """Forget classes generated for a module being torn down."""
    helper = _helper
    if helper is not None:
        helper.engine.release_scope(module)


# ---------------------------------------------------------------------------
# Adapter API
# ---------------------------------------------------------------------------


def instrument_class(cls: type) -> type:
    return get_helper().instrument_class(cls)


def convert_to_json_value(obj: object) -> JsonValue | None:
    return get_helper().convert_to_json_value(obj)


def convert_to_json_values(
    source: Sequence[object],
    target: MutableSequence[JsonValue | None] | None = None,
) -> MutableSequence[JsonValue | None]:
    """Convert each element. With a target, fill it in place; lengths must match."""
    if target is not None and len(source) != len(target):
        raise ValueError(
            f"Array length mismatch: source.length={len(source)}, target.length={len(target)}"
        )
    values = [convert_to_json_value(item) for item in source]
    if target is None:
        return values
    target[:] = values
    return target


def convert_to_client_callable_result(value: Any) -> Any:
    return get_helper().convert_to_client_callable_result(value)


def set_property_json(element: Element, name: str, value: JsonValue) -> None:
    get_helper().invoke(type(element).set_property_json, element, name, value)


def execute_js(element: Element, expression: str, *parameters: Any) -> ElementalPendingJavaScriptResult:
    helper = get_helper()
    result = helper.invoke(type(element).execute_js, element, expression, *parameters)
    return helper.convert_pending_result(result)


def get_event_data(event: DomEvent) -> JsonObject | None:
    helper = get_helper()
    data = helper.convert_to_json_value(helper.invoke(type(event).get_event_data, event))
    if data is not None and not isinstance(data, JsonObject):
        raise TypeError(f"{type(data).__name__} cannot be cast to JsonObject")
    return data
