"""Dispatch strategies: one per host JSON representation.

    | Strategy                   | Host versions | Host JSON type | Instrumentation         |
    |----------------------------|---------------|----------------|-------------------------|
    | LegacyJsonMigrationHelper  | <= 24         | A              | re-mark legacy methods  |
    | ModernJsonMigrationHelper  | >= 25         | B              | convert A <-> B         |

The modern strategy lives in helpers_modern and is imported only when the
configured host needs it.
"""

from __future__ import annotations

from typing import Any, Callable

from .config import Settings
from .elemental import JsonValue
from .errors import UnsupportedSourceKindError
from .host import PendingJavaScriptResult
from .instrumentation import InstrumentationEngine
from .pending import ElementalPendingJavaScriptResult


class JsonMigrationHelper:
    """Strategy interface used by the migration facade."""

    legacy = False

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.engine = InstrumentationEngine(legacy=self.legacy, log_source=self.settings.log_generated_source)

    def instrument_class(self, cls: type) -> type:
        return self.engine.instrument(cls)

    def convert_to_json_value(self, obj: object) -> JsonValue | None:
        raise NotImplementedError

    def convert_to_client_callable_result(self, value: Any) -> Any:
        raise NotImplementedError

    def invoke(self, method: Callable, instance: object, *args: Any) -> Any:
        raise NotImplementedError

    def convert_pending_result(self, result: PendingJavaScriptResult) -> ElementalPendingJavaScriptResult:
        return ElementalPendingJavaScriptResult(result)


class LegacyJsonMigrationHelper(JsonMigrationHelper):
    """Hosts whose only JSON type family is representation A. Nothing converts."""

    legacy = True

    def convert_to_json_value(self, obj: object) -> JsonValue | None:
        if obj is None or isinstance(obj, JsonValue):
            return obj
        raise UnsupportedSourceKindError(type(obj).__name__, "to canonical")

    def convert_to_client_callable_result(self, value: Any) -> Any:
        return value

    def invoke(self, method: Callable, instance: object, *args: Any) -> Any:
        return method(instance, *args)
