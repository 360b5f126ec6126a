"""Pytest configuration for jsonmigrate test suite."""

import sys
from concurrent.futures import Future
from pathlib import Path

import pytest

# Add src directory to path for jsonmigrate imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jsonmigrate import migration  # noqa: E402
from jsonmigrate.elemental import JsonValue  # noqa: E402
from jsonmigrate.instrumentation import InstrumentationEngine  # noqa: E402
from jsonmigrate.nodes import JsonNode  # noqa: E402


class FakePendingResult:
    """Host pending result completed by hand from the test."""

    def __init__(self) -> None:
        self.handlers = []
        self.future = Future()

    def then(self, result_handler, error_handler=None):
        self.handlers.append((result_handler, error_handler))

    def to_future(self):
        return self.future

    def complete(self, value):
        for result_handler, _ in self.handlers:
            result_handler(value)
        self.future.set_result(value)

    def fail(self, message):
        for _, error_handler in self.handlers:
            if error_handler is not None:
                error_handler(message)
        self.future.set_exception(RuntimeError(message))


class ModernElement:
    """Element of a host that takes representation-B values."""

    def __init__(self) -> None:
        self.properties = {}
        self.scripts = []

    def set_property_json(self, name: str, value: JsonNode) -> None:
        self.properties[name] = value

    def execute_js(self, expression: str, *parameters: object) -> FakePendingResult:
        pending = FakePendingResult()
        self.scripts.append((expression, parameters, pending))
        return pending


class LegacyElement:
    """Element of a host that takes representation-A values."""

    def __init__(self) -> None:
        self.properties = {}
        self.scripts = []

    def set_property_json(self, name: str, value: JsonValue) -> None:
        self.properties[name] = value

    def execute_js(self, expression: str, *parameters: object) -> FakePendingResult:
        pending = FakePendingResult()
        self.scripts.append((expression, parameters, pending))
        return pending


class FakeEvent:
    def __init__(self, data) -> None:
        self.data = data

    def get_event_data(self):
        return self.data


@pytest.fixture(autouse=True)
def reset_migration(monkeypatch):
    """Each test resolves the dispatch helper from scratch."""
    monkeypatch.delenv("JSONMIGRATE_HOST_VERSION", raising=False)
    monkeypatch.delenv("JSONMIGRATE_LOG_SOURCE", raising=False)
    migration.reset()
    yield
    migration.reset()


@pytest.fixture
def engine():
    return InstrumentationEngine()


@pytest.fixture
def legacy_engine():
    return InstrumentationEngine(legacy=True)
