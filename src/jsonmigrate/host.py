"""Host framework surface consumed by the adapter.

The host owns component lifecycles and the client connection. Only the
pieces the adapter touches are described here: the component base type,
and the element, event and pending-result objects it hands out.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Protocol, runtime_checkable


class Component:
    """Base type of host components. Subclasses need a no-argument constructor."""

    def __init__(self) -> None:
        pass


@runtime_checkable
class PendingJavaScriptResult(Protocol):
    """Completion of a script evaluated in the client, in the host's representation."""

    def then(
        self,
        result_handler: Callable[[Any], None],
        error_handler: Callable[[str], None] | None = None,
    ) -> None: ...

    def to_future(self) -> Future: ...


@runtime_checkable
class Element(Protocol):
    def set_property_json(self, name: str, value: Any) -> None: ...

    def execute_js(self, expression: str, *parameters: Any) -> PendingJavaScriptResult: ...


@runtime_checkable
class DomEvent(Protocol):
    def get_event_data(self) -> Any: ...
