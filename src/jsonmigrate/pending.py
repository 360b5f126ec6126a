"""Pending script results seen through representation A.

The host completes a script evaluation with a value in its own
representation. The wrapper converts it to A before handing it on. It holds
no thread or timer: handlers fire from the host's own completion, and a
completion that never comes leaves nothing behind.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable

from .codec import JsonCodec
from .converter import to_canonical
from .elemental import JsonValue
from .host import PendingJavaScriptResult


class ElementalPendingJavaScriptResult:
    """Adapts a host PendingJavaScriptResult so results arrive as A values."""

    def __init__(self, delegate: PendingJavaScriptResult) -> None:
        self._delegate = delegate

    @property
    def delegate(self) -> PendingJavaScriptResult:
        return self._delegate

    def then(
        self,
        result_handler: Callable[[JsonValue | None], None],
        error_handler: Callable[[str], None] | None = None,
    ) -> None:
        """Register handlers. Exactly one of them fires later, from the host."""
        if result_handler is None:
            raise ValueError("Result handler cannot be None")

        def deliver(value: Any) -> None:
            result_handler(to_canonical(value))

        self._delegate.then(deliver, error_handler)

    def then_as(
        self,
        target_type: type,
        result_handler: Callable[[Any], None],
        error_handler: Callable[[str], None] | None = None,
    ) -> None:
        """Like then(), with the A value decoded as target_type by JsonCodec."""
        if target_type is None:
            raise ValueError("Target type cannot be None")
        if result_handler is None:
            raise ValueError("Result handler cannot be None")

        def decode(value: JsonValue | None) -> None:
            result_handler(_decode(value, target_type))

        self.then(decode, error_handler)

    def to_future(self, target_type: type = JsonValue) -> Future:
        """A Future completed from the host's own completion."""
        source = self._delegate.to_future()
        result: Future = Future()

        def relay(done: Future) -> None:
            if done.cancelled():
                result.cancel()
                return
            exc = done.exception()
            if exc is not None:
                result.set_exception(exc)
                return
            try:
                decoded = _decode(to_canonical(done.result()), target_type)
            except Exception as err:
                result.set_exception(err)
            else:
                result.set_result(decoded)

        source.add_done_callback(relay)
        return result


def _decode(value: JsonValue | None, target_type: type) -> Any:
    if value is None:
        return None
    return JsonCodec.decode_as(value, target_type)
