"""In-process event bus.

The outbox relay publishes each decoded domain event here. The bus fans the
event out to every handler registered for its type and reports failure back
to the relay by raising.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from shared_kernel.outbox.exceptions import EventDispatchError

EventHandler = Callable[[Any], Awaitable[None]]


class InProcessEventBus:
    """Fan-out event bus keyed by event class.

    Handlers for one event run concurrently and are all awaited, even when
    some of them fail. Delivery is at-least-once, so handlers must tolerate
    seeing the same event twice.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = {}

    def register(self, event_type: type, handler: EventHandler) -> None:
        """Register a handler for events of exactly ``event_type``."""
        self._handlers.setdefault(event_type, []).append(handler)

    def handlers_for(self, event_type: type) -> list[EventHandler]:
        """Return the handlers registered for an event class."""
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: Any) -> None:
        """Dispatch an event to its handlers and wait for all of them.

        An event without handlers is delivered trivially.

        Raises:
            EventDispatchError: If at least one handler raised
        """
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            return

        results = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            if isinstance(failure, asyncio.CancelledError):
                raise failure
        if failures:
            raise EventDispatchError(type(event).__name__, failures)
