"""Event bus protocol (port) for domain events.

Publishers (application services) depend on this protocol; the container
wires an adapter (InMemoryEventBus) with its subscribers at startup.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from authsession.domain.events.base_event import DomainEvent

EventHandler = Callable[[Any], Awaitable[None]]
"""Async handler receiving one event of the subscribed type."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. **Fail-open**: a handler failure must not prevent other handlers
           from running, and must never reach the publisher.
        2. **Async**: handlers are coroutines.
        3. **Type routing**: handlers receive only the exact event type they
           subscribed to.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register handler for an event type."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every handler registered for its type. Never raises."""
        ...
