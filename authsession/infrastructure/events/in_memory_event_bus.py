"""In-memory event bus.

Delivers authentication and session events to their subscribers inside the
running process. Handlers of one event run concurrently; a failing handler
is logged with the event's user and never reaches the publishing service,
whose transaction has already committed by the time it publishes.
"""

import asyncio
from collections import defaultdict

from authsession.domain.events.base_event import DomainEvent
from authsession.domain.protocols.event_bus_protocol import EventHandler
from authsession.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """Fail-open, exact-type event bus for a single event loop.

    Subscribing the same handler twice to one event type is a no-op; the
    handler still runs once per published event.

    Example:
        >>> bus = InMemoryEventBus(logger=logger)
        >>> bus.subscribe(RefreshTokenRotated, handler.handle_refresh_token_rotated)
        >>> await bus.publish(RefreshTokenRotated(user_id=7, ...))
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        handlers = self._handlers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> tuple[EventHandler, ...]:
        """Handlers subscribed to exactly ``event_type``."""
        return tuple(self._handlers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        """Run every handler of ``type(event)``. Never raises."""
        handlers = self.handlers_for(type(event))
        if not handlers:
            return

        event_name = type(event).__name__
        self._logger.debug(
            "event_publishing",
            event_type=event_name,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        results = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_name,
                    event_id=str(event.event_id),
                    user_id=getattr(event, "user_id", None),
                    handler_name=getattr(handler, "__name__", repr(handler)),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
