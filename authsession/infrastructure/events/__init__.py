"""Event bus adapters and handlers."""

from authsession.infrastructure.events.handlers.logging_event_handler import (
    LoggingEventHandler,
)
from authsession.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus", "LoggingEventHandler"]
