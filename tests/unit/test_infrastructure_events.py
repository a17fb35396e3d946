"""Unit tests for the event bus, the logging handler and registry wiring.

Tests cover:
- Subscribe/publish basic flow, exact type routing
- Handler failure doesn't break others (fail-open)
- No handlers registered (no-op), duplicate subscriptions ignored
- Every registered event has a logging handler method
- wire_event_handlers subscribes the whole registry
"""

from unittest.mock import MagicMock

import pytest

from authsession.core.container import wire_event_handlers
from authsession.domain.enums import SessionPlatform
from authsession.domain.events import (
    DomainEvent,
    RefreshTokenReuseDetected,
    RefreshTokenRotated,
    SessionRevoked,
)
from authsession.domain.events.registry import EVENT_REGISTRY, handler_method_name
from authsession.infrastructure.events import InMemoryEventBus, LoggingEventHandler


def _rotated() -> RefreshTokenRotated:
    return RefreshTokenRotated(
        user_id=7, old_token_id=1, new_token_id=2, platform=SessionPlatform.IOS
    )


@pytest.mark.unit
class TestInMemoryEventBus:
    @pytest.mark.asyncio
    async def test_publish_reaches_subscriber(self):
        bus = InMemoryEventBus(logger=MagicMock())
        received: list[DomainEvent] = []

        async def handler(event: DomainEvent) -> None:
            received.append(event)

        bus.subscribe(RefreshTokenRotated, handler)
        event = _rotated()
        await bus.publish(event)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_routes_by_exact_type(self):
        bus = InMemoryEventBus(logger=MagicMock())
        received: list[DomainEvent] = []

        async def handler(event: DomainEvent) -> None:
            received.append(event)

        bus.subscribe(SessionRevoked, handler)
        await bus.publish(_rotated())

        assert received == []

    @pytest.mark.asyncio
    async def test_no_handlers_is_noop(self):
        logger = MagicMock()
        bus = InMemoryEventBus(logger=logger)

        await bus.publish(_rotated())

        logger.debug.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_break_others(self):
        logger = MagicMock()
        bus = InMemoryEventBus(logger=logger)
        received: list[DomainEvent] = []

        async def broken(event: DomainEvent) -> None:
            raise RuntimeError("handler down")

        async def healthy(event: DomainEvent) -> None:
            received.append(event)

        bus.subscribe(RefreshTokenRotated, broken)
        bus.subscribe(RefreshTokenRotated, healthy)
        await bus.publish(_rotated())

        assert len(received) == 1
        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("event_handler_failed",)
        assert kwargs["handler_name"] == "broken"
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["user_id"] == 7

    @pytest.mark.asyncio
    async def test_duplicate_subscription_is_ignored(self):
        bus = InMemoryEventBus(logger=MagicMock())
        received: list[DomainEvent] = []

        async def handler(event: DomainEvent) -> None:
            received.append(event)

        bus.subscribe(RefreshTokenRotated, handler)
        bus.subscribe(RefreshTokenRotated, handler)
        await bus.publish(_rotated())

        assert bus.handlers_for(RefreshTokenRotated) == (handler,)
        assert len(received) == 1


@pytest.mark.unit
class TestLoggingEventHandler:
    @pytest.mark.parametrize("event_class", EVENT_REGISTRY)
    def test_has_handler_for_every_registered_event(self, event_class):
        handler = LoggingEventHandler(logger=MagicMock())

        assert callable(getattr(handler, handler_method_name(event_class), None))

    @pytest.mark.asyncio
    async def test_reuse_is_logged_as_warning_without_secrets(self):
        logger = MagicMock()
        handler = LoggingEventHandler(logger=logger)

        await handler.handle_refresh_token_reuse_detected(
            RefreshTokenReuseDetected(user_id=7, token_id=3, revoked_reason="rotated")
        )

        args, kwargs = logger.warning.call_args
        assert args == ("refresh_token_reuse_detected",)
        assert kwargs["user_id"] == 7
        assert kwargs["revoked_reason"] == "rotated"
        assert not any("hash" in key or key == "token" for key in kwargs)


@pytest.mark.unit
class TestRegistryWiring:
    def test_handler_method_name(self):
        assert handler_method_name(RefreshTokenRotated) == "handle_refresh_token_rotated"
        assert handler_method_name(SessionRevoked) == "handle_session_revoked"

    def test_wire_event_handlers_subscribes_every_event(self):
        bus = MagicMock()

        wire_event_handlers(bus, MagicMock())

        subscribed = [call.args[0] for call in bus.subscribe.call_args_list]
        assert subscribed == list(EVENT_REGISTRY)

    @pytest.mark.asyncio
    async def test_wired_bus_logs_published_events(self):
        logger = MagicMock()
        bus = InMemoryEventBus(logger=logger)
        wire_event_handlers(bus, logger)

        await bus.publish(SessionRevoked(user_id=7, token_id=3, reason="logout"))

        args, kwargs = logger.info.call_args
        assert args == ("session_revoked",)
        assert kwargs["user_id"] == 7
        assert kwargs["reason"] == "logout"
