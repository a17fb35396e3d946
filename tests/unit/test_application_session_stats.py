"""Unit tests for SessionActivityTracker and SessionStatsAggregator.

Tests cover:
- Activity window classification (strict inequality, issuance fallback)
- Activity recording through the store with the touch throttle
- Store outages never fail activity recording
- Statistics: usable-only totals, platform breakdown, UNKNOWN excluded from
  the breakdown but counted in totals
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from authsession.application.services import (
    RefreshTokenStore,
    SessionActivityTracker,
    SessionStatsAggregator,
)
from authsession.domain.entities import PlatformBreakdown, RefreshTokenRecord
from authsession.domain.enums import ActivityStatus, SessionPlatform
from tests.utils.fakes import T0


@pytest.fixture
def store(memory_uow, hasher, clock, event_bus, logger):
    return RefreshTokenStore(
        uow_factory=memory_uow,
        hasher=hasher,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
        touch_throttle_seconds=60,
    )


@pytest.fixture
def tracker(store, logger):
    return SessionActivityTracker(store=store, logger=logger, inactivity_minutes=5)


@pytest.fixture
def aggregator(store, tracker, clock):
    return SessionStatsAggregator(store=store, tracker=tracker, clock=clock)


def _token(token_id: int, platform: SessionPlatform, **overrides) -> RefreshTokenRecord:
    values = {
        "id": token_id,
        "user_id": 7,
        "token_hash": f"{token_id:064d}",
        "platform": platform,
        "expires_at": T0 + timedelta(days=30),
        "created_at": T0,
    }
    values.update(overrides)
    return RefreshTokenRecord(**values)


@pytest.mark.unit
class TestClassify:
    def test_never_touched_session_uses_issuance(self, tracker):
        token = _token(1, SessionPlatform.WEB)

        assert tracker.classify(token, T0 + timedelta(minutes=4)) is ActivityStatus.ACTIVE
        assert tracker.classify(token, T0 + timedelta(minutes=5)) is ActivityStatus.INACTIVE

    def test_uses_last_activity(self, tracker):
        token = _token(1, SessionPlatform.WEB, last_activity_at=T0 + timedelta(minutes=3))

        assert tracker.classify(token, T0 + timedelta(minutes=7)) is ActivityStatus.ACTIVE
        assert tracker.classify(token, T0 + timedelta(minutes=8)) is ActivityStatus.INACTIVE


@pytest.mark.unit
class TestRecordActivity:
    @pytest.mark.asyncio
    async def test_ios_session_goes_inactive_after_window(
        self, store, tracker, aggregator, clock
    ):
        issued = (await store.issue(7, platform=SessionPlatform.IOS)).value

        clock.advance(minutes=2)
        stats = await aggregator.current_stats()
        assert (stats.total, stats.active, stats.inactive) == (1, 1, 0)
        assert stats.by_platform == PlatformBreakdown(ios=1)

        clock.advance(minutes=1)
        assert await tracker.record_activity(issued.token) is True

        clock.advance(minutes=7)
        stats = await aggregator.current_stats()
        assert (stats.total, stats.active, stats.inactive) == (1, 0, 1)
        assert stats.by_platform == PlatformBreakdown(ios=1)

    @pytest.mark.asyncio
    async def test_throttled_touch_returns_false(self, store, tracker, clock):
        issued = (await store.issue(7)).value

        clock.advance(seconds=10)

        assert await tracker.record_activity(issued.token) is False

    @pytest.mark.asyncio
    async def test_unknown_token(self, tracker):
        assert await tracker.record_activity("not-a-token") is False

    @pytest.mark.asyncio
    async def test_storage_outage_is_swallowed_and_logged(
        self, store, tracker, state, logger
    ):
        issued = (await store.issue(7)).value
        state.unavailable = True

        assert await tracker.record_activity(issued.token) is False
        assert logger.warning.call_args.args == ("activity_record_failed",)
        assert logger.warning.call_args.kwargs["operation"] == "execute"


@pytest.mark.unit
class TestAggregate:
    def test_empty(self, aggregator):
        stats = aggregator.aggregate([], T0)

        assert stats.to_dict() == {
            "total": 0,
            "active": 0,
            "inactive": 0,
            "byPlatform": {"web": 0, "ios": 0, "android": 0},
        }

    def test_counts_usable_tokens_only(self, aggregator):
        tokens = [
            _token(1, SessionPlatform.WEB),
            _token(2, SessionPlatform.ANDROID, is_revoked=True),
            _token(3, SessionPlatform.ANDROID, expires_at=T0),
            _token(4, SessionPlatform.IOS, is_deleted=True),
            _token(5, SessionPlatform.ANDROID),
        ]

        stats = aggregator.aggregate(tokens, T0 + timedelta(minutes=1))

        assert stats.total == 2
        assert stats.by_platform == PlatformBreakdown(web=1, android=1)

    def test_unknown_platform_counts_in_totals_only(self, aggregator):
        tokens = [
            _token(1, SessionPlatform.UNKNOWN),
            _token(2, SessionPlatform.WEB),
        ]

        stats = aggregator.aggregate(tokens, T0)

        assert stats.total == 2
        assert stats.active == 2
        assert stats.by_platform == PlatformBreakdown(web=1)

    def test_active_inactive_split(self, aggregator):
        stale = _token(1, SessionPlatform.WEB)
        fresh = replace(
            _token(2, SessionPlatform.IOS), last_activity_at=T0 + timedelta(minutes=9)
        )

        stats = aggregator.aggregate([stale, fresh], T0 + timedelta(minutes=10))

        assert (stats.total, stats.active, stats.inactive) == (2, 1, 1)
