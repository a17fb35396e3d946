"""Unit tests for RetentionSweeper.

Tests cover:
- Purge cutoff (retention window before now)
- Rows still inside the window survive
- Failed sweeps are logged and the loop keeps going
- Cancellation stops the loop
"""

import asyncio
from datetime import timedelta

import pytest

from authsession.application.services import RetentionSweeper
from authsession.domain.entities import (
    OtpRecord,
    PasswordResetTokenRecord,
    RefreshTokenRecord,
)
from authsession.domain.enums import OtpPurpose
from tests.utils.fakes import T0


@pytest.fixture
def sweeper(memory_uow, clock, logger):
    return RetentionSweeper(
        uow_factory=memory_uow,
        clock=clock,
        logger=logger,
        retention_days=7,
        interval_hours=24,
    )


def _seed(state):
    """One purgeable and one retained row per table (clock at T0 + 10 days)."""
    old = T0
    recent = T0 + timedelta(days=9)
    state.refresh_tokens[1] = RefreshTokenRecord(
        id=1, user_id=7, token_hash="1" * 64, expires_at=old, created_at=old
    )
    state.refresh_tokens[2] = RefreshTokenRecord(
        id=2,
        user_id=7,
        token_hash="2" * 64,
        expires_at=T0 + timedelta(days=30),
        created_at=old,
        is_revoked=True,
        revoked_at=recent,
    )
    state.refresh_tokens[3] = RefreshTokenRecord(
        id=3,
        user_id=7,
        token_hash="3" * 64,
        expires_at=T0 + timedelta(days=30),
        created_at=old,
        is_revoked=True,
        revoked_at=old,
    )
    state.otps[4] = OtpRecord(
        id=4,
        user_id=7,
        purpose=OtpPurpose.EMAIL_VERIFICATION,
        otp_hash="4" * 64,
        expires_at=old,
        created_at=old,
    )
    state.otps[5] = OtpRecord(
        id=5,
        user_id=7,
        purpose=OtpPurpose.MOBILE_VERIFICATION,
        otp_hash="5" * 64,
        expires_at=recent,
        created_at=recent,
    )
    state.password_resets[6] = PasswordResetTokenRecord(
        id=6,
        user_id=7,
        token_hash="6" * 64,
        expires_at=T0 + timedelta(days=5),
        created_at=old,
        is_used=True,
        used_at=old,
    )
    state.password_resets[7] = PasswordResetTokenRecord(
        id=7, user_id=7, token_hash="7" * 64, expires_at=recent, created_at=recent
    )


@pytest.mark.unit
class TestSweep:
    @pytest.mark.asyncio
    async def test_purges_rows_older_than_retention(self, sweeper, state, clock, logger):
        _seed(state)
        clock.advance(days=10)

        report = await sweeper.sweep()

        assert (report.refresh_tokens, report.otps, report.password_resets) == (2, 1, 1)
        assert report.total == 4
        assert set(state.refresh_tokens) == {2}
        assert set(state.otps) == {5}
        assert set(state.password_resets) == {7}
        assert logger.info.call_args.args == ("retention_sweep_completed",)

    @pytest.mark.asyncio
    async def test_nothing_to_purge(self, sweeper, state):
        _seed(state)

        report = await sweeper.sweep()

        assert report.total == 0
        assert len(state.refresh_tokens) == 3


@pytest.mark.unit
class TestRunForever:
    @pytest.mark.asyncio
    async def test_cancellation_stops_loop(self, sweeper, state, logger):
        task = asyncio.create_task(sweeper.run_forever())
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        logger.info.assert_any_call(
            "retention_sweep_completed",
            cutoff=(T0 - timedelta(days=7)).isoformat(),
            refresh_tokens=0,
            otps=0,
            password_resets=0,
        )
        assert logger.info.call_args.args == ("retention_sweep_cancelled",)

    @pytest.mark.asyncio
    async def test_failed_sweep_is_logged(self, sweeper, state, logger):
        state.unavailable = True

        task = asyncio.create_task(sweeper.run_forever())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert logger.error.call_args.args == ("retention_sweep_failed",)
        assert logger.error.call_args.kwargs["operation"] == "execute"
