"""Unit tests for PasswordResetService.

Tests cover:
- Issuance (hex token, digest storage, several outstanding tokens)
- Pre-validation without consumption
- Consumption: password replaced, every session revoked, token marked used
- Rejections: NotFound, AlreadyUsed (before expiry), Expired
- Concurrent consumption: one winner, the other a conflict
- Owner vanished: nothing committed
"""

import asyncio
from datetime import timedelta

import pytest

from authsession.application.services import PasswordResetService
from authsession.core.constants import REVOKE_REASON_PASSWORD_RESET
from authsession.core.enums import ErrorCode
from authsession.core.result import Failure, Success
from authsession.domain.entities import RefreshTokenRecord
from authsession.domain.events import (
    AllSessionsRevoked,
    PasswordResetCompleted,
    PasswordResetFailed,
    PasswordResetRequested,
)
from tests.utils.fakes import T0, InMemoryUserRepository, make_user


@pytest.fixture
def reset_service(memory_uow, hasher, clock, event_bus, logger):
    return PasswordResetService(
        uow_factory=memory_uow,
        hasher=hasher,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
        expire_minutes=60,
    )


@pytest.fixture
def user(state):
    user = make_user()
    state.users[user.id] = user
    return user


def _seed_session(state, user_id: int, token_id: int) -> None:
    state.refresh_tokens[token_id] = RefreshTokenRecord(
        id=token_id,
        user_id=user_id,
        token_hash=f"{token_id:064d}",
        expires_at=T0 + timedelta(days=30),
        created_at=T0,
    )


def _published_types(event_bus):
    return [type(call.args[0]) for call in event_bus.publish.await_args_list]


@pytest.mark.unit
class TestRequestReset:
    @pytest.mark.asyncio
    async def test_issues_hex_token(self, reset_service, user, state, hasher, clock):
        result = await reset_service.request_reset(user.id)

        assert isinstance(result, Success)
        issued = result.value
        assert len(issued.token) == 64
        int(issued.token, 16)
        assert issued.expires_at == clock.now() + timedelta(minutes=60)
        (stored,) = state.password_resets.values()
        assert stored.token_hash == hasher.hash(issued.token)

    @pytest.mark.asyncio
    async def test_several_tokens_may_be_outstanding(self, reset_service, user, state):
        first = (await reset_service.request_reset(user.id)).value
        second = (await reset_service.request_reset(user.id)).value

        assert len(state.password_resets) == 2
        assert await reset_service.validate_reset_token(first.token) is True
        assert await reset_service.validate_reset_token(second.token) is True

    @pytest.mark.asyncio
    async def test_inactive_user(self, reset_service, state, event_bus):
        user = make_user(is_active=False)
        state.users[user.id] = user

        result = await reset_service.request_reset(user.id)

        assert result.error.code == ErrorCode.USER_NOT_FOUND
        assert state.password_resets == {}
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_publishes_request_event(self, reset_service, user, event_bus):
        await reset_service.request_reset(user.id)

        assert _published_types(event_bus) == [PasswordResetRequested]


@pytest.mark.unit
class TestConsumeReset:
    @pytest.mark.asyncio
    async def test_consume_replaces_password_and_revokes_sessions(
        self, reset_service, user, state, event_bus
    ):
        _seed_session(state, user.id, 101)
        _seed_session(state, user.id, 102)
        _seed_session(state, 8, 103)
        issued = (await reset_service.request_reset(user.id)).value

        result = await reset_service.consume_reset(issued.token, "$2b$04$new-hash")

        assert result == Success(value=user.id)
        assert state.users[user.id].password_hash == "$2b$04$new-hash"
        assert state.refresh_tokens[101].is_revoked is True
        assert state.refresh_tokens[101].revoked_reason == REVOKE_REASON_PASSWORD_RESET
        assert state.refresh_tokens[102].is_revoked is True
        assert state.refresh_tokens[103].is_revoked is False
        (record,) = state.password_resets.values()
        assert record.is_used is True

        events = [call.args[0] for call in event_bus.publish.await_args_list]
        revoked = [e for e in events if isinstance(e, AllSessionsRevoked)]
        completed = [e for e in events if isinstance(e, PasswordResetCompleted)]
        assert revoked[0].revoked_count == 2
        assert completed[0].revoked_sessions == 2

    @pytest.mark.asyncio
    async def test_second_consume_reports_already_used(self, reset_service, user):
        issued = (await reset_service.request_reset(user.id)).value
        await reset_service.consume_reset(issued.token, "$2b$04$first")

        result = await reset_service.consume_reset(issued.token, "$2b$04$second")

        assert result.error.code == ErrorCode.CREDENTIAL_ALREADY_USED
        assert await reset_service.validate_reset_token(issued.token) is False

    @pytest.mark.asyncio
    async def test_concurrent_consume_has_one_winner(
        self, reset_service, user, state, event_bus, monkeypatch
    ):
        _seed_session(state, user.id, 101)
        issued = (await reset_service.request_reset(user.id)).value
        writes = []
        update_password_hash = InMemoryUserRepository.update_password_hash

        async def recording_update(self, user_id, password_hash, *, now):
            writes.append(password_hash)
            return await update_password_hash(self, user_id, password_hash, now=now)

        monkeypatch.setattr(
            InMemoryUserRepository, "update_password_hash", recording_update
        )

        results = await asyncio.gather(
            reset_service.consume_reset(issued.token, "$2b$04$first"),
            reset_service.consume_reset(issued.token, "$2b$04$second"),
        )

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if isinstance(r, Failure)]
        assert winners == [Success(value=user.id)]
        assert [r.error.code for r in losers] == [ErrorCode.RESOURCE_CONFLICT]
        assert len(writes) == 1
        assert state.users[user.id].password_hash == writes[0]
        assert state.refresh_tokens[101].is_revoked is True
        assert _published_types(event_bus).count(PasswordResetCompleted) == 1
        assert _published_types(event_bus).count(PasswordResetFailed) == 1

    @pytest.mark.asyncio
    async def test_used_token_reports_used_even_after_expiry(
        self, reset_service, user, clock
    ):
        issued = (await reset_service.request_reset(user.id)).value
        await reset_service.consume_reset(issued.token, "$2b$04$first")
        clock.advance(hours=2)

        result = await reset_service.consume_reset(issued.token, "$2b$04$second")

        assert result.error.code == ErrorCode.CREDENTIAL_ALREADY_USED

    @pytest.mark.asyncio
    async def test_expired_token(self, reset_service, user, state, clock, event_bus):
        _seed_session(state, user.id, 101)
        issued = (await reset_service.request_reset(user.id)).value
        clock.advance(minutes=61)

        assert await reset_service.validate_reset_token(issued.token) is False
        result = await reset_service.consume_reset(issued.token, "$2b$04$late")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIAL_EXPIRED
        assert state.users[user.id].password_hash == user.password_hash
        assert state.refresh_tokens[101].is_revoked is False
        assert _published_types(event_bus)[-1] is PasswordResetFailed

    @pytest.mark.asyncio
    async def test_valid_at_expiry_instant(self, reset_service, user, clock):
        issued = (await reset_service.request_reset(user.id)).value
        clock.advance(minutes=60)

        assert await reset_service.validate_reset_token(issued.token) is True

    @pytest.mark.asyncio
    async def test_unknown_token(self, reset_service):
        result = await reset_service.consume_reset("0" * 64, "$2b$04$x")

        assert result.error.code == ErrorCode.CREDENTIAL_NOT_FOUND
        assert await reset_service.validate_reset_token("0" * 64) is False

    @pytest.mark.asyncio
    async def test_vanished_owner_commits_nothing(
        self, reset_service, user, state, logger
    ):
        issued = (await reset_service.request_reset(user.id)).value
        del state.users[user.id]

        result = await reset_service.consume_reset(issued.token, "$2b$04$x")

        assert result.error.code == ErrorCode.USER_NOT_FOUND
        (record,) = state.password_resets.values()
        assert record.is_used is False
        assert state.rollbacks == 1
        logger.error.assert_called_once()
