"""Refresh token store.

Issues, rotates and revokes opaque refresh tokens and stamps their activity.
One refresh token row is one device session.

Rotation flow:
1. Hash the presented value and look the row up
2. Reject NotFound / Revoked (revoked, deleted or inactive) / Expired
3. Conditionally revoke the row (``WHERE is_revoked = false``)
4. Zero rows changed: a concurrent rotation won, report Revoked
5. Insert the successor (same platform, device, address) in the same
   transaction
6. After commit publish RefreshTokenRotated

Presenting a token that was already revoked publishes
RefreshTokenReuseDetected: either a client retried with a stale token or
the token leaked.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (repositories come through the unit of work)
"""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from authsession.application.dtos import IssuedRefreshToken
from authsession.core.constants import (
    REFRESH_TOKEN_BYTES,
    REVOKE_REASON_LOGOUT,
    REVOKE_REASON_ROTATED,
)
from authsession.core.enums import ErrorCode
from authsession.core.errors import ConflictError, DomainError
from authsession.core.result import Failure, Result, Success
from authsession.domain.entities import RefreshTokenRecord
from authsession.domain.enums import SessionPlatform
from authsession.domain.errors import CredentialError, CredentialType
from authsession.domain.events import (
    AllSessionsRevoked,
    DomainEvent,
    RefreshTokenReuseDetected,
    RefreshTokenRotated,
    SessionRevoked,
)
from authsession.domain.protocols import (
    ClockProtocol,
    EventBusProtocol,
    LoggerProtocol,
    SecretHasherProtocol,
    UnitOfWork,
    UnitOfWorkFactory,
)


def _generate_refresh_token() -> str:
    return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)


class RefreshTokenStore:
    """Lifecycle of opaque refresh tokens.

    Every state change is a conditional update inside one unit of work, so
    two concurrent rotations of the same token produce exactly one successor.

    Example:
        >>> issued = await store.issue(user_id=7, platform=SessionPlatform.IOS)
        >>> match await store.rotate(issued.value.token):
        ...     case Success(value=successor): ...
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        hasher: SecretHasherProtocol,
        clock: ClockProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        expire_days: int = 30,
        issue_attempts: int = 3,
        touch_throttle_seconds: int = 60,
        token_generator: Callable[[], str] = _generate_refresh_token,
    ) -> None:
        """Initialize store with dependencies.

        Args:
            uow_factory: Opens one transaction per operation.
            hasher: Digest for stored token values.
            clock: Time source for expiry and activity stamps.
            event_bus: Receives rotation/revocation events after commit.
            logger: Structured logger.
            expire_days: Refresh token lifetime.
            issue_attempts: Fresh values tried before giving up on collisions.
            touch_throttle_seconds: Minimum gap between activity stamps
                (0 stamps every call).
            token_generator: Source of opaque values (tests pin it).
        """
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._clock = clock
        self._event_bus = event_bus
        self._logger = logger
        self._lifetime = timedelta(days=expire_days)
        self._issue_attempts = issue_attempts
        self._touch_throttle = timedelta(seconds=touch_throttle_seconds)
        self._token_generator = token_generator

    async def issue(
        self,
        user_id: int,
        platform: SessionPlatform = SessionPlatform.UNKNOWN,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> Result[IssuedRefreshToken, DomainError]:
        """Issue a refresh token for a new session.

        Returns:
            Success(IssuedRefreshToken) with the plaintext value.
            Failure(ConflictError) if every attempt collided.
        """
        now = self._clock.now()
        async with self._uow_factory() as uow:
            result = await self.issue_in(
                uow,
                user_id=user_id,
                platform=platform,
                device_info=device_info,
                ip_address=ip_address,
                now=now,
            )
            if isinstance(result, Failure):
                await uow.rollback()
        return result

    async def issue_in(
        self,
        uow: UnitOfWork,
        *,
        user_id: int,
        platform: SessionPlatform,
        device_info: str | None,
        ip_address: str | None,
        now: datetime,
    ) -> Result[IssuedRefreshToken, DomainError]:
        """Insert a token inside a caller-owned unit of work.

        The caller decides what to do with its transaction on failure.

        Returns:
            Success(IssuedRefreshToken), or Failure(ConflictError) when all
            attempts collided.
        """
        for attempt in range(1, self._issue_attempts + 1):
            token = self._token_generator()
            record = await uow.refresh_tokens.add(
                user_id=user_id,
                token_hash=self._hasher.hash(token),
                platform=platform,
                expires_at=now + self._lifetime,
                now=now,
                device_info=device_info,
                ip_address=ip_address,
            )
            if record is not None:
                return Success(value=IssuedRefreshToken(token=token, record=record))
            self._logger.warning(
                "refresh_token_collision",
                user_id=user_id,
                attempt=attempt,
            )
        return Failure(error=self._exhausted_error(user_id))

    async def rotate(self, old_value: str) -> Result[IssuedRefreshToken, DomainError]:
        """Revoke a usable token and issue its successor atomically.

        Returns:
            Success(IssuedRefreshToken) for the successor.
            Failure(CredentialError) NotFound / Revoked / Expired.
            Failure(ConflictError) if no successor could be inserted.
        """
        now = self._clock.now()
        events: list[DomainEvent] = []

        async with self._uow_factory() as uow:
            result = await self._rotate_in(uow, old_value, now=now, events=events)

        await self._publish_all(events)
        return result

    async def _rotate_in(
        self,
        uow: UnitOfWork,
        old_value: str,
        *,
        now: datetime,
        events: list[DomainEvent],
    ) -> Result[IssuedRefreshToken, DomainError]:
        record = await uow.refresh_tokens.find_by_hash(self._hasher.hash(old_value))
        if record is None:
            return Failure(error=CredentialError.not_found(CredentialType.REFRESH_TOKEN))

        rejection = self._check_rotatable(record, now)
        if rejection is not None:
            if record.is_revoked:
                events.append(
                    RefreshTokenReuseDetected(
                        occurred_at=now,
                        user_id=record.user_id,
                        token_id=record.id,
                        revoked_reason=record.revoked_reason,
                    )
                )
            return Failure(error=rejection)

        if not await uow.refresh_tokens.revoke_if_active(
            record.id, reason=REVOKE_REASON_ROTATED, now=now
        ):
            # Concurrent rotation revoked it between read and update
            return Failure(error=CredentialError.revoked(CredentialType.REFRESH_TOKEN))

        successor = await self.issue_in(
            uow,
            user_id=record.user_id,
            platform=record.platform,
            device_info=record.device_info,
            ip_address=record.ip_address,
            now=now,
        )
        if isinstance(successor, Failure):
            await uow.rollback()
            return successor

        events.append(
            RefreshTokenRotated(
                occurred_at=now,
                user_id=record.user_id,
                old_token_id=record.id,
                new_token_id=successor.value.record.id,
                platform=record.platform,
            )
        )
        return successor

    async def revoke(
        self, value: str, reason: str = REVOKE_REASON_LOGOUT
    ) -> Result[bool, DomainError]:
        """Revoke one token. Idempotent.

        Returns:
            Success(True) if this call revoked it, Success(False) if it was
            unknown or already revoked.
        """
        now = self._clock.now()
        async with self._uow_factory() as uow:
            record = await uow.refresh_tokens.find_by_hash(self._hasher.hash(value))
            revoked = record is not None and await uow.refresh_tokens.revoke_if_active(
                record.id, reason=reason, now=now
            )

        if revoked and record is not None:
            await self._event_bus.publish(
                SessionRevoked(
                    occurred_at=now,
                    user_id=record.user_id,
                    token_id=record.id,
                    reason=reason,
                )
            )
        return Success(value=revoked)

    async def revoke_all_for_user(
        self, user_id: int, reason: str
    ) -> Result[int, DomainError]:
        """Revoke every token of a user. Idempotent.

        Returns:
            Success(count) of tokens revoked by this call.
        """
        now = self._clock.now()
        async with self._uow_factory() as uow:
            count = await uow.refresh_tokens.revoke_all_for_user(
                user_id, reason=reason, now=now
            )

        await self._event_bus.publish(
            AllSessionsRevoked(
                occurred_at=now,
                user_id=user_id,
                revoked_count=count,
                reason=reason,
            )
        )
        return Success(value=count)

    async def touch_activity(self, value: str) -> bool:
        """Stamp activity on a usable token, at most once per throttle window.

        Returns:
            True if the stamp was written. Unknown, unusable or recently
            stamped tokens return False.
        """
        now = self._clock.now()
        async with self._uow_factory() as uow:
            touched = await uow.refresh_tokens.touch_activity(
                self._hasher.hash(value),
                now=now,
                stale_before=now - self._touch_throttle,
            )
        if not touched:
            self._logger.debug("activity_touch_skipped")
        return touched

    async def list_usable(self, now: datetime | None = None) -> list[RefreshTokenRecord]:
        """Snapshot of every usable token (statistics input)."""
        at = now or self._clock.now()
        async with self._uow_factory() as uow:
            return await uow.refresh_tokens.list_usable(now=at)

    async def list_sessions_for_user(self, user_id: int) -> list[RefreshTokenRecord]:
        """Usable sessions of one user, newest first."""
        now = self._clock.now()
        async with self._uow_factory() as uow:
            return await uow.refresh_tokens.list_usable_for_user(user_id, now=now)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_rotatable(
        record: RefreshTokenRecord, now: datetime
    ) -> CredentialError | None:
        if record.is_revoked or record.is_deleted or not record.is_active:
            return CredentialError.revoked(CredentialType.REFRESH_TOKEN)
        if record.is_expired(now):
            return CredentialError.expired(CredentialType.REFRESH_TOKEN)
        return None

    def _exhausted_error(self, user_id: int) -> ConflictError:
        self._logger.error(
            "refresh_token_issue_exhausted",
            user_id=user_id,
            attempts=self._issue_attempts,
        )
        return ConflictError(
            code=ErrorCode.RESOURCE_CONFLICT,
            message="Could not generate a unique refresh token",
            resource_type="refresh_token",
            conflicting_field="token_hash",
        )

    async def _publish_all(self, events: list[DomainEvent]) -> None:
        for event in events:
            await self._event_bus.publish(event)
