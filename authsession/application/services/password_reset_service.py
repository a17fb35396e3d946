"""Password reset service.

Issues single-use reset tokens and consumes them together with the password
change and the revocation of every session of the user.

Consumption flow (one transaction):
1. Look up the token by digest (NotFound)
2. Reject a used token (AlreadyUsed, checked before expiry so a used token
   never reports anything else)
3. Reject an expired token (Expired)
4. Mark it used only if still unused (Conflict when a concurrent consume won)
5. Replace the user's password hash
6. Revoke every refresh token of the user (reason ``password_reset``)

Steps 4-6 commit together or not at all.
"""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from authsession.application.dtos import IssuedResetToken
from authsession.core.constants import REVOKE_REASON_PASSWORD_RESET, RESET_TOKEN_BYTES
from authsession.core.enums import ErrorCode
from authsession.core.errors import ConflictError, DomainError, NotFoundError
from authsession.core.result import Failure, Result, Success
from authsession.domain.errors import CredentialError, CredentialType
from authsession.domain.events import (
    AllSessionsRevoked,
    PasswordResetCompleted,
    PasswordResetFailed,
    PasswordResetRequested,
)
from authsession.domain.protocols import (
    ClockProtocol,
    EventBusProtocol,
    LoggerProtocol,
    SecretHasherProtocol,
    UnitOfWork,
    UnitOfWorkFactory,
)


def _generate_reset_token() -> str:
    return secrets.token_hex(RESET_TOKEN_BYTES)


class PasswordResetService:
    """Issue, pre-validate and consume password-reset tokens.

    Several tokens may be outstanding for the same user; each one is single
    use and expires independently.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        hasher: SecretHasherProtocol,
        clock: ClockProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        expire_minutes: int = 60,
        token_generator: Callable[[], str] = _generate_reset_token,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._clock = clock
        self._event_bus = event_bus
        self._logger = logger
        self._lifetime = timedelta(minutes=expire_minutes)
        self._token_generator = token_generator

    async def request_reset(self, user_id: int) -> Result[IssuedResetToken, DomainError]:
        """Issue a new reset token.

        Returns:
            Success(IssuedResetToken) carrying the plaintext token for delivery.
            Failure(NotFoundError) if the user is missing, inactive or deleted.
        """
        now = self._clock.now()
        token = self._token_generator()
        expires_at = now + self._lifetime

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if user is None or not user.can_authenticate():
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.USER_NOT_FOUND,
                        message="User not found or cannot authenticate",
                        resource_type="user",
                        resource_id=str(user_id),
                    )
                )
            await uow.password_resets.add(
                user_id=user_id,
                token_hash=self._hasher.hash(token),
                expires_at=expires_at,
                now=now,
            )

        await self._event_bus.publish(
            PasswordResetRequested(occurred_at=now, user_id=user_id, expires_at=expires_at)
        )
        return Success(
            value=IssuedResetToken(token=token, expires_at=expires_at, recipient=user)
        )

    async def validate_reset_token(self, token: str) -> bool:
        """Check a token without consuming it (used before showing the reset form).

        Returns:
            True iff the token exists, is unused and unexpired.
        """
        now = self._clock.now()
        async with self._uow_factory() as uow:
            record = await uow.password_resets.find_by_hash(self._hasher.hash(token))
        return record is not None and record.is_valid(now)

    async def consume_reset(
        self, token: str, new_password_hash: str
    ) -> Result[int, DomainError]:
        """Consume a token, set the new password and revoke all sessions.

        Args:
            token: Plaintext reset token.
            new_password_hash: Already-hashed new password.

        Returns:
            Success(user_id) whose password changed.
            Failure(CredentialError) NotFound / AlreadyUsed / Expired.
            Failure(ConflictError) if a concurrent consume won.
            Failure(NotFoundError) if the owner disappeared (nothing committed).
        """
        now = self._clock.now()

        async with self._uow_factory() as uow:
            result = await self._consume_in(uow, token, new_password_hash, now=now)

        match result:
            case Success(value=(user_id, revoked)):
                await self._event_bus.publish(
                    AllSessionsRevoked(
                        occurred_at=now,
                        user_id=user_id,
                        revoked_count=revoked,
                        reason=REVOKE_REASON_PASSWORD_RESET,
                    )
                )
                await self._event_bus.publish(
                    PasswordResetCompleted(
                        occurred_at=now, user_id=user_id, revoked_sessions=revoked
                    )
                )
                return Success(value=user_id)
            case Failure(error=error):
                await self._event_bus.publish(
                    PasswordResetFailed(occurred_at=now, reason=error.code.value)
                )
                return Failure(error=error)

    async def _consume_in(
        self,
        uow: UnitOfWork,
        token: str,
        new_password_hash: str,
        *,
        now: datetime,
    ) -> Result[tuple[int, int], DomainError]:
        record = await uow.password_resets.find_by_hash(self._hasher.hash(token))
        if record is None:
            return Failure(
                error=CredentialError.not_found(CredentialType.PASSWORD_RESET_TOKEN)
            )
        if record.is_used:
            return Failure(
                error=CredentialError.already_used(CredentialType.PASSWORD_RESET_TOKEN)
            )
        if record.is_expired(now):
            return Failure(
                error=CredentialError.expired(CredentialType.PASSWORD_RESET_TOKEN)
            )

        if not await uow.password_resets.mark_used(record.id, now=now):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.RESOURCE_CONFLICT,
                    message="Password reset token consumed by a concurrent request",
                    resource_type=CredentialType.PASSWORD_RESET_TOKEN.value,
                )
            )

        if not await uow.users.update_password_hash(
            record.user_id, new_password_hash, now=now
        ):
            await uow.rollback()
            self._logger.error("password_reset_user_missing", user_id=record.user_id)
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="Reset token owner no longer exists",
                    resource_type="user",
                    resource_id=str(record.user_id),
                )
            )

        revoked = await uow.refresh_tokens.revoke_all_for_user(
            record.user_id, reason=REVOKE_REASON_PASSWORD_RESET, now=now
        )
        return Success(value=(record.user_id, revoked))
