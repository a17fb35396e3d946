"""One-time password service.

Issues 4-digit codes for a (user, purpose) pair and verifies them exactly
once. Requesting a new code replaces the outstanding one for the same
purpose; codes for other purposes are untouched.

Verification flow:
1. Look up the (user, purpose) row (NotFound)
2. Reject if expired (the row is left for the retention sweep)
3. Compare digests in constant time (Mismatch)
4. Delete the row only if it still holds the same digest
5. Zero rows deleted: a concurrent verification won (Conflict)
6. Set the user's verified flag for the purpose in the same transaction
"""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from authsession.application.dtos import IssuedOtp
from authsession.core.constants import OTP_DIGITS
from authsession.core.enums import ErrorCode
from authsession.core.errors import ConflictError, DomainError, NotFoundError
from authsession.core.result import Failure, Result, Success
from authsession.domain.entities import OtpRecord
from authsession.domain.enums import OtpPurpose, VerificationResult
from authsession.domain.errors import CredentialError, CredentialType
from authsession.domain.events import (
    OtpIssued,
    OtpVerificationFailed,
    OtpVerificationSucceeded,
)
from authsession.domain.protocols import (
    ClockProtocol,
    EventBusProtocol,
    LoggerProtocol,
    SecretHasherProtocol,
    UnitOfWork,
    UnitOfWorkFactory,
)


def _generate_otp_code() -> str:
    return f"{secrets.randbelow(10**OTP_DIGITS):0{OTP_DIGITS}d}"


class OtpService:
    """Issue and verify one-time passwords.

    Example:
        >>> result = await otp_service.request_otp(7, OtpPurpose.EMAIL_VERIFICATION)
        >>> await delivery.send_otp(user, purpose, result.value.code, result.value.expires_at)
        >>> await otp_service.verify_otp(7, OtpPurpose.EMAIL_VERIFICATION, "0427")
        Success(value=<VerificationResult.VERIFIED: 'verified'>)
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        hasher: SecretHasherProtocol,
        clock: ClockProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        expire_minutes: int = 10,
        code_generator: Callable[[], str] = _generate_otp_code,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._clock = clock
        self._event_bus = event_bus
        self._logger = logger
        self._lifetime = timedelta(minutes=expire_minutes)
        self._code_generator = code_generator

    async def request_otp(
        self, user_id: int, purpose: OtpPurpose
    ) -> Result[IssuedOtp, DomainError]:
        """Issue a fresh code, replacing any outstanding one for the purpose.

        Args:
            user_id: Recipient.
            purpose: What the code will prove.

        Returns:
            Success(IssuedOtp) carrying the plaintext code for delivery.
            Failure(NotFoundError) if the user is missing, inactive or deleted.
        """
        now = self._clock.now()
        code = self._code_generator()
        expires_at = now + self._lifetime

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if user is None or not user.can_authenticate():
                return Failure(error=self._user_not_found(user_id))
            await uow.otps.upsert(
                user_id=user_id,
                purpose=purpose,
                otp_hash=self._hasher.hash(code),
                expires_at=expires_at,
                now=now,
            )

        await self._event_bus.publish(
            OtpIssued(
                occurred_at=now,
                user_id=user_id,
                purpose=purpose,
                expires_at=expires_at,
            )
        )
        return Success(value=IssuedOtp(code=code, expires_at=expires_at, recipient=user))

    async def verify_otp(
        self, user_id: int, purpose: OtpPurpose, candidate: str
    ) -> Result[VerificationResult, DomainError]:
        """Verify and consume a code.

        Returns:
            Success(VERIFIED) for exactly one caller per issued code.
            Failure(CredentialError) NotFound / Expired / Mismatch.
            Failure(ConflictError) if a concurrent verification consumed it.
        """
        now = self._clock.now()

        async with self._uow_factory() as uow:
            otp = await uow.otps.find(user_id, purpose)
            error: DomainError | None = self._check_candidate(otp, candidate, now)
            if error is None and otp is not None:
                if await uow.otps.consume(otp.id, otp.otp_hash):
                    await self._apply_verified_flag(uow, user_id, purpose, now)
                else:
                    self._logger.warning(
                        "otp_consume_conflict", user_id=user_id, purpose=purpose.value
                    )
                    error = ConflictError(
                        code=ErrorCode.RESOURCE_CONFLICT,
                        message="OTP already consumed by a concurrent request",
                        resource_type=CredentialType.OTP.value,
                    )

        if error is not None:
            await self._event_bus.publish(
                OtpVerificationFailed(
                    occurred_at=now,
                    user_id=user_id,
                    purpose=purpose,
                    reason=error.code.value,
                )
            )
            return Failure(error=error)

        await self._event_bus.publish(
            OtpVerificationSucceeded(occurred_at=now, user_id=user_id, purpose=purpose)
        )
        return Success(value=VerificationResult.VERIFIED)

    def _check_candidate(
        self, otp: OtpRecord | None, candidate: str, now: datetime
    ) -> CredentialError | None:
        if otp is None:
            return CredentialError.not_found(CredentialType.OTP)
        if otp.is_expired(now):
            return CredentialError.expired(CredentialType.OTP)
        if not self._hasher.matches(candidate, otp.otp_hash):
            return CredentialError.mismatch(CredentialType.OTP)
        return None

    async def _apply_verified_flag(
        self, uow: UnitOfWork, user_id: int, purpose: OtpPurpose, now: datetime
    ) -> None:
        user = await uow.users.find_by_id(user_id)
        if user is None or not user.mark_verified(purpose):
            return
        await uow.users.update_verified_flags(
            user.id,
            is_email_verified=user.is_email_verified,
            is_mobile_verified=user.is_mobile_verified,
            now=now,
        )

    @staticmethod
    def _user_not_found(user_id: int) -> NotFoundError:
        return NotFoundError(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found or cannot authenticate",
            resource_type="user",
            resource_id=str(user_id),
        )
