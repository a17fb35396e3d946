"""Authentication and session facade.

Single entry point for transport adapters (HTTP, GraphQL, workers). Every
operation returns a Result; expected failures come back as typed domain
errors and a storage outage comes back as a retryable StorageError, so no
exception crosses this boundary.

Login flow:
1. Parse the login id (``@`` means email, anything else a mobile number)
2. Look the user up
3. Verify the password with bcrypt (against a dummy hash when no user
   matched, so unknown accounts take as long as wrong passwords)
4. Unknown user, wrong password, inactive or deleted account: one
   INVALID_CREDENTIALS error
5. Password correct but signup incomplete: SIGNUP_INCOMPLETE
6. Stamp last login and issue the refresh token in one transaction
7. Mint the access token and publish UserLoginSucceeded

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- Blocking bcrypt calls run in the default executor
"""

import asyncio
import secrets
from collections.abc import Awaitable
from datetime import datetime
from functools import partial
from typing import TypeVar

from authsession.application.dtos import IssuedRefreshToken, LoginCredentials, TokenPair
from authsession.application.errors import StorageError
from authsession.application.services.otp_service import OtpService
from authsession.application.services.password_reset_service import (
    PasswordResetService,
)
from authsession.application.services.refresh_token_store import RefreshTokenStore
from authsession.application.services.session_activity_tracker import (
    SessionActivityTracker,
)
from authsession.application.services.session_stats_aggregator import (
    SessionStatsAggregator,
)
from authsession.core.constants import (
    PASSWORD_MIN_LENGTH,
    REVOKE_REASON_ACCOUNT_UNAVAILABLE,
    REVOKE_REASON_LOGOUT,
    REVOKE_REASON_LOGOUT_ALL,
)
from authsession.core.enums import ErrorCode
from authsession.core.errors import (
    AuthenticationError,
    DomainError,
    StorageUnavailableError,
    ValidationError,
)
from authsession.core.result import Failure, Result, Success
from authsession.domain.entities import RefreshTokenRecord, SessionStats, User
from authsession.domain.enums import OtpPurpose, VerificationResult
from authsession.domain.errors import AuthMessages, CredentialError
from authsession.domain.events import UserLoginFailed, UserLoginSucceeded
from authsession.domain.protocols import (
    AccessTokenClaims,
    AccessTokenProtocol,
    BiometricTokenVaultProtocol,
    ClockProtocol,
    CredentialDeliveryProtocol,
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UnitOfWorkFactory,
)
from authsession.domain.value_objects import LoginId, LoginIdKind

T = TypeVar("T")


class AuthSessionFacade:
    """Orchestrates login, refresh, logout, OTP and password reset flows.

    Example:
        >>> result = await facade.login(
        ...     LoginCredentials(login_id="tutor@example.com", password="secret1")
        ... )
        >>> match result:
        ...     case Success(value=pair):
        ...         pair.access_token, pair.refresh_token
        ...     case Failure(error=error):
        ...         public_message(error)
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        refresh_tokens: RefreshTokenStore,
        otp_service: OtpService,
        password_resets: PasswordResetService,
        activity_tracker: SessionActivityTracker,
        stats_aggregator: SessionStatsAggregator,
        password_service: PasswordHashingProtocol,
        access_tokens: AccessTokenProtocol,
        delivery: CredentialDeliveryProtocol,
        biometric_vault: BiometricTokenVaultProtocol,
        clock: ClockProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._refresh_tokens = refresh_tokens
        self._otp_service = otp_service
        self._password_resets = password_resets
        self._activity_tracker = activity_tracker
        self._stats_aggregator = stats_aggregator
        self._password_service = password_service
        self._access_tokens = access_tokens
        self._delivery = delivery
        self._biometric_vault = biometric_vault
        self._clock = clock
        self._event_bus = event_bus
        self._logger = logger
        # Verified against when no user matched; the plaintext is discarded
        self._dummy_hash = password_service.hash_password(secrets.token_urlsafe(16))

    # =========================================================================
    # Login / refresh / logout
    # =========================================================================

    async def login(self, credentials: LoginCredentials) -> Result[TokenPair, DomainError]:
        """Authenticate with login id and password and open a session.

        Returns:
            Success(TokenPair) for a new session.
            Failure(AuthenticationError) INVALID_CREDENTIALS or SIGNUP_INCOMPLETE.
            Failure(StorageError) if the credential store is unavailable.
        """
        return await self._guarded("login", self._login(credentials))

    async def refresh(self, refresh_value: str) -> Result[TokenPair, DomainError]:
        """Rotate a refresh token and mint a new access token.

        Returns:
            Success(TokenPair) with the successor refresh token.
            Failure(AuthenticationError) TOKEN_EXPIRED or TOKEN_INVALID (the
                precise credential code is kept in ``details["reason"]``).
            Failure(ConflictError) if no successor could be generated.
        """
        return await self._guarded("refresh", self._refresh(refresh_value))

    async def logout(self, refresh_value: str) -> Result[bool, DomainError]:
        """End one session. Idempotent; False when nothing was revoked."""
        return await self._guarded(
            "logout", self._refresh_tokens.revoke(refresh_value, REVOKE_REASON_LOGOUT)
        )

    async def logout_all(self, user_id: int) -> Result[int, DomainError]:
        """End every session of a user and clear the device biometric token."""
        return await self._guarded("logout_all", self._logout_all(user_id))

    # =========================================================================
    # One-time passwords
    # =========================================================================

    async def send_otp(
        self, user_id: int, purpose: OtpPurpose
    ) -> Result[datetime, DomainError]:
        """Issue a code and hand it to the delivery channel.

        Returns:
            Success(expires_at). The code itself never leaves through here.
        """
        return await self._guarded("send_otp", self._send_otp(user_id, purpose))

    async def verify_otp(
        self, user_id: int, purpose: OtpPurpose, code: str
    ) -> Result[VerificationResult, DomainError]:
        return await self._guarded(
            "verify_otp", self._otp_service.verify_otp(user_id, purpose, code)
        )

    # =========================================================================
    # Password reset
    # =========================================================================

    async def forgot_password(self, email: str) -> Result[None, DomainError]:
        """Start a password reset for an email address.

        Unknown, inactive and deleted accounts get the same Success(None) as
        real ones, so the response never reveals whether an account exists.
        """
        return await self._guarded("forgot_password", self._forgot_password(email))

    async def validate_reset_token(self, token: str) -> Result[bool, DomainError]:
        return await self._guarded(
            "validate_reset_token", self._valid_reset(token)
        )

    async def reset_password(
        self, token: str, new_password: str
    ) -> Result[int, DomainError]:
        """Set a new password with a reset token and end every session.

        Returns:
            Success(user_id).
            Failure(ValidationError) if the password is too short.
            Failure(CredentialError) NotFound / AlreadyUsed / Expired.
        """
        return await self._guarded(
            "reset_password", self._reset_password(token, new_password)
        )

    # =========================================================================
    # Access tokens and sessions
    # =========================================================================

    def authenticate_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, DomainError]:
        """Verify an access token against the engine clock."""
        return self._access_tokens.validate_access_token(token, now=self._clock.now())

    async def record_activity(self, refresh_value: str) -> bool:
        """Heartbeat entry point. Never fails the caller."""
        return await self._activity_tracker.record_activity(refresh_value)

    async def session_stats(self) -> Result[SessionStats, DomainError]:
        return await self._guarded("session_stats", self._session_stats())

    async def list_sessions(
        self, user_id: int
    ) -> Result[list[RefreshTokenRecord], DomainError]:
        """Usable sessions (devices) of a user, newest first."""
        return await self._guarded("list_sessions", self._list_sessions(user_id))

    # =========================================================================
    # Flows
    # =========================================================================

    async def _login(self, credentials: LoginCredentials) -> Result[TokenPair, DomainError]:
        now = self._clock.now()
        user = await self._find_login_user(credentials.login_id)

        password_hash = user.password_hash if user and user.password_hash else self._dummy_hash
        password_ok = await self._verify_password(credentials.password, password_hash)

        if user is None or not password_ok or not user.can_authenticate():
            return await self._login_failed(
                user.id if user else None,
                ErrorCode.INVALID_CREDENTIALS,
                AuthMessages.INVALID_CREDENTIALS,
            )
        if not user.is_signup_complete:
            return await self._login_failed(
                user.id, ErrorCode.SIGNUP_INCOMPLETE, AuthMessages.SIGNUP_INCOMPLETE
            )

        async with self._uow_factory() as uow:
            await uow.users.update_last_login(user.id, now=now)
            issued = await self._refresh_tokens.issue_in(
                uow,
                user_id=user.id,
                platform=credentials.platform,
                device_info=credentials.device_info,
                ip_address=credentials.ip_address,
                now=now,
            )
            if isinstance(issued, Failure):
                await uow.rollback()
                return issued

        await self._event_bus.publish(
            UserLoginSucceeded(
                occurred_at=now, user_id=user.id, platform=credentials.platform
            )
        )
        return Success(value=self._token_pair(user, issued.value, now))

    async def _refresh(self, refresh_value: str) -> Result[TokenPair, DomainError]:
        rotated = await self._refresh_tokens.rotate(refresh_value)
        if isinstance(rotated, Failure):
            return Failure(error=self._as_token_error(rotated.error))

        successor = rotated.value
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(successor.record.user_id)

        if user is None or not user.can_authenticate():
            await self._refresh_tokens.revoke_all_for_user(
                successor.record.user_id, REVOKE_REASON_ACCOUNT_UNAVAILABLE
            )
            self._logger.warning(
                "refresh_rejected_account_unavailable",
                user_id=successor.record.user_id,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthMessages.ACCOUNT_UNAVAILABLE,
                )
            )

        return Success(value=self._token_pair(user, successor, self._clock.now()))

    async def _logout_all(self, user_id: int) -> Result[int, DomainError]:
        result = await self._refresh_tokens.revoke_all_for_user(
            user_id, REVOKE_REASON_LOGOUT_ALL
        )
        if isinstance(result, Success):
            await self._biometric_vault.clear_biometric_token()
        return result

    async def _send_otp(
        self, user_id: int, purpose: OtpPurpose
    ) -> Result[datetime, DomainError]:
        result = await self._otp_service.request_otp(user_id, purpose)
        if isinstance(result, Failure):
            return result

        issued = result.value
        await self._delivery.send_otp(
            issued.recipient, purpose, issued.code, issued.expires_at
        )
        return Success(value=issued.expires_at)

    async def _forgot_password(self, email: str) -> Result[None, DomainError]:
        login_id = LoginId.parse(email)
        if login_id is None or login_id.kind is not LoginIdKind.EMAIL:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_LOGIN_ID,
                    message="A valid email address is required",
                    field="email",
                )
            )

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_email(login_id.value)
        if user is None or not user.can_authenticate():
            self._logger.info("password_reset_skipped_unknown_account")
            return Success(value=None)

        result = await self._password_resets.request_reset(user.id)
        if isinstance(result, Failure):
            return result

        issued = result.value
        await self._delivery.send_password_reset(
            issued.recipient, issued.token, issued.expires_at
        )
        return Success(value=None)

    async def _valid_reset(self, token: str) -> Result[bool, DomainError]:
        return Success(value=await self._password_resets.validate_reset_token(token))

    async def _reset_password(
        self, token: str, new_password: str
    ) -> Result[int, DomainError]:
        if len(new_password) < PASSWORD_MIN_LENGTH:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PASSWORD,
                    message=f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
                    field="password",
                )
            )

        loop = asyncio.get_running_loop()
        new_hash = await loop.run_in_executor(
            None, partial(self._password_service.hash_password, new_password)
        )
        return await self._password_resets.consume_reset(token, new_hash)

    async def _session_stats(self) -> Result[SessionStats, DomainError]:
        return Success(value=await self._stats_aggregator.current_stats())

    async def _list_sessions(
        self, user_id: int
    ) -> Result[list[RefreshTokenRecord], DomainError]:
        return Success(value=await self._refresh_tokens.list_sessions_for_user(user_id))

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _guarded(
        self, operation: str, call: Awaitable[Result[T, DomainError]]
    ) -> Result[T, DomainError]:
        """Await an operation, reporting a storage outage as a retryable Failure."""
        try:
            return await call
        except StorageUnavailableError as e:
            self._logger.error(
                "storage_unavailable",
                error=e,
                operation=operation,
                stage=e.operation,
            )
            return Failure(error=StorageError.from_exception(operation, e))

    async def _find_login_user(self, raw_login_id: str) -> User | None:
        login_id = LoginId.parse(raw_login_id)
        if login_id is None:
            return None
        async with self._uow_factory() as uow:
            if login_id.kind is LoginIdKind.EMAIL:
                return await uow.users.find_by_email(login_id.value)
            return await uow.users.find_by_mobile(login_id.value)

    async def _verify_password(self, password: str, password_hash: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            partial(self._password_service.verify_password, password, password_hash),
        )

    async def _login_failed(
        self, user_id: int | None, code: ErrorCode, message: str
    ) -> Result[TokenPair, DomainError]:
        await self._event_bus.publish(
            UserLoginFailed(
                occurred_at=self._clock.now(), user_id=user_id, reason=code.value
            )
        )
        return Failure(error=AuthenticationError(code=code, message=message))

    def _token_pair(
        self, user: User, refresh: IssuedRefreshToken, now: datetime
    ) -> TokenPair:
        access_token = self._access_tokens.generate_access_token(
            user_id=user.id, role=user.role, now=now
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh.token,
            user_id=user.id,
            expires_in=self._access_tokens.lifetime_seconds,
        )

    @staticmethod
    def _as_token_error(error: DomainError) -> DomainError:
        """Report refresh-token rejections as access-level token errors."""
        if not isinstance(error, CredentialError):
            return error
        if error.code is ErrorCode.CREDENTIAL_EXPIRED:
            return AuthenticationError(
                code=ErrorCode.TOKEN_EXPIRED,
                message=AuthMessages.EXPIRED_TOKEN,
                details={"reason": error.code.value},
            )
        return AuthenticationError(
            code=ErrorCode.TOKEN_INVALID,
            message=AuthMessages.INVALID_TOKEN,
            details={"reason": error.code.value},
        )
