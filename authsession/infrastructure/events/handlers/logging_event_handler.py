"""Logging event handler for domain events.

Structured logging for every event in EVENT_REGISTRY.

Log Levels:
    - INFO: successful operations (login, rotation, OTP issued/verified, ...)
    - WARNING: failures and security signals (login failed, OTP rejected,
      refresh token reuse)

Structured Fields:
    - event_id / occurred_at on every line
    - user_id, purpose, platform, reason where the event carries them
    - never codes, tokens or digests
"""

from authsession.domain.events import (
    AllSessionsRevoked,
    OtpIssued,
    OtpVerificationFailed,
    OtpVerificationSucceeded,
    PasswordResetCompleted,
    PasswordResetFailed,
    PasswordResetRequested,
    RefreshTokenReuseDetected,
    RefreshTokenRotated,
    SessionRevoked,
    UserLoginFailed,
    UserLoginSucceeded,
)
from authsession.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Method names follow ``handle_<snake_case_event_name>`` so the container
    can subscribe them from the event registry.

    Example:
        >>> handler = LoggingEventHandler(logger=logger)
        >>> bus.subscribe(SessionRevoked, handler.handle_session_revoked)
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    # =========================================================================
    # Login
    # =========================================================================

    async def handle_user_login_succeeded(self, event: UserLoginSucceeded) -> None:
        self._logger.info(
            "user_login_succeeded",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            platform=event.platform.value,
        )

    async def handle_user_login_failed(self, event: UserLoginFailed) -> None:
        self._logger.warning(
            "user_login_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            reason=event.reason,
        )

    # =========================================================================
    # One-time passwords
    # =========================================================================

    async def handle_otp_issued(self, event: OtpIssued) -> None:
        self._logger.info(
            "otp_issued",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            purpose=event.purpose.value,
            expires_at=event.expires_at.isoformat(),
        )

    async def handle_otp_verification_succeeded(
        self, event: OtpVerificationSucceeded
    ) -> None:
        self._logger.info(
            "otp_verification_succeeded",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            purpose=event.purpose.value,
        )

    async def handle_otp_verification_failed(
        self, event: OtpVerificationFailed
    ) -> None:
        self._logger.warning(
            "otp_verification_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            purpose=event.purpose.value,
            reason=event.reason,
        )

    # =========================================================================
    # Password reset
    # =========================================================================

    async def handle_password_reset_requested(
        self, event: PasswordResetRequested
    ) -> None:
        self._logger.info(
            "password_reset_requested",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            expires_at=event.expires_at.isoformat(),
        )

    async def handle_password_reset_completed(
        self, event: PasswordResetCompleted
    ) -> None:
        self._logger.info(
            "password_reset_completed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            revoked_sessions=event.revoked_sessions,
        )

    async def handle_password_reset_failed(self, event: PasswordResetFailed) -> None:
        self._logger.warning(
            "password_reset_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            reason=event.reason,
        )

    # =========================================================================
    # Refresh tokens and sessions
    # =========================================================================

    async def handle_refresh_token_rotated(self, event: RefreshTokenRotated) -> None:
        self._logger.info(
            "refresh_token_rotated",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            old_token_id=event.old_token_id,
            new_token_id=event.new_token_id,
            platform=event.platform.value,
        )

    async def handle_refresh_token_reuse_detected(
        self, event: RefreshTokenReuseDetected
    ) -> None:
        """Replayed refresh token (WARNING level, possible theft)."""
        self._logger.warning(
            "refresh_token_reuse_detected",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            token_id=event.token_id,
            revoked_reason=event.revoked_reason,
        )

    async def handle_session_revoked(self, event: SessionRevoked) -> None:
        self._logger.info(
            "session_revoked",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            token_id=event.token_id,
            reason=event.reason,
        )

    async def handle_all_sessions_revoked(self, event: AllSessionsRevoked) -> None:
        self._logger.info(
            "all_sessions_revoked",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=event.user_id,
            revoked_count=event.revoked_count,
            reason=event.reason,
        )
