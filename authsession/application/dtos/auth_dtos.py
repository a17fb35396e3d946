"""Authentication DTOs (Data Transfer Objects).

Inputs and results of the application services. Objects carrying a plaintext
secret (IssuedOtp, IssuedRefreshToken, IssuedResetToken, TokenPair) exist
only in memory on the way to the client or the delivery collaborator and
hide the secret from ``repr``.

DTOs:
    - LoginCredentials: Input to AuthSessionFacade.login
    - TokenPair: Result of login and refresh
    - IssuedRefreshToken: Result of RefreshTokenStore.issue / rotate
    - IssuedOtp: Result of OtpService.request_otp
    - IssuedResetToken: Result of PasswordResetService.request_reset
    - SweepReport: Result of RetentionSweeper.sweep
"""

from dataclasses import dataclass, field
from datetime import datetime

from authsession.domain.entities import RefreshTokenRecord, User
from authsession.domain.enums import SessionPlatform


@dataclass(frozen=True, kw_only=True)
class LoginCredentials:
    """Login request.

    Attributes:
        login_id: Email address or mobile number.
        password: Plaintext password.
        platform: Client platform for the new session.
        device_info: Client-provided device description.
        ip_address: Client address.
    """

    login_id: str
    password: str = field(repr=False)
    platform: SessionPlatform = SessionPlatform.UNKNOWN
    device_info: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class TokenPair:
    """Tokens returned to the client.

    Attributes:
        access_token: JWT access token (short-lived, 15 minutes).
        refresh_token: Opaque refresh token (long-lived, 30 days).
        user_id: Authenticated user.
        token_type: Token type (always "bearer").
        expires_in: Access token lifetime in seconds.
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    user_id: int
    token_type: str = "bearer"
    expires_in: int = 900


@dataclass(frozen=True, kw_only=True)
class IssuedRefreshToken:
    """Newly issued refresh token.

    Attributes:
        token: Opaque value to hand to the client (never persisted).
        record: Stored row (holds only the digest).
    """

    token: str = field(repr=False)
    record: RefreshTokenRecord


@dataclass(frozen=True, kw_only=True)
class IssuedOtp:
    """Newly issued OTP, ready for out-of-band delivery.

    Attributes:
        code: 4-digit plaintext code.
        expires_at: End of validity.
        recipient: User the code belongs to.
    """

    code: str = field(repr=False)
    expires_at: datetime
    recipient: User


@dataclass(frozen=True, kw_only=True)
class IssuedResetToken:
    """Newly issued password-reset token, ready for out-of-band delivery."""

    token: str = field(repr=False)
    expires_at: datetime
    recipient: User


@dataclass(frozen=True, kw_only=True)
class SweepReport:
    """Rows removed by one retention sweep."""

    refresh_tokens: int = 0
    otps: int = 0
    password_resets: int = 0

    @property
    def total(self) -> int:
        return self.refresh_tokens + self.otps + self.password_resets
