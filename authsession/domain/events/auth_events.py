"""Authentication and credential domain events.

Pattern: SUCCEEDED / FAILED per workflow, published after the unit of work
has committed (or rolled back). Events never carry plaintext codes, tokens
or digests.

Handlers:
- LoggingEventHandler: all events
"""

from dataclasses import dataclass
from datetime import datetime

from authsession.domain.enums import OtpPurpose, SessionPlatform
from authsession.domain.events.base_event import DomainEvent


# ═══════════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class UserLoginSucceeded(DomainEvent):
    """User logged in and received a token pair.

    Attributes:
        user_id: Authenticated user.
        platform: Platform of the new session.
    """

    user_id: int
    platform: SessionPlatform


@dataclass(frozen=True, kw_only=True)
class UserLoginFailed(DomainEvent):
    """Login rejected.

    Attributes:
        user_id: Matched user, None when no account matched the login id.
        reason: Machine-readable reason (error code value).
    """

    user_id: int | None
    reason: str


# ═══════════════════════════════════════════════════════════════
# One-time passwords
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class OtpIssued(DomainEvent):
    """A new OTP replaced any outstanding one for (user, purpose)."""

    user_id: int
    purpose: OtpPurpose
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class OtpVerificationSucceeded(DomainEvent):
    """OTP verified and consumed."""

    user_id: int
    purpose: OtpPurpose


@dataclass(frozen=True, kw_only=True)
class OtpVerificationFailed(DomainEvent):
    """OTP verification rejected.

    Attributes:
        reason: not_found, expired, mismatch or conflict (error code value).
    """

    user_id: int
    purpose: OtpPurpose
    reason: str


# ═══════════════════════════════════════════════════════════════
# Password reset
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class PasswordResetRequested(DomainEvent):
    user_id: int
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class PasswordResetCompleted(DomainEvent):
    """Password replaced and every session of the user revoked.

    Attributes:
        user_id: User whose password changed.
        revoked_sessions: Number of refresh tokens revoked in the same commit.
    """

    user_id: int
    revoked_sessions: int


@dataclass(frozen=True, kw_only=True)
class PasswordResetFailed(DomainEvent):
    reason: str
