"""Refresh token and session domain events.

Handlers:
- LoggingEventHandler: all events (reuse detection at WARNING level)
"""

from dataclasses import dataclass

from authsession.domain.enums import SessionPlatform
from authsession.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class RefreshTokenRotated(DomainEvent):
    """Old refresh token revoked and a successor issued.

    Attributes:
        user_id: Owner of both tokens.
        old_token_id: Row id of the revoked token.
        new_token_id: Row id of the successor.
        platform: Platform carried over to the successor.
    """

    user_id: int
    old_token_id: int
    new_token_id: int
    platform: SessionPlatform


@dataclass(frozen=True, kw_only=True)
class RefreshTokenReuseDetected(DomainEvent):
    """A refresh token was presented after it had already been revoked.

    Either a client retried with a stale token or the token leaked. Logged
    at WARNING level for security monitoring.

    Attributes:
        user_id: Owner of the replayed token.
        token_id: Row id of the replayed token.
        revoked_reason: Why the token had been revoked.
    """

    user_id: int
    token_id: int
    revoked_reason: str | None


@dataclass(frozen=True, kw_only=True)
class SessionRevoked(DomainEvent):
    """A single refresh token was revoked (logout)."""

    user_id: int
    token_id: int
    reason: str


@dataclass(frozen=True, kw_only=True)
class AllSessionsRevoked(DomainEvent):
    """Every refresh token of a user was revoked (logout-all, password reset)."""

    user_id: int
    revoked_count: int
    reason: str
