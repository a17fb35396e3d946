"""Domain events.

Usage:
    from authsession.domain.events import DomainEvent, RefreshTokenRotated
"""

from authsession.domain.events.auth_events import (
    OtpIssued,
    OtpVerificationFailed,
    OtpVerificationSucceeded,
    PasswordResetCompleted,
    PasswordResetFailed,
    PasswordResetRequested,
    UserLoginFailed,
    UserLoginSucceeded,
)
from authsession.domain.events.base_event import DomainEvent
from authsession.domain.events.session_events import (
    AllSessionsRevoked,
    RefreshTokenReuseDetected,
    RefreshTokenRotated,
    SessionRevoked,
)

__all__ = [
    "AllSessionsRevoked",
    "DomainEvent",
    "OtpIssued",
    "OtpVerificationFailed",
    "OtpVerificationSucceeded",
    "PasswordResetCompleted",
    "PasswordResetFailed",
    "PasswordResetRequested",
    "RefreshTokenReuseDetected",
    "RefreshTokenRotated",
    "SessionRevoked",
    "UserLoginFailed",
    "UserLoginSucceeded",
]
