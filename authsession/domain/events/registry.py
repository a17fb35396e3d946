"""Event registry.

Single list of every domain event the engine publishes. The container walks
it at startup and subscribes the matching ``handle_<event_name>`` method of
each handler, so adding an event means adding it here and giving the
handler a method (tests enforce the second half).
"""

import re

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

EVENT_REGISTRY: tuple[type[DomainEvent], ...] = (
    UserLoginSucceeded,
    UserLoginFailed,
    OtpIssued,
    OtpVerificationSucceeded,
    OtpVerificationFailed,
    PasswordResetRequested,
    PasswordResetCompleted,
    PasswordResetFailed,
    RefreshTokenRotated,
    RefreshTokenReuseDetected,
    SessionRevoked,
    AllSessionsRevoked,
)


def handler_method_name(event_type: type[DomainEvent]) -> str:
    """Handler method name for an event class.

    Example:
        >>> handler_method_name(RefreshTokenRotated)
        'handle_refresh_token_rotated'
    """
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", event_type.__name__).lower()
    return f"handle_{snake}"
