"""Application services.

Usage:
    from authsession.application.services import AuthSessionFacade
"""

from authsession.application.services.auth_session_facade import AuthSessionFacade
from authsession.application.services.otp_service import OtpService
from authsession.application.services.password_reset_service import (
    PasswordResetService,
)
from authsession.application.services.refresh_token_store import RefreshTokenStore
from authsession.application.services.retention_sweeper import RetentionSweeper
from authsession.application.services.session_activity_tracker import (
    SessionActivityTracker,
)
from authsession.application.services.session_stats_aggregator import (
    SessionStatsAggregator,
)

__all__ = [
    "AuthSessionFacade",
    "OtpService",
    "PasswordResetService",
    "RefreshTokenStore",
    "RetentionSweeper",
    "SessionActivityTracker",
    "SessionStatsAggregator",
]
