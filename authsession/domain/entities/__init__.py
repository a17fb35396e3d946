"""Domain entities.

Usage:
    from authsession.domain.entities import User, RefreshTokenRecord
"""

from authsession.domain.entities.otp import OtpRecord
from authsession.domain.entities.password_reset_token import PasswordResetTokenRecord
from authsession.domain.entities.refresh_token import RefreshTokenRecord
from authsession.domain.entities.session_stats import PlatformBreakdown, SessionStats
from authsession.domain.entities.user import User

__all__ = [
    "OtpRecord",
    "PasswordResetTokenRecord",
    "PlatformBreakdown",
    "RefreshTokenRecord",
    "SessionStats",
    "User",
]
