"""Domain enums.

Usage:
    from authsession.domain.enums import OtpPurpose, SessionPlatform
"""

from authsession.domain.enums.activity_status import ActivityStatus
from authsession.domain.enums.otp_purpose import OtpPurpose
from authsession.domain.enums.session_platform import SessionPlatform, migrate_platform
from authsession.domain.enums.user_role import UserRole
from authsession.domain.enums.verification_result import VerificationResult

__all__ = [
    "ActivityStatus",
    "OtpPurpose",
    "SessionPlatform",
    "UserRole",
    "VerificationResult",
    "migrate_platform",
]
