"""SQLAlchemy repository adapters."""

from authsession.infrastructure.persistence.repositories.otp_repository import (
    OtpRepository,
)
from authsession.infrastructure.persistence.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from authsession.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from authsession.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "OtpRepository",
    "PasswordResetTokenRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
