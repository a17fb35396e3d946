"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from authsession.infrastructure.persistence.models.otp import OtpModel
from authsession.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)
from authsession.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)
from authsession.infrastructure.persistence.models.user import UserModel

__all__ = [
    "OtpModel",
    "PasswordResetTokenModel",
    "RefreshTokenModel",
    "UserModel",
]
