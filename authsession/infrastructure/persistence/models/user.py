"""User database model.

Only the columns the authentication engine reads or writes are mapped.
"""

from datetime import datetime

from sqlalchemy import Boolean, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from authsession.infrastructure.persistence.base import BaseMutableModel
from authsession.infrastructure.persistence.types import UTCDateTime


class UserModel(BaseMutableModel):
    """User account (authentication slice).

    Fields:
        email: Lowercased email, unique (case-insensitively) when present.
        mobile: ``+<country><number>``, unique when present.
        password_hash: Bcrypt hash, empty until signup completes.
        role: UserRole value.
        is_email_verified / is_mobile_verified: OTP-proven ownership.
        is_signup_complete: Signup flow finished.
        is_active / is_deleted: Account availability.
        last_login_at: Last successful login.
    """

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True, index=True
    )
    mobile: Mapped[str | None] = mapped_column(
        String(32), nullable=True, unique=True, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    is_email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_mobile_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_signup_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_login_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)


# find_by_email compares lower(email)
Index("uq_users_email_lower", func.lower(UserModel.email), unique=True)
