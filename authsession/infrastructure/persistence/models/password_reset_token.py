"""Password reset token database model."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from authsession.infrastructure.persistence.base import BaseMutableModel
from authsession.infrastructure.persistence.types import UTCDateTime


class PasswordResetTokenModel(BaseMutableModel):
    """Outstanding or consumed password reset token.

    Several rows may exist per user; only ``token_hash`` is unique.
    """

    __tablename__ = "password_reset_tokens"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    used_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
