"""OTP database model (unique per user and purpose)."""

from datetime import datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authsession.infrastructure.persistence.base import BaseModel
from authsession.infrastructure.persistence.types import UTCDateTime


class OtpModel(BaseModel):
    """Outstanding one-time password.

    A new request for the same (user_id, purpose) overwrites the row in place,
    so ``created_at`` is the issuance time of the current code.
    """

    __tablename__ = "otps"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    purpose: Mapped[str] = mapped_column(String(32), nullable=False)
    otp_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "purpose", name="uq_otps_user_purpose"),
    )
