"""Refresh token database model.

One row per issued or rotated session credential. Rows are never physically
deleted except by the retention sweep.

Security:
    - token_hash: SHA-256 digest of the opaque value (NEVER plaintext)
    - expires_at: 30 days from issuance by default
    - is_revoked/revoked_at: rotation, logout, password reset
"""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from authsession.infrastructure.persistence.base import BaseMutableModel
from authsession.infrastructure.persistence.types import UTCDateTime


class RefreshTokenModel(BaseMutableModel):
    """Refresh token and session metadata.

    Fields:
        user_id: Owner (cascade delete).
        token_hash: SHA-256 hex digest, unique.
        expires_at: End of validity.
        is_revoked / revoked_at / revoked_reason: Revocation state.
        platform: Stored platform tag (legacy rows may hold free text or NULL,
            mapped through ``migrate_platform`` on load).
        last_activity_at: Last heartbeat or authenticated request.
        device_info: Client-provided device description.
        ip_address: Client address at issuance.
        is_active / is_deleted: Administrative flags.

    Indexes:
        - token_hash (unique) for lookup
        - user_id for per-user revocation and listing
        - (expires_at, is_revoked) for statistics and retention queries
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    is_revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    revoked_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    platform: Mapped[str | None] = mapped_column(String(16), nullable=True)
    last_activity_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    device_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_refresh_tokens_usable", "expires_at", "is_revoked"),
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshTokenModel("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"expires_at={self.expires_at}, "
            f"revoked={self.is_revoked}"
            f")>"
        )
