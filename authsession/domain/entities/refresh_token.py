"""Refresh token record (one per device session).

A refresh token row is also the session record: it carries the platform tag,
device metadata and the last-activity stamp that drive multi-device listing
and session statistics.
"""

from dataclasses import dataclass
from datetime import datetime

from authsession.domain.enums import SessionPlatform


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshTokenRecord:
    """Stored refresh token. Holds the digest, never the opaque value.

    Attributes:
        id: Row identifier.
        user_id: Owner.
        token_hash: SHA-256 hex digest of the opaque value.
        expires_at: End of validity.
        is_revoked: Revoked by rotation, logout or password reset.
        revoked_at: When it was revoked.
        revoked_reason: Why it was revoked.
        platform: Client platform tag.
        last_activity_at: Last recorded activity, None if never touched.
        device_info: Free-form device description from the client.
        ip_address: Client address at issuance.
        is_active: Administrative enable flag.
        is_deleted: Soft-delete flag.
        created_at: Issuance time.
    """

    id: int
    user_id: int
    token_hash: str
    expires_at: datetime
    created_at: datetime
    platform: SessionPlatform = SessionPlatform.UNKNOWN
    is_revoked: bool = False
    revoked_at: datetime | None = None
    revoked_reason: str | None = None
    last_activity_at: datetime | None = None
    device_info: str | None = None
    ip_address: str | None = None
    is_active: bool = True
    is_deleted: bool = False

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        """Check the usability predicate.

        A token is usable iff it is not revoked, not deleted, active and
        strictly before its expiry.
        """
        return (
            not self.is_revoked
            and not self.is_deleted
            and self.is_active
            and not self.is_expired(now)
        )

    @property
    def activity_reference(self) -> datetime:
        """Last activity, falling back to issuance for never-touched tokens."""
        return self.last_activity_at or self.created_at
