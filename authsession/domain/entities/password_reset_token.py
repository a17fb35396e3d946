"""Password reset token record."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordResetTokenRecord:
    """Stored password-reset token.

    Several rows may be outstanding for the same user; each is single use.

    Attributes:
        id: Row identifier.
        user_id: Owner.
        token_hash: SHA-256 hex digest of the token.
        expires_at: End of validity (inclusive).
        is_used: Consumed flag.
        used_at: Consumption time.
        created_at: Issuance time.
    """

    id: int
    user_id: int
    token_hash: str
    expires_at: datetime
    created_at: datetime
    is_used: bool = False
    used_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_valid(self, now: datetime) -> bool:
        return not self.is_used and not self.is_expired(now)
