"""One-time password record."""

from dataclasses import dataclass
from datetime import datetime

from authsession.domain.enums import OtpPurpose


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpRecord:
    """Outstanding OTP for one (user, purpose) pair.

    Attributes:
        id: Row identifier.
        user_id: Owner.
        purpose: What the code proves.
        otp_hash: SHA-256 hex digest of the code.
        expires_at: End of validity (inclusive).
        created_at: When the current code was issued.
    """

    id: int
    user_id: int
    purpose: OtpPurpose
    otp_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
