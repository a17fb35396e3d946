"""OtpRepository protocol (port)."""

from datetime import datetime
from typing import Protocol

from authsession.domain.entities import OtpRecord
from authsession.domain.enums import OtpPurpose


class OtpRepository(Protocol):
    """Protocol for OTP persistence (one row per user and purpose)."""

    async def upsert(
        self,
        *,
        user_id: int,
        purpose: OtpPurpose,
        otp_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> OtpRecord:
        """Create the (user, purpose) row or overwrite the existing one."""
        ...

    async def find(self, user_id: int, purpose: OtpPurpose) -> OtpRecord | None:
        ...

    async def consume(self, otp_id: int, otp_hash: str) -> bool:
        """Delete the row if it still holds ``otp_hash``.

        Returns:
            True for exactly one caller per issued code.
        """
        ...

    async def purge(self, *, before: datetime) -> int:
        """Delete OTPs that expired before ``before``. Returns count."""
        ...
