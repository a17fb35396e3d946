"""Out-of-band delivery protocol for OTP codes and reset tokens.

The engine never transmits secrets over its own channel; it hands the
plaintext to this collaborator (SMS, email or WhatsApp sender) exactly once.
"""

from datetime import datetime
from typing import Protocol

from authsession.domain.entities import User
from authsession.domain.enums import OtpPurpose


class CredentialDeliveryProtocol(Protocol):
    """Delivers freshly issued secrets to the user."""

    async def send_otp(
        self, user: User, purpose: OtpPurpose, code: str, expires_at: datetime
    ) -> None:
        """Deliver an OTP code through the channel matching its purpose."""
        ...

    async def send_password_reset(
        self, user: User, token: str, expires_at: datetime
    ) -> None:
        """Deliver a password-reset token (typically as a link by email)."""
        ...
