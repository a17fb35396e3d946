"""OTP purpose enumeration.

An OTP row is unique per (user, purpose): requesting a new code for the same
purpose replaces the previous one.
"""

from enum import Enum


class OtpPurpose(str, Enum):
    """What a one-time password is meant to prove."""

    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    MOBILE_VERIFICATION = "MOBILE_VERIFICATION"
    WHATSAPP_VERIFICATION = "WHATSAPP_VERIFICATION"
    PASSWORD_RESET = "PASSWORD_RESET"
    OTHER = "OTHER"

    @property
    def verifies_email(self) -> bool:
        """Successful verification marks the user's email as verified."""
        return self is OtpPurpose.EMAIL_VERIFICATION

    @property
    def verifies_mobile(self) -> bool:
        """Successful verification marks the user's mobile number as verified.

        WhatsApp codes are delivered to the same number, so they verify it too.
        """
        return self in (
            OtpPurpose.MOBILE_VERIFICATION,
            OtpPurpose.WHATSAPP_VERIFICATION,
        )
