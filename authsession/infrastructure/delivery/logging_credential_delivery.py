"""Logging credential delivery (development adapter).

Stands in for the SMS/email/WhatsApp senders in development and testing.
Records who would have received what, without the secret itself.
"""

from datetime import datetime

from authsession.domain.entities import User
from authsession.domain.enums import OtpPurpose
from authsession.domain.protocols.logger_protocol import LoggerProtocol

_CHANNELS: dict[OtpPurpose, str] = {
    OtpPurpose.EMAIL_VERIFICATION: "email",
    OtpPurpose.MOBILE_VERIFICATION: "sms",
    OtpPurpose.WHATSAPP_VERIFICATION: "whatsapp",
    OtpPurpose.PASSWORD_RESET: "email",
    OtpPurpose.OTHER: "email",
}


class LoggingCredentialDelivery:
    """CredentialDeliveryProtocol implementation that only logs."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def send_otp(
        self, user: User, purpose: OtpPurpose, code: str, expires_at: datetime
    ) -> None:
        self._logger.info(
            "otp_delivery_stubbed",
            user_id=user.id,
            purpose=purpose.value,
            channel=_CHANNELS[purpose],
            expires_at=expires_at.isoformat(),
        )

    async def send_password_reset(
        self, user: User, token: str, expires_at: datetime
    ) -> None:
        self._logger.info(
            "password_reset_delivery_stubbed",
            user_id=user.id,
            channel="email",
            expires_at=expires_at.isoformat(),
        )
