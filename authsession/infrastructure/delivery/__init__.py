"""Credential delivery adapters."""

from authsession.infrastructure.delivery.logging_credential_delivery import (
    LoggingCredentialDelivery,
)

__all__ = ["LoggingCredentialDelivery"]
