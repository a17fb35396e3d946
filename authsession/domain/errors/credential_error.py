"""Credential lifecycle errors.

Failures of single-use or time-boxed credentials (OTPs, refresh tokens,
password-reset tokens). The precise reason is kept in ``code`` for logs and
callers; user-facing text is generic (see application.errors.user_messages).

Usage:
    from authsession.domain.errors import CredentialError, CredentialType
    from authsession.core.result import Failure

    return Failure(error=CredentialError.expired(CredentialType.OTP))
"""

from dataclasses import dataclass
from enum import Enum

from authsession.core.enums import ErrorCode
from authsession.core.errors import DomainError


class CredentialType(str, Enum):
    """Kind of credential an error refers to."""

    OTP = "otp"
    REFRESH_TOKEN = "refresh_token"
    PASSWORD_RESET_TOKEN = "password_reset_token"


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialError(DomainError):
    """A presented credential was rejected.

    Attributes:
        code: One of the CREDENTIAL_* error codes.
        message: Log-oriented description.
        credential_type: Which credential was rejected.
    """

    credential_type: CredentialType

    @classmethod
    def not_found(cls, credential_type: CredentialType) -> "CredentialError":
        return cls(
            code=ErrorCode.CREDENTIAL_NOT_FOUND,
            message=f"No matching {credential_type.value}",
            credential_type=credential_type,
        )

    @classmethod
    def expired(cls, credential_type: CredentialType) -> "CredentialError":
        return cls(
            code=ErrorCode.CREDENTIAL_EXPIRED,
            message=f"{credential_type.value} validity window elapsed",
            credential_type=credential_type,
        )

    @classmethod
    def revoked(cls, credential_type: CredentialType) -> "CredentialError":
        return cls(
            code=ErrorCode.CREDENTIAL_REVOKED,
            message=f"{credential_type.value} has been revoked",
            credential_type=credential_type,
        )

    @classmethod
    def already_used(cls, credential_type: CredentialType) -> "CredentialError":
        return cls(
            code=ErrorCode.CREDENTIAL_ALREADY_USED,
            message=f"{credential_type.value} was already used",
            credential_type=credential_type,
        )

    @classmethod
    def mismatch(cls, credential_type: CredentialType) -> "CredentialError":
        return cls(
            code=ErrorCode.CREDENTIAL_MISMATCH,
            message=f"{credential_type.value} does not match",
            credential_type=credential_type,
        )
