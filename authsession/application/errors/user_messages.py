"""User-facing error messages.

Domain errors carry precise codes for logs and callers. What an end user
sees must not tell an attacker more than necessary: a wrong OTP and an
expired OTP read the same, and so do an unknown account and a wrong
password.

Usage:
    match result:
        case Failure(error=error):
            return {"detail": public_message(error)}
"""

from authsession.core.enums import ErrorCode
from authsession.core.errors import ConflictError, DomainError
from authsession.domain.errors import CredentialError, CredentialType

_GENERIC = "Something went wrong. Please try again."

_BY_CREDENTIAL: dict[CredentialType, str] = {
    CredentialType.OTP: "The verification code is invalid or has expired.",
    CredentialType.REFRESH_TOKEN: "Your session has ended. Please log in again.",
    CredentialType.PASSWORD_RESET_TOKEN: (
        "This password reset link is invalid or has expired."
    ),
}

# A lost consume race reads like any other spent single-use credential.
_CONSUMED_CREDENTIALS = frozenset(
    {CredentialType.OTP.value, CredentialType.PASSWORD_RESET_TOKEN.value}
)

_BY_CODE: dict[ErrorCode, str] = {
    ErrorCode.INVALID_CREDENTIALS: "Invalid login credentials.",
    ErrorCode.INVALID_LOGIN_ID: "Invalid login credentials.",
    ErrorCode.INVALID_PASSWORD: "Password does not meet the requirements.",
    ErrorCode.VALIDATION_FAILED: "Please check your input and try again.",
    ErrorCode.SIGNUP_INCOMPLETE: "Please complete signup before logging in.",
    ErrorCode.USER_NOT_FOUND: _GENERIC,
    ErrorCode.TOKEN_EXPIRED: "Your session has ended. Please log in again.",
    ErrorCode.TOKEN_INVALID: "Your session has ended. Please log in again.",
    ErrorCode.RESOURCE_CONFLICT: "This request was already processed.",
    ErrorCode.STORAGE_UNAVAILABLE: (
        "The service is temporarily unavailable. Please try again shortly."
    ),
}


def public_message(error: DomainError) -> str:
    """Return generic, non-enumerating text for an error.

    Args:
        error: Any domain or application error.

    Returns:
        Message safe to display to the end user.
    """
    if isinstance(error, CredentialError):
        return _BY_CREDENTIAL.get(error.credential_type, _GENERIC)
    if isinstance(error, ConflictError) and error.resource_type in _CONSUMED_CREDENTIALS:
        return _BY_CREDENTIAL[CredentialType(error.resource_type)]
    return _BY_CODE.get(error.code, _GENERIC)
