"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*)
- Resource errors (*_NOT_FOUND)
- Credential lifecycle errors (CREDENTIAL_*)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, SIGNUP_INCOMPLETE)
- Conflict errors (RESOURCE_CONFLICT)
- Storage errors (STORAGE_UNAVAILABLE)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_LOGIN_ID = "invalid_login_id"
    INVALID_PASSWORD = "invalid_password"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Credential lifecycle (OTP, refresh token, reset token)
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    CREDENTIAL_EXPIRED = "credential_expired"
    CREDENTIAL_REVOKED = "credential_revoked"
    CREDENTIAL_ALREADY_USED = "credential_already_used"
    CREDENTIAL_MISMATCH = "credential_mismatch"

    # Conflict errors
    RESOURCE_CONFLICT = "resource_conflict"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    SIGNUP_INCOMPLETE = "signup_incomplete"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"

    # Storage errors
    STORAGE_UNAVAILABLE = "storage_unavailable"
