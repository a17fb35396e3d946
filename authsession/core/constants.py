"""Centralized constants for internal implementation details.

These are fixed properties of the credential formats, NOT environment-specific
configuration. Lifetimes and windows live in ``authsession.core.config``.

Example:
    >>> from authsession.core.constants import RESET_TOKEN_BYTES
    >>> token = secrets.token_hex(RESET_TOKEN_BYTES)
"""

# =============================================================================
# Credential formats
# =============================================================================

OTP_DIGITS: int = 4
"""Number of decimal digits in a one-time password."""

REFRESH_TOKEN_BYTES: int = 48
"""Random bytes behind an opaque refresh token (384 bits, url-safe base64)."""

RESET_TOKEN_BYTES: int = 32
"""Random bytes behind a password-reset token (256 bits)."""

RESET_TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded reset token string (RESET_TOKEN_BYTES * 2)."""

SECRET_DIGEST_HEX_LENGTH: int = 64
"""Length of a stored SHA-256 secret digest in hex."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Revocation reasons
# =============================================================================

REVOKE_REASON_ROTATED: str = "rotated"
REVOKE_REASON_LOGOUT: str = "logout"
REVOKE_REASON_LOGOUT_ALL: str = "logout_all"
REVOKE_REASON_PASSWORD_RESET: str = "password_reset"
REVOKE_REASON_ACCOUNT_UNAVAILABLE: str = "account_unavailable"


# =============================================================================
# Passwords
# =============================================================================

PASSWORD_MIN_LENGTH: int = 6
"""Minimum length of a new password."""


# =============================================================================
# Mobile numbers
# =============================================================================

MOBILE_PREFIX: str = "+"
"""Stored mobile numbers carry a leading plus and the country code."""
