"""Domain errors package.

Usage:
    from authsession.domain.errors import CredentialError, CredentialType
"""

from authsession.domain.errors.auth_messages import AuthMessages
from authsession.domain.errors.credential_error import CredentialError, CredentialType

__all__ = [
    "AuthMessages",
    "CredentialError",
    "CredentialType",
]
