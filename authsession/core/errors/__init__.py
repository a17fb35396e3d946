"""Core errors package.

Usage:
    from authsession.core.errors import DomainError, ConflictError, NotFoundError
"""

from authsession.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from authsession.core.errors.domain_error import DomainError
from authsession.core.errors.storage_unavailable import StorageUnavailableError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "StorageUnavailableError",
]
