"""Application layer errors.

Exports:
    StorageError: Retryable failure reported when the credential store is down
    public_message: Generic user-facing text for any domain error
"""

from authsession.application.errors.storage_error import StorageError
from authsession.application.errors.user_messages import public_message

__all__ = [
    "StorageError",
    "public_message",
]
