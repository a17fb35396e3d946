"""Storage failure reported through the Result channel.

The unit of work raises StorageUnavailableError; AuthSessionFacade turns it
into ``Failure(StorageError(...))`` so transport adapters handle outages the
same way as any other failure, while still being able to tell callers to
retry.
"""

from dataclasses import dataclass

from authsession.core.enums import ErrorCode
from authsession.core.errors import DomainError, StorageUnavailableError


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageError(DomainError):
    """Credential store unavailable.

    Attributes:
        operation: Facade operation that was running.
        retryable: Always True; nothing was committed.
    """

    operation: str
    retryable: bool = True

    @classmethod
    def from_exception(
        cls, operation: str, exc: StorageUnavailableError
    ) -> "StorageError":
        details = {"stage": exc.operation} if exc.operation else None
        return cls(
            code=ErrorCode.STORAGE_UNAVAILABLE,
            message=str(exc),
            details=details,
            operation=operation,
        )
