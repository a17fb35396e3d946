"""Storage unavailability signal.

Unlike DomainError this IS an exception: a dropped database connection is not
a business outcome, so it unwinds the unit of work (rolling back the
transaction) and is converted to a retryable ``Failure`` at the facade
boundary.
"""


class StorageUnavailableError(Exception):
    """Raised when the credential store cannot be reached or fails mid-transaction.

    Attributes:
        operation: Name of the operation that was running.
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
