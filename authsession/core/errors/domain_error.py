"""Base domain error for railway-oriented programming.

DomainError is the base class for every expected failure the engine reports:
expired OTPs, replayed refresh tokens, wrong passwords and lost races. Errors
flow through the system as data inside ``Failure``, they are never raised.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from authsession.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable message for logs. Never shown verbatim to
            end users, see ``application.errors.user_messages``.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
