"""Common error classes shared by all layers.

Error Types:
- ValidationError: Malformed input (login id, empty password)
- NotFoundError: Referenced user does not exist
- ConflictError: Lost a race on a single-use credential or unique value
- AuthenticationError: Credentials or access token rejected

Usage:
    from authsession.core.errors import ConflictError
    from authsession.core.enums import ErrorCode
    from authsession.core.result import Failure

    return Failure(error=ConflictError(
        code=ErrorCode.RESOURCE_CONFLICT,
        message="Refresh token already rotated",
        resource_type="refresh_token",
    ))
"""

from dataclasses import dataclass

from authsession.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (user, otp, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Conflicting concurrent update or duplicate value.

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict, when known.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, bad access token)."""

    pass
