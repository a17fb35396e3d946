"""Result types for railway-oriented programming.

Every service in the engine reports expected failures (expired OTP, revoked
refresh token, wrong password) as data instead of raising. Callers branch on
the two variants explicitly.

Usage:
    result = await otp_service.verify_otp(user_id, purpose, "1234")
    match result:
        case Success(value=status):
            ...
        case Failure(error=error):
            logger.warning("otp_rejected", code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Error describing why the operation was rejected.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
