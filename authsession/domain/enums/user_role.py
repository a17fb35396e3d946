"""User role enumeration."""

from enum import Enum


class UserRole(str, Enum):
    """Role of an end user. Carried in the access token ``role`` claim."""

    TUTOR = "TUTOR"
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"
