"""Session activity classification."""

from enum import Enum


class ActivityStatus(str, Enum):
    """Whether a usable session has shown recent activity."""

    ACTIVE = "active"
    INACTIVE = "inactive"
