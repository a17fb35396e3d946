"""Runtime environment types.

Used by Settings to pick environment-specific behavior such as the log
renderer (console for development, JSON everywhere else).
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment of the engine."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
