"""Core enums package.

Usage:
    from authsession.core.enums import ErrorCode, Environment
"""

from authsession.core.enums.environment import Environment
from authsession.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
