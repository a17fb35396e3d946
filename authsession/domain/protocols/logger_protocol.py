"""LoggerProtocol definition for structured logging.

Standardizes structured logging across the engine while remaining
backend-agnostic. Implementations MUST keep logs structured (message plus
key-value context) and safe.

Security:
    - NEVER log passwords, OTP codes, refresh tokens, reset tokens or their
      digests
    - Log user ids and error codes instead

Usage:
    logger.info("refresh_token_rotated", user_id=user_id, platform="ios")

    request_logger = logger.bind(user_id=user_id)
    request_logger.warning("otp_verification_failed", reason="expired")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Supports the 5 standard log levels and context binding.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (snake_case; use context, not f-strings).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for system-wide failures."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            sweep_logger = logger.bind(job="retention_sweep")
            sweep_logger.info("sweep_started")
        """
        ...
