"""Console logging adapter.

Structured stdout logs through structlog: a colored console renderer in
development, JSON everywhere else.

Every record passes through ``redact_secrets`` before rendering. Call sites
are expected to log ids and error codes only; the processor is the backstop
for a stray ``code=`` or ``token=`` keyword, which would otherwise put an OTP
or a refresh token in the log stream.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED = "[REDACTED]"

SECRET_FIELDS = frozenset(
    {
        "password",
        "new_password",
        "password_hash",
        "code",
        "otp",
        "otp_hash",
        "token",
        "token_hash",
        "refresh_token",
        "access_token",
        "reset_token",
    }
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor replacing secret-bearing fields with a marker."""
    for key in SECRET_FIELDS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


class ConsoleAdapter:
    """Structured stdout logger implementing LoggerProtocol.

    Args:
        use_json: JSON output when True, human-readable when False.
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service: Bound to every record as ``service`` when given.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        service: str | None = None,
    ) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_secrets,
        ]
        if use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(level.upper())
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=False,
        )

        logger = structlog.get_logger()
        self._logger = logger.bind(service=service) if service else logger

    @classmethod
    def _wrap(cls, bound_logger: Any) -> ConsoleAdapter:
        adapter = cls.__new__(cls)
        adapter._logger = bound_logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error, flattening ``error`` into error_type / error_message."""
        self._logger.error(message, **_with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter carrying ``context`` on every record."""
        return self._wrap(self._logger.bind(**context))


def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is None:
        return context
    return {
        **context,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
