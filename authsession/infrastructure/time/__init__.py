"""Time adapters."""

from authsession.infrastructure.time.system_clock import SystemClock

__all__ = ["SystemClock"]
