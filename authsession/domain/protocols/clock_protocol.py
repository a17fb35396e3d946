"""Clock protocol.

Every expiry and activity decision in the engine reads time through this
port, so tests can move time forward deterministically.
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...
