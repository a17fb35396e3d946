"""Base domain event class.

Domain events are immutable records of things that happened (past tense):
``RefreshTokenRotated``, ``PasswordResetCompleted``. Services publish them
after their transaction commits; handlers (logging) react to them.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class SessionRevoked(DomainEvent):
    ...     user_id: int
    >>>
    >>> event = SessionRevoked(user_id=7, occurred_at=clock.now())
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen, keyword-only dataclasses
        4. Never carry plaintext secrets (codes, tokens, hashes)

    Attributes:
        event_id: Unique identifier for this event instance (UUID v4).
        occurred_at: When the event happened (UTC). Services pass their
            injected clock's time; the default is wall-clock time.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
