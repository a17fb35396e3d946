"""PasswordResetTokenRepository protocol (port)."""

from datetime import datetime
from typing import Protocol

from authsession.domain.entities import PasswordResetTokenRecord


class PasswordResetTokenRepository(Protocol):
    """Protocol for password reset token persistence."""

    async def add(
        self, *, user_id: int, token_hash: str, expires_at: datetime, now: datetime
    ) -> PasswordResetTokenRecord:
        ...

    async def find_by_hash(self, token_hash: str) -> PasswordResetTokenRecord | None:
        ...

    async def mark_used(self, token_id: int, *, now: datetime) -> bool:
        """Flip ``is_used`` false to true.

        Returns:
            True for exactly one caller per token.
        """
        ...

    async def purge(self, *, before: datetime) -> int:
        """Delete tokens expired or used before ``before``. Returns count."""
        ...
