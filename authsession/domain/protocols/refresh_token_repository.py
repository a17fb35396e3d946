"""RefreshTokenRepository protocol (port).

Every state change that must be linearizable (rotation, revocation, activity
stamps) is a conditional update whose boolean/int result reports how many
rows actually changed. Callers never read-then-write.

Reference:
    RefreshTokenStore (application/services/refresh_token_store.py)
"""

from datetime import datetime
from typing import Protocol

from authsession.domain.entities import RefreshTokenRecord
from authsession.domain.enums import SessionPlatform


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence operations."""

    async def add(
        self,
        *,
        user_id: int,
        token_hash: str,
        platform: SessionPlatform,
        expires_at: datetime,
        now: datetime,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> RefreshTokenRecord | None:
        """Insert a token.

        Returns:
            The stored record, or None if ``token_hash`` already exists. A
            collision leaves the surrounding transaction usable.
        """
        ...

    async def find_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        """Find a token by digest regardless of its state."""
        ...

    async def revoke_if_active(self, token_id: int, *, reason: str, now: datetime) -> bool:
        """Revoke the row only if it is not revoked yet.

        Returns:
            True for exactly one caller per token.
        """
        ...

    async def revoke_all_for_user(self, user_id: int, *, reason: str, now: datetime) -> int:
        """Revoke every non-revoked token of the user. Returns count revoked."""
        ...

    async def touch_activity(
        self, token_hash: str, *, now: datetime, stale_before: datetime
    ) -> bool:
        """Stamp ``last_activity_at = now`` on a usable token.

        Only applied when the previous stamp is missing or at/before
        ``stale_before`` (throttling).

        Returns:
            True if the row was updated.
        """
        ...

    async def list_usable(self, *, now: datetime) -> list[RefreshTokenRecord]:
        ...

    async def list_usable_for_user(
        self, user_id: int, *, now: datetime
    ) -> list[RefreshTokenRecord]:
        """Usable tokens of one user, newest first."""
        ...

    async def purge(self, *, before: datetime) -> int:
        """Delete tokens expired, or revoked, before ``before``. Returns count."""
        ...
