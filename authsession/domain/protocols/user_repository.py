"""UserRepository protocol (port).

The engine reads users for login and token refresh, and writes only the
authentication-owned columns: password hash, verified flags, last login.
"""

from datetime import datetime
from typing import Protocol

from authsession.domain.entities import User


class UserRepository(Protocol):
    """Protocol for user persistence operations used by authentication."""

    async def find_by_id(self, user_id: int) -> User | None:
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive)."""
        ...

    async def find_by_mobile(self, mobile: str) -> User | None:
        """Find user by full mobile number (``+<country><number>``)."""
        ...

    async def save(self, user: User) -> User:
        """Insert a new user and return it with its assigned id."""
        ...

    async def update_password_hash(
        self, user_id: int, password_hash: str, *, now: datetime
    ) -> bool:
        """Replace the password hash. Returns False if the user is missing."""
        ...

    async def update_verified_flags(
        self,
        user_id: int,
        *,
        is_email_verified: bool,
        is_mobile_verified: bool,
        now: datetime,
    ) -> bool:
        """Persist both verified flags as computed by ``User.mark_verified``."""
        ...

    async def update_last_login(self, user_id: int, *, now: datetime) -> bool:
        ...
