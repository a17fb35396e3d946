"""PasswordResetTokenRepository - SQLAlchemy implementation.

Handles persistence for password reset tokens. ``mark_used`` is the
compare-and-swap that makes a token single use.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authsession.domain.entities import PasswordResetTokenRecord
from authsession.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)


class PasswordResetTokenRepository:
    """SQLAlchemy implementation of PasswordResetTokenRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self, *, user_id: int, token_hash: str, expires_at: datetime, now: datetime
    ) -> PasswordResetTokenRecord:
        """Create new password reset token.

        Args:
            user_id: User requesting the reset.
            token_hash: SHA-256 digest of the token.
            expires_at: Token expiration timestamp.
            now: Issuance time.

        Returns:
            Stored record.
        """
        model = PasswordResetTokenModel(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            is_used=False,
            created_at=now,
            updated_at=now,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_record(model)

    async def find_by_hash(self, token_hash: str) -> PasswordResetTokenRecord | None:
        """Find a reset token by digest, used or not."""
        stmt = (
            select(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_record(model) if model else None

    async def mark_used(self, token_id: int, *, now: datetime) -> bool:
        stmt = (
            update(PasswordResetTokenModel)
            .where(
                and_(
                    PasswordResetTokenModel.id == token_id,
                    PasswordResetTokenModel.is_used.is_(False),
                )
            )
            .values(is_used=True, used_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def purge(self, *, before: datetime) -> int:
        """Delete tokens expired, or used, before ``before``."""
        stmt = (
            delete(PasswordResetTokenModel)
            .where(
                or_(
                    PasswordResetTokenModel.expires_at < before,
                    and_(
                        PasswordResetTokenModel.is_used.is_(True),
                        PasswordResetTokenModel.used_at < before,
                    ),
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    def _to_record(self, model: PasswordResetTokenModel) -> PasswordResetTokenRecord:
        return PasswordResetTokenRecord(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
            is_used=model.is_used,
            used_at=model.used_at,
        )
