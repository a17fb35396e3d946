"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Adapter for hexagonal architecture. All revocations and activity stamps are
single conditional UPDATE statements; the affected-row count tells the caller
whether it won. Does not commit; the unit of work owns the transaction.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authsession.domain.entities import RefreshTokenRecord
from authsession.domain.enums import SessionPlatform, migrate_platform
from authsession.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)


def _usable(now: datetime) -> Any:
    """SQL form of the usability predicate."""
    return and_(
        RefreshTokenModel.is_revoked.is_(False),
        RefreshTokenModel.is_deleted.is_(False),
        RefreshTokenModel.is_active.is_(True),
        RefreshTokenModel.expires_at > now,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation of RefreshTokenRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with uow_factory() as uow:
        ...     token = await uow.refresh_tokens.find_by_hash(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

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
        """Insert a refresh token inside a savepoint.

        Returns:
            Stored record, or None on a ``token_hash`` unique violation (the
            savepoint is rolled back and the outer transaction continues).
        """
        model = RefreshTokenModel(
            user_id=user_id,
            token_hash=token_hash,
            platform=platform.value,
            expires_at=expires_at,
            last_activity_at=now,
            device_info=device_info,
            ip_address=ip_address,
            is_revoked=False,
            is_active=True,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError:
            return None
        return self._to_record(model)

    async def find_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_record(model) if model else None

    async def revoke_if_active(
        self, token_id: int, *, reason: str, now: datetime
    ) -> bool:
        """Revoke one token unless already revoked (compare-and-swap)."""
        stmt = (
            update(RefreshTokenModel)
            .where(
                and_(
                    RefreshTokenModel.id == token_id,
                    RefreshTokenModel.is_revoked.is_(False),
                )
            )
            .values(
                is_revoked=True,
                revoked_at=now,
                revoked_reason=reason,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def revoke_all_for_user(
        self, user_id: int, *, reason: str, now: datetime
    ) -> int:
        """Revoke all refresh tokens for a user.

        Used by logout-all and password reset.

        Returns:
            Number of tokens revoked by this call.
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                and_(
                    RefreshTokenModel.user_id == user_id,
                    RefreshTokenModel.is_revoked.is_(False),
                )
            )
            .values(
                is_revoked=True,
                revoked_at=now,
                revoked_reason=reason,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def touch_activity(
        self, token_hash: str, *, now: datetime, stale_before: datetime
    ) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(
                and_(
                    RefreshTokenModel.token_hash == token_hash,
                    _usable(now),
                    or_(
                        RefreshTokenModel.last_activity_at.is_(None),
                        RefreshTokenModel.last_activity_at <= stale_before,
                    ),
                )
            )
            .values(last_activity_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def list_usable(self, *, now: datetime) -> list[RefreshTokenRecord]:
        stmt = select(RefreshTokenModel).where(_usable(now))
        result = await self._session.execute(stmt)
        return [self._to_record(model) for model in result.scalars().all()]

    async def list_usable_for_user(
        self, user_id: int, *, now: datetime
    ) -> list[RefreshTokenRecord]:
        stmt = (
            select(RefreshTokenModel)
            .where(and_(RefreshTokenModel.user_id == user_id, _usable(now)))
            .order_by(RefreshTokenModel.created_at.desc(), RefreshTokenModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_record(model) for model in result.scalars().all()]

    async def purge(self, *, before: datetime) -> int:
        """Delete tokens that expired, or were revoked, before ``before``.

        Called by the retention sweep.
        """
        stmt = (
            delete(RefreshTokenModel)
            .where(
                or_(
                    RefreshTokenModel.expires_at < before,
                    and_(
                        RefreshTokenModel.is_revoked.is_(True),
                        RefreshTokenModel.revoked_at < before,
                    ),
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    # =========================================================================
    # Mapping methods
    # =========================================================================

    def _to_record(self, model: RefreshTokenModel) -> RefreshTokenRecord:
        return RefreshTokenRecord(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
            platform=migrate_platform(model.platform),
            is_revoked=model.is_revoked,
            revoked_at=model.revoked_at,
            revoked_reason=model.revoked_reason,
            last_activity_at=model.last_activity_at,
            device_info=model.device_info,
            ip_address=model.ip_address,
            is_active=model.is_active,
            is_deleted=model.is_deleted,
        )
