"""OtpRepository - SQLAlchemy implementation for OTP persistence.

The (user_id, purpose) pair is unique. ``upsert`` overwrites in place; a
concurrent first insert for the same pair is resolved by falling back to the
overwrite. ``consume`` is a conditional DELETE keyed on the digest that was
checked, so one issued code can be consumed by exactly one caller.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authsession.domain.entities import OtpRecord
from authsession.domain.enums import OtpPurpose
from authsession.infrastructure.persistence.models.otp import OtpModel


class OtpRepository:
    """SQLAlchemy implementation of OtpRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(
        self,
        *,
        user_id: int,
        purpose: OtpPurpose,
        otp_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> OtpRecord:
        if not await self._overwrite(user_id, purpose, otp_hash, expires_at, now):
            model = OtpModel(
                user_id=user_id,
                purpose=purpose.value,
                otp_hash=otp_hash,
                expires_at=expires_at,
                created_at=now,
            )
            try:
                async with self._session.begin_nested():
                    self._session.add(model)
                    await self._session.flush()
            except IntegrityError:
                # Lost the insert race for this pair; the row exists now
                await self._overwrite(user_id, purpose, otp_hash, expires_at, now)

        record = await self.find(user_id, purpose)
        if record is None:
            raise LookupError(f"OTP row for user {user_id} vanished during upsert")
        return record

    async def find(self, user_id: int, purpose: OtpPurpose) -> OtpRecord | None:
        stmt = (
            select(OtpModel)
            .where(
                and_(OtpModel.user_id == user_id, OtpModel.purpose == purpose.value)
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_record(model) if model else None

    async def consume(self, otp_id: int, otp_hash: str) -> bool:
        stmt = (
            delete(OtpModel)
            .where(and_(OtpModel.id == otp_id, OtpModel.otp_hash == otp_hash))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    async def purge(self, *, before: datetime) -> int:
        stmt = (
            delete(OtpModel)
            .where(OtpModel.expires_at < before)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return cast(Any, result).rowcount or 0

    async def _overwrite(
        self,
        user_id: int,
        purpose: OtpPurpose,
        otp_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        stmt = (
            update(OtpModel)
            .where(
                and_(OtpModel.user_id == user_id, OtpModel.purpose == purpose.value)
            )
            .values(otp_hash=otp_hash, expires_at=expires_at, created_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    def _to_record(self, model: OtpModel) -> OtpRecord:
        return OtpRecord(
            id=model.id,
            user_id=model.user_id,
            purpose=OtpPurpose(model.purpose),
            otp_hash=model.otp_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )
