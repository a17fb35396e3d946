"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Adapter for hexagonal architecture. Maps between User domain entities and
UserModel rows. Does not commit; the unit of work owns the transaction.
"""

from datetime import datetime
from typing import Any, cast

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authsession.domain.entities import User
from authsession.domain.enums import UserRole
from authsession.infrastructure.persistence.models.user import UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with uow_factory() as uow:
        ...     user = await uow.users.find_by_email("tutor@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: Email address to search.

        Returns:
            User if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(func.lower(UserModel.email) == email.strip().lower())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def find_by_mobile(self, mobile: str) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.mobile == mobile)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def save(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User entity; its ``id`` is ignored and assigned by the database.

        Returns:
            The stored user with its id.
        """
        model = self._to_model(user)
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model)

    async def update_password_hash(
        self, user_id: int, password_hash: str, *, now: datetime
    ) -> bool:
        return await self._update(user_id, password_hash=password_hash, updated_at=now)

    async def update_verified_flags(
        self,
        user_id: int,
        *,
        is_email_verified: bool,
        is_mobile_verified: bool,
        now: datetime,
    ) -> bool:
        return await self._update(
            user_id,
            is_email_verified=is_email_verified,
            is_mobile_verified=is_mobile_verified,
            updated_at=now,
        )

    async def update_last_login(self, user_id: int, *, now: datetime) -> bool:
        return await self._update(user_id, last_login_at=now, updated_at=now)

    async def _update(self, user_id: int, **values: Any) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (cast(Any, result).rowcount or 0) > 0

    # =========================================================================
    # Mapping methods
    # =========================================================================

    def _to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            mobile=model.mobile,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            is_email_verified=model.is_email_verified,
            is_mobile_verified=model.is_mobile_verified,
            is_signup_complete=model.is_signup_complete,
            is_active=model.is_active,
            is_deleted=model.is_deleted,
            last_login_at=model.last_login_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            email=user.email.lower() if user.email else None,
            mobile=user.mobile,
            password_hash=user.password_hash,
            role=user.role.value,
            is_email_verified=user.is_email_verified,
            is_mobile_verified=user.is_mobile_verified,
            is_signup_complete=user.is_signup_complete,
            is_active=user.is_active,
            is_deleted=user.is_deleted,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
