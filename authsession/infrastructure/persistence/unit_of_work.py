"""SQLAlchemy unit of work.

One instance wraps one AsyncSession transaction and exposes the four
repositories bound to it. Exit semantics:

- normal exit: commit. The commit runs under ``asyncio.shield`` so a client
  cancelling the request after the commit was sent cannot half-undo it;
  the cancellation is re-raised once the commit settles.
- exception or cancellation inside the block: rollback.
- explicit ``rollback()``: the block exits without committing.
- any SQLAlchemyError (from the block or from the commit) is re-raised as
  StorageUnavailableError.
"""

import asyncio
from types import TracebackType
from typing import Self

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authsession.core.errors import StorageUnavailableError
from authsession.infrastructure.persistence.repositories import (
    OtpRepository,
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserRepository,
)


class SqlAlchemyUnitOfWork:
    """Transaction boundary over an AsyncSession.

    Example:
        >>> async with SqlAlchemyUnitOfWork(db.async_session) as uow:
        ...     await uow.refresh_tokens.revoke_all_for_user(7, reason="logout_all", now=now)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._rolled_back = False

    async def __aenter__(self) -> Self:
        self._session = self._session_factory()
        self.users = UserRepository(self._session)
        self.refresh_tokens = RefreshTokenRepository(self._session)
        self.otps = OtpRepository(self._session)
        self.password_resets = PasswordResetTokenRepository(self._session)
        self._rolled_back = False
        return self

    async def rollback(self) -> None:
        """Abandon the transaction. The block exits without committing."""
        if self._session is None:
            return
        await self._rollback(self._session)
        self._rolled_back = True

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        try:
            if exc is not None:
                await self._rollback(session)
            elif not self._rolled_back:
                await self._commit(session)
        finally:
            await session.close()

        if isinstance(exc, SQLAlchemyError):
            raise StorageUnavailableError(
                "Credential store operation failed", operation="execute"
            ) from exc

    async def _commit(self, session: AsyncSession) -> None:
        commit = asyncio.ensure_future(session.commit())
        try:
            await asyncio.shield(commit)
        except asyncio.CancelledError:
            # Let the in-flight commit settle before propagating
            await asyncio.wait([commit])
            raise
        except SQLAlchemyError as e:
            await self._rollback(session)
            raise StorageUnavailableError(
                "Credential store commit failed", operation="commit"
            ) from e

    async def _rollback(self, session: AsyncSession) -> None:
        try:
            await session.rollback()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                "Credential store rollback failed", operation="rollback"
            ) from e
