"""Unit of work protocol (transaction boundary).

One unit of work is one database transaction. Repositories obtained from it
share that transaction; leaving the ``async with`` block normally commits,
leaving it with an exception (or cancellation before the commit started)
rolls back. ``rollback()`` abandons the transaction explicitly (the block
then exits without committing).

Usage:
    async with uow_factory() as uow:
        await uow.password_resets.mark_used(token.id, now=now)
        await uow.users.update_password_hash(token.user_id, new_hash, now=now)
        await uow.refresh_tokens.revoke_all_for_user(token.user_id, ...)
    # all three committed together
"""

from collections.abc import Callable
from types import TracebackType
from typing import Protocol, Self

from authsession.domain.protocols.otp_repository import OtpRepository
from authsession.domain.protocols.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from authsession.domain.protocols.refresh_token_repository import (
    RefreshTokenRepository,
)
from authsession.domain.protocols.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Transaction-scoped access to the credential store.

    Raises:
        StorageUnavailableError: From any repository call or from the commit
            when the store fails.
    """

    users: UserRepository
    refresh_tokens: RefreshTokenRepository
    otps: OtpRepository
    password_resets: PasswordResetTokenRepository

    async def __aenter__(self) -> Self:
        ...

    async def rollback(self) -> None:
        """Discard everything done so far; leaving the block then commits nothing."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
