"""Integration tests for SqlAlchemyUnitOfWork and Database (in-memory SQLite).

Tests cover:
- Commit on normal exit
- Rollback on exception and on explicit rollback()
- SQLAlchemy errors surface as StorageUnavailableError
- Connection check
"""

import pytest

from authsession.core.errors import StorageUnavailableError
from tests.utils.fakes import make_user


@pytest.mark.integration
class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_commits_on_exit(self, sql_uow):
        async with sql_uow() as uow:
            saved = await uow.users.save(make_user())

        async with sql_uow() as uow:
            assert await uow.users.find_by_id(saved.id) is not None

    @pytest.mark.asyncio
    async def test_rolls_back_on_exception(self, sql_uow):
        with pytest.raises(RuntimeError):
            async with sql_uow() as uow:
                await uow.users.save(make_user())
                raise RuntimeError("abort")

        async with sql_uow() as uow:
            assert await uow.users.find_by_email("tutor@example.com") is None

    @pytest.mark.asyncio
    async def test_explicit_rollback_skips_commit(self, sql_uow):
        async with sql_uow() as uow:
            await uow.users.save(make_user())
            await uow.rollback()

        async with sql_uow() as uow:
            assert await uow.users.find_by_email("tutor@example.com") is None

    @pytest.mark.asyncio
    async def test_database_error_becomes_storage_unavailable(self, sql_uow):
        async with sql_uow() as uow:
            await uow.users.save(make_user())

        with pytest.raises(StorageUnavailableError) as exc_info:
            async with sql_uow() as uow:
                await uow.users.save(make_user(user_id=8))

        assert exc_info.value.operation == "execute"

        async with sql_uow() as uow:
            assert await uow.users.find_by_email("tutor@example.com") is not None


@pytest.mark.integration
class TestDatabase:
    @pytest.mark.asyncio
    async def test_check_connection(self, test_database):
        assert await test_database.check_connection() is True
