"""Pytest configuration and shared fixtures.

Fixture groups:
1. Time and hashing (fake clock, real SHA-256 hasher, low-cost bcrypt)
2. Collaborator mocks (logger, event bus)
3. In-memory unit of work for service tests
4. SQLite database for integration tests (fresh in-memory database per test)
"""

import inspect
from functools import partial
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from authsession.infrastructure.persistence import Database, SqlAlchemyUnitOfWork
from authsession.infrastructure.security import (
    BcryptPasswordService,
    Sha256SecretHasher,
)
from tests.utils.fakes import FakeClock, InMemoryState, memory_uow_factory

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Time and hashing
# =============================================================================


@pytest.fixture
def clock():
    """Fake clock frozen at 2026-01-05 09:00 UTC."""
    return FakeClock()


@pytest.fixture
def hasher():
    return Sha256SecretHasher()


@pytest.fixture
def password_service():
    """Bcrypt at the minimum cost factor (fast enough for tests)."""
    return BcryptPasswordService(cost_factor=4)


# =============================================================================
# Collaborator mocks
# =============================================================================


@pytest.fixture
def logger():
    return Mock()


@pytest.fixture
def event_bus():
    return AsyncMock()


# =============================================================================
# In-memory persistence
# =============================================================================


@pytest.fixture
def state():
    """Rows shared by every in-memory unit of work in a test."""
    return InMemoryState()


@pytest.fixture
def memory_uow(state):
    return memory_uow_factory(state)


# =============================================================================
# SQLite persistence
# =============================================================================


@pytest_asyncio.fixture
async def test_database():
    """Provide a fresh in-memory SQLite database with all tables created."""
    db = Database(database_url=TEST_DATABASE_URL)
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def sql_uow(test_database):
    """UnitOfWorkFactory bound to the test database."""
    return partial(SqlAlchemyUnitOfWork, test_database.async_session)
