"""Pytest fixtures."""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from org_directory.config import get_settings
from org_directory.database import create_schema
from org_directory.services.organizations import OrganizationDirectory
from org_directory.services.users import UsersStore


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Reset cached settings around each test.

    Yields
    ------
    None
        Lets tests override settings through the environment.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
async def session_factory(
    tmp_path: Path,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Create a session factory backed by a fresh SQLite database.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory for the test database.

    Yields
    ------
    async_sessionmaker[AsyncSession]
        Factory bound to the test engine.
    """
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(database_url, future=True)
    await create_schema(engine)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture()
def users(session_factory: async_sessionmaker[AsyncSession]) -> UsersStore:
    """Return a users store bound to the test database.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Test session factory.

    Returns
    -------
    UsersStore
        Store under test.
    """
    return UsersStore(session_factory)


@pytest.fixture()
def orgs(session_factory: async_sessionmaker[AsyncSession]) -> OrganizationDirectory:
    """Return an organization directory bound to the test database.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Test session factory.

    Returns
    -------
    OrganizationDirectory
        Directory under test.
    """
    return OrganizationDirectory(session_factory)
