"""Database primitives."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import MetaData
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from org_directory.config import get_settings
from org_directory.exceptions import StorageUnavailableError


class Base(DeclarativeBase):
    """Base declarative model class."""

    metadata = MetaData()


settings = get_settings()
engine = create_async_engine(settings.database_url, echo=settings.echo_sql)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_schema(target: AsyncEngine) -> None:
    """Create all tables on an engine.

    Parameters
    ----------
    target : AsyncEngine
        Engine to create the schema on.

    Returns
    -------
    None
        Issues CREATE TABLE statements for missing tables.
    """
    import org_directory.models  # noqa: F401

    async with target.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


@contextmanager
def translate_storage_errors() -> Iterator[None]:
    """Map transport failures to ``StorageUnavailableError``.

    Constraint violations pass through untouched so callers can map them
    to their own conflict errors.

    Yields
    ------
    None
        Guards the enclosed storage calls.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise StorageUnavailableError(str(exc.orig or exc)) from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            raise StorageUnavailableError(str(exc.orig or exc)) from exc
        raise
