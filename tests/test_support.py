"""Name rules, ordering and storage error tests."""

import importlib.util
from pathlib import Path

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from org_directory.database import translate_storage_errors
from org_directory.exceptions import StorageUnavailableError, ValidationError
from org_directory.services.names import validate_account_name
from org_directory.services.ordering import parse_order_by
from org_directory.services.organizations import OrganizationDirectory

MIGRATION_PATH = (
    Path(__file__).resolve().parents[1]
    / "alembic"
    / "versions"
    / "0001_initial_schema.py"
)


def _compile(clauses) -> list[str]:
    return [str(clause) for clause in clauses]


class TestAccountNames:
    """Account name rules."""

    def test_accepts_and_strips(self) -> None:
        """Accept ordinary names and strip surrounding whitespace.

        Returns
        -------
        None
            Asserts accepted names.
        """
        assert validate_account_name("  acme-corp_2.0 ") == "acme-corp_2.0"
        assert validate_account_name("Org1") == "Org1"

    @pytest.mark.parametrize(
        "name", ["", "..", "API", "Install", "team.keys", ".hidden", "a/b", "x" * 256]
    )
    def test_rejects(self, name: str) -> None:
        """Reject reserved, malformed and oversized names.

        Parameters
        ----------
        name : str
            Rejected name.

        Returns
        -------
        None
            Asserts validation errors.
        """
        with pytest.raises(ValidationError):
            validate_account_name(name)


class TestOrderBy:
    """Search ordering clauses."""

    def test_default_is_id_ascending(self) -> None:
        """Order by ascending id when no clause is given.

        Returns
        -------
        None
            Asserts the default ordering.
        """
        assert _compile(parse_order_by("")) == ["accounts.id ASC"]

    def test_id_tie_break_is_appended(self) -> None:
        """Append an id tie-break to clauses that lack one.

        Returns
        -------
        None
            Asserts the tie-break.
        """
        assert _compile(parse_order_by("num_members desc")) == [
            "accounts.num_members DESC",
            "accounts.id ASC",
        ]
        assert _compile(parse_order_by("name, id DESC")) == [
            "accounts.lower_name ASC",
            "accounts.id DESC",
        ]

    @pytest.mark.parametrize(
        "clause",
        ["password", "id sideways", "id DESC LIMIT 1", "id,", "id, id", "1=1"],
    )
    def test_rejects(self, clause: str) -> None:
        """Reject unknown columns and malformed terms.

        Parameters
        ----------
        clause : str
            Rejected clause.

        Returns
        -------
        None
            Asserts validation errors.
        """
        with pytest.raises(ValidationError):
            parse_order_by(clause)


class TestStorageErrors:
    """Translation of storage failures."""

    def test_operational_error_is_unavailable(self) -> None:
        """Map operational failures to ``StorageUnavailableError``.

        Returns
        -------
        None
            Asserts translation and chaining.
        """
        original = OperationalError("SELECT 1", {}, Exception("database is locked"))
        with pytest.raises(StorageUnavailableError) as excinfo:
            with translate_storage_errors():
                raise original
        assert excinfo.value.__cause__ is original

    def test_integrity_error_passes_through(self) -> None:
        """Leave constraint violations for the caller to map.

        Returns
        -------
        None
            Asserts the original error propagates.
        """
        with pytest.raises(IntegrityError):
            with translate_storage_errors():
                raise IntegrityError(
                    "INSERT", {}, Exception("UNIQUE constraint failed")
                )

    @pytest.mark.asyncio
    async def test_unreachable_database(self, tmp_path: Path) -> None:
        """Report an unopenable database as unavailable storage.

        Parameters
        ----------
        tmp_path : Path
            Temporary directory fixture.

        Returns
        -------
        None
            Asserts the storage error from a read operation.
        """
        database_url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'test.db'}"
        engine = create_async_engine(database_url)
        orgs = OrganizationDirectory(
            async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
        )
        with pytest.raises(StorageUnavailableError):
            await orgs.count_by_user(1)
        await engine.dispose()


class TestMigration:
    """Alembic revision."""

    def test_upgrade_and_downgrade(self) -> None:
        """Build and drop the schema on an empty database.

        Returns
        -------
        None
            Asserts created tables and constraints.
        """
        spec = importlib.util.spec_from_file_location("initial_schema", MIGRATION_PATH)
        migration = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(migration)
        engine = create_engine("sqlite://")

        with engine.begin() as connection:
            with Operations.context(MigrationContext.configure(connection)):
                migration.upgrade()
            inspector = inspect(connection)
            assert set(inspector.get_table_names()) == {
                "accounts",
                "memberships",
                "team_memberships",
                "teams",
            }
            unique = {
                tuple(constraint["column_names"])
                for constraint in inspector.get_unique_constraints("memberships")
            }
            assert ("org_id", "account_id") in unique

            with Operations.context(MigrationContext.configure(connection)):
                migration.downgrade()
            assert inspect(connection).get_table_names() == []
        engine.dispose()
