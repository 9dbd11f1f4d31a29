"""Users store tests."""

import pytest

from org_directory.exceptions import (
    AccountNotFoundError,
    EmailTakenError,
    NameTakenError,
    ValidationError,
)
from org_directory.schemas.users import CreateUserOptions
from org_directory.services.users import UsersStore


class TestUsersStore:
    """Individual account creation and lookup."""

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, users: UsersStore) -> None:
        """Create a user and resolve it by id and by name.

        Parameters
        ----------
        users : UsersStore
            Store under test.

        Returns
        -------
        None
            Asserts stored fields.
        """
        alice = await users.create(
            "alice", " Alice@Example.com ", CreateUserOptions(location="Oslo")
        )
        bob = await users.create("bob", "bob@example.com")

        assert alice.email == "alice@example.com"
        assert alice.full_name == "alice"
        assert alice.location == "Oslo"
        assert bob.id > alice.id
        assert (await users.get_by_id(alice.id)).name == "alice"
        assert (await users.get_by_name("ALICE")).id == alice.id

    @pytest.mark.asyncio
    async def test_conflicts(self, users: UsersStore) -> None:
        """Reject duplicate names and emails.

        Parameters
        ----------
        users : UsersStore
            Store under test.

        Returns
        -------
        None
            Asserts conflict errors.
        """
        await users.create("alice", "alice@example.com")

        with pytest.raises(NameTakenError):
            await users.create("Alice", "other@example.com")
        with pytest.raises(EmailTakenError):
            await users.create("alice2", "ALICE@example.com")

    @pytest.mark.asyncio
    async def test_validation(self, users: UsersStore) -> None:
        """Reject empty emails and reserved names.

        Parameters
        ----------
        users : UsersStore
            Store under test.

        Returns
        -------
        None
            Asserts validation errors.
        """
        with pytest.raises(ValidationError):
            await users.create("alice", "  ")
        with pytest.raises(ValidationError):
            await users.create("explore", "explore@example.com")

    @pytest.mark.asyncio
    async def test_missing_user(self, users: UsersStore) -> None:
        """Raise not-found errors for unknown users.

        Parameters
        ----------
        users : UsersStore
            Store under test.

        Returns
        -------
        None
            Asserts not-found errors.
        """
        with pytest.raises(AccountNotFoundError) as excinfo:
            await users.get_by_id(404)
        assert excinfo.value.account_id == 404
        with pytest.raises(AccountNotFoundError):
            await users.get_by_name("nobody")
