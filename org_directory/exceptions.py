"""Directory exception types."""

from __future__ import annotations


class OrgDirectoryError(Exception):
    """Base directory error."""


class NotFoundError(OrgDirectoryError):
    """A required record does not exist."""


class AccountNotFoundError(NotFoundError):
    """Account does not exist.

    Parameters
    ----------
    account_id : int | None, default=None
        Identifier that was looked up.
    name : str | None, default=None
        Name that was looked up.
    """

    def __init__(self, account_id: int | None = None, name: str | None = None) -> None:
        self.account_id = account_id
        self.name = name
        key = f"id={account_id}" if name is None else f"name={name!r}"
        super().__init__(f"Account not found: {key}")


class OrganizationNotFoundError(NotFoundError):
    """Organization does not exist.

    Parameters
    ----------
    org_id : int | None, default=None
        Identifier that was looked up.
    name : str | None, default=None
        Name that was looked up.
    """

    def __init__(self, org_id: int | None = None, name: str | None = None) -> None:
        self.org_id = org_id
        self.name = name
        key = f"id={org_id}" if name is None else f"name={name!r}"
        super().__init__(f"Organization not found: {key}")


class MembershipNotFoundError(NotFoundError):
    """Account is not a member of the organization."""

    def __init__(self, org_id: int, account_id: int) -> None:
        self.org_id = org_id
        self.account_id = account_id
        super().__init__(
            f"Membership not found: org_id={org_id}, account_id={account_id}"
        )


class ConflictError(OrgDirectoryError):
    """Request conflicted with a uniqueness rule."""


class NameTakenError(ConflictError):
    """Account name is already used by a user or an organization."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Name already taken: {name!r}")


class EmailTakenError(ConflictError):
    """Email address is already used by another user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already used: {email!r}")


class DuplicateMembershipError(ConflictError):
    """Account is already a member of the organization."""

    def __init__(self, org_id: int, account_id: int) -> None:
        self.org_id = org_id
        self.account_id = account_id
        super().__init__(
            f"Membership already exists: org_id={org_id}, account_id={account_id}"
        )


class LastOwnerError(ConflictError):
    """Removing the account would leave the organization without an owner."""

    def __init__(self, org_id: int, account_id: int) -> None:
        self.org_id = org_id
        self.account_id = account_id
        super().__init__(
            f"Account {account_id} is the last owner of organization {org_id}"
        )


class ValidationError(OrgDirectoryError):
    """Input was malformed."""


class StorageUnavailableError(OrgDirectoryError):
    """The relational store could not be reached. Safe to retry reads."""
