"""Organization membership and directory store."""

from org_directory.exceptions import (
    AccountNotFoundError,
    ConflictError,
    DuplicateMembershipError,
    EmailTakenError,
    LastOwnerError,
    MembershipNotFoundError,
    NameTakenError,
    NotFoundError,
    OrganizationNotFoundError,
    OrgDirectoryError,
    StorageUnavailableError,
    ValidationError,
)
from org_directory.schemas.organizations import (
    CreateOrganizationOptions,
    ListOrganizationsOptions,
    Organization,
)
from org_directory.schemas.users import CreateUserOptions, User
from org_directory.services.organizations import OrganizationDirectory
from org_directory.services.users import UsersStore

__all__ = [
    "AccountNotFoundError",
    "ConflictError",
    "CreateOrganizationOptions",
    "CreateUserOptions",
    "DuplicateMembershipError",
    "EmailTakenError",
    "LastOwnerError",
    "ListOrganizationsOptions",
    "MembershipNotFoundError",
    "NameTakenError",
    "NotFoundError",
    "OrgDirectoryError",
    "Organization",
    "OrganizationDirectory",
    "OrganizationNotFoundError",
    "StorageUnavailableError",
    "User",
    "UsersStore",
    "ValidationError",
]
