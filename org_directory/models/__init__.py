"""ORM models."""

from org_directory.models.account import Account, AccountKind
from org_directory.models.membership import Membership
from org_directory.models.team import Team, TeamAccess, TeamMembership

__all__ = [
    "Account",
    "AccountKind",
    "Membership",
    "Team",
    "TeamAccess",
    "TeamMembership",
]
