"""Team models."""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from org_directory.database import Base
from org_directory.models.mixins import TimestampMixin, id_column


class TeamAccess(str, enum.Enum):
    """Access level a team grants on organization resources."""

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"
    OWNER = "owner"


class Team(TimestampMixin, Base):
    """Named group of members inside an organization."""

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("org_id", "lower_name", name="uq_teams_org_lower_name"),
    )

    id: Mapped[int] = id_column()
    org_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
    name: Mapped[str] = mapped_column(String(255))
    lower_name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(String(255), default="")
    authorize: Mapped[TeamAccess] = mapped_column(
        Enum(
            TeamAccess,
            name="team_access",
            values_callable=lambda levels: [level.value for level in levels],
        ),
        default=TeamAccess.READ,
    )
    num_members: Mapped[int] = mapped_column(Integer, default=0)


class TeamMembership(Base):
    """Edge between a team and a member account."""

    __tablename__ = "team_memberships"
    __table_args__ = (
        UniqueConstraint(
            "team_id", "account_id", name="uq_team_memberships_team_account"
        ),
    )

    id: Mapped[int] = id_column()
    org_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
