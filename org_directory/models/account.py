"""Account model shared by individual users and organizations."""

import enum

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from org_directory.database import Base
from org_directory.models.mixins import TimestampMixin, id_column


class AccountKind(str, enum.Enum):
    """Discriminator for the account namespace."""

    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"


class Account(TimestampMixin, Base):
    """User or organization account.

    Both kinds share ``name`` uniqueness; ``lower_name`` makes it
    case-insensitive. ``lower_full_name`` is folded in Python so search
    does not depend on the database's ``lower()``.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = id_column()
    kind: Mapped[AccountKind] = mapped_column(
        Enum(
            AccountKind,
            name="account_kind",
            values_callable=lambda kinds: [kind.value for kind in kinds],
        ),
        default=AccountKind.INDIVIDUAL,
    )
    name: Mapped[str] = mapped_column(String(255), unique=True)
    lower_name: Mapped[str] = mapped_column(String(255), unique=True)
    full_name: Mapped[str] = mapped_column(String(255), default="")
    lower_full_name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    description: Mapped[str] = mapped_column(String(255), default="")
    website: Mapped[str] = mapped_column(String(255), default="")
    location: Mapped[str] = mapped_column(String(255), default="")
    num_members: Mapped[int] = mapped_column(Integer, default=0)
    num_teams: Mapped[int] = mapped_column(Integer, default=0)

    @property
    def is_organization(self) -> bool:
        """Whether this account is an organization."""
        return self.kind == AccountKind.ORGANIZATION
