"""Organization membership model."""

from sqlalchemy import Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from org_directory.database import Base
from org_directory.models.mixins import TimestampMixin, id_column


class Membership(TimestampMixin, Base):
    """Edge between an organization and a member account."""

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("org_id", "account_id", name="uq_memberships_org_account"),
        Index("ix_memberships_account_id", "account_id"),
    )

    id: Mapped[int] = id_column()
    org_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
    is_owner: Mapped[bool] = mapped_column(Boolean, default=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
