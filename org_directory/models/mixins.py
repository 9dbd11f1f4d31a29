"""Shared model helpers."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """Common timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


def id_column() -> Mapped[int]:
    """Return an autoincrementing integer primary-key column.

    Ascending ids follow creation order.

    Returns
    -------
    Mapped[int]
        SQLAlchemy mapped integer column.
    """
    return mapped_column(Integer, primary_key=True, autoincrement=True)
