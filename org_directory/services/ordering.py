"""Order-by parsing for organization search."""

from __future__ import annotations

from sqlalchemy import ColumnElement

from org_directory.exceptions import ValidationError
from org_directory.models.account import Account

SORTABLE_COLUMNS = {
    "id": Account.id,
    "name": Account.lower_name,
    "full_name": Account.full_name,
    "created_at": Account.created_at,
    "num_members": Account.num_members,
}


def parse_order_by(order_by: str) -> list[ColumnElement]:
    """Translate an order-by clause into SQLAlchemy expressions.

    Terms look like ``"<column> [ASC|DESC]"`` separated by commas. An empty
    clause means ``id ASC``; otherwise ``id ASC`` is appended as a tie-break
    unless ``id`` is already present.

    Parameters
    ----------
    order_by : str
        Caller-supplied clause such as ``"id DESC"``.

    Returns
    -------
    list[ColumnElement]
        Ordering expressions, most significant first.
    """
    clauses: list[ColumnElement] = []
    seen: set[str] = set()
    for raw_term in order_by.split(","):
        term = raw_term.split()
        if not term:
            if order_by.strip():
                raise ValidationError(f"Empty term in order clause: {order_by!r}")
            continue
        if len(term) > 2:
            raise ValidationError(f"Malformed order term: {raw_term.strip()!r}")

        column_name = term[0].lower()
        column = SORTABLE_COLUMNS.get(column_name)
        if column is None:
            raise ValidationError(f"Cannot order by {term[0]!r}")
        if column_name in seen:
            raise ValidationError(f"Column ordered twice: {term[0]!r}")
        seen.add(column_name)

        direction = term[1].upper() if len(term) == 2 else "ASC"
        if direction == "ASC":
            clauses.append(column.asc())
        elif direction == "DESC":
            clauses.append(column.desc())
        else:
            raise ValidationError(f"Unknown order direction: {term[1]!r}")

    if "id" not in seen:
        clauses.append(Account.id.asc())
    return clauses
