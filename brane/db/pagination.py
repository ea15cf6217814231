"""
Keyset pagination shared by every listed collection.

Listings run newest first by the internal ``order_index``. A cursor is the
public id of the last item a caller has seen; it is resolved to its order
index inside the same statement, so a page is one round trip and an unknown
cursor simply matches nothing.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import and_, select
from sqlalchemy.orm import Session


def cursor_position(model, cursor: str):
    """Return a scalar subquery selecting the order index of ``cursor``.

    The lookup ignores the listing's scope: an item that has since left the
    listed population (e.g. a report resolved after it was seen) still marks
    where the next page starts. An unknown id resolves to NULL.
    """
    return (
        select(model.order_index)
        .where(model.id == cursor)
        .limit(1)
        # same table as the outer listing; must not be correlated to it
        .correlate(None)
        .scalar_subquery()
    )


def page_query(db: Session, model, *, scope: Sequence[Any] = (), cursor: Optional[str] = None, limit: int):
    """Build the query for one page without executing it."""
    criteria = list(scope)
    if cursor:
        criteria.append(model.order_index < cursor_position(model, cursor))
    q = db.query(model)
    if criteria:
        q = q.filter(and_(*criteria))
    return q.order_by(model.order_index.desc()).limit(limit)


def paginate(
    db: Session,
    model,
    *,
    scope: Sequence[Any] = (),
    cursor: Optional[str] = None,
    limit: int,
) -> Tuple[List[Any], int]:
    """Return ``(rows, size)`` for the page strictly after ``cursor``.

    An empty cursor starts from the newest row. ``size`` always equals
    ``len(rows)``.
    """
    if limit <= 0:
        return [], 0
    rows = page_query(db, model, scope=scope, cursor=cursor, limit=limit).all()
    return rows, len(rows)
