"""
Ban repository functions.

A subject may have any number of ban rows; whether it is banned right now is
derived from them on every call.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from brane.db import models, schemas
from brane.db.database import transaction
from brane.db.pagination import paginate
from brane.db.upsert import upsert

logger = logging.getLogger(__name__)


def write_ban(db: Session, ban: Any) -> schemas.BanWrite:
    with transaction(db):
        row = upsert(db, models.Ban, ban)
    if row.forever:
        logger.info(f"Ban {row.id}: {row.banned} banned permanently by {row.banner}")
    else:
        logger.info(f"Ban {row.id}: {row.banned} banned until {row.expires} by {row.banner}")
    return row


def get_ban(db: Session, ban_id: str) -> Optional[schemas.Ban]:
    db_ban = db.query(models.Ban).filter(models.Ban.id == ban_id).first()
    if db_ban is None:
        return None
    return schemas.Ban.model_validate(db_ban, from_attributes=True)


def get_bans_of_user(
    db: Session,
    user_id: str,
    *,
    before: str = "",
    limit: int,
) -> Tuple[List[schemas.Ban], int]:
    """Bans issued against ``user_id``, newest first."""
    rows, size = paginate(db, models.Ban, scope=[models.Ban.banned == user_id], cursor=before, limit=limit)
    return [schemas.Ban.model_validate(row, from_attributes=True) for row in rows], size


def is_banned(db: Session, user_id: str, now: Optional[int] = None) -> bool:
    """Return True if any ban on ``user_id`` is permanent or expires after ``now``.

    ``now`` defaults to the current wall-clock time.
    """
    if now is None:
        now = models.now_unix()
    active = db.query(models.Ban.id).filter(
        models.Ban.banned == user_id,
        or_(models.Ban.forever.is_(True), models.Ban.expires > now),
    )
    return bool(db.query(active.exists()).scalar())
