"""
User repository functions.

Implements user writes, lookups by id/email/nick, post counting, and the
moderator/admin privilege flags.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from brane.db import models, schemas
from brane.db.database import transaction
from brane.db.upsert import upsert

logger = logging.getLogger(__name__)


def write_user(db: Session, user: Any) -> schemas.UserWrite:
    """Insert ``user`` or replace the stored user with the same id."""
    with transaction(db):
        row = upsert(db, models.User, user)
    return row


def delete_user(db: Session, user_id: str) -> None:
    with transaction(db):
        db.query(models.User).filter(models.User.id == user_id).delete(synchronize_session=False)


def _read_user_by(db: Session, column, value: str) -> Optional[schemas.User]:
    db_user = db.query(models.User).filter(column == value).first()
    if db_user is None:
        return None
    return schemas.User.model_validate(db_user, from_attributes=True)


def get_user(db: Session, user_id: str) -> Optional[schemas.User]:
    return _read_user_by(db, models.User.id, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[schemas.User]:
    return _read_user_by(db, models.User.email, email)


def get_user_by_nick(db: Session, nick: str) -> Optional[schemas.User]:
    return _read_user_by(db, models.User.nick, nick)


def increment_post_count(db: Session, user_id: str) -> None:
    with transaction(db):
        db.query(models.User).filter(models.User.id == user_id).update(
            {models.User.post_count: models.User.post_count + 1},
            synchronize_session=False,
        )


def is_moderator(db: Session, user_id: str) -> bool:
    """Admins are always treated as moderators."""
    row = db.query(models.User.admin, models.User.moderator).filter(models.User.id == user_id).first()
    if row is None:
        return False
    return bool(row.admin or row.moderator)


def is_admin(db: Session, user_id: str) -> bool:
    admin = db.query(models.User.admin).filter(models.User.id == user_id).scalar()
    return bool(admin)


def _set_flag(db: Session, user_id: str, column, state: bool) -> None:
    with transaction(db):
        db.query(models.User).filter(models.User.id == user_id).update({column: state}, synchronize_session=False)


def set_moderator(db: Session, user_id: str, state: bool) -> None:
    _set_flag(db, user_id, models.User.moderator, state)
    logger.info(f"Moderator flag of user {user_id} set to {state}")


def set_admin(db: Session, user_id: str, state: bool) -> None:
    _set_flag(db, user_id, models.User.admin, state)
    logger.info(f"Admin flag of user {user_id} set to {state}")
