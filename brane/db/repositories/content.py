"""
Content repository functions.

A post lives in two collections: its row in ``content`` and its tag rows in
``tags``. Every write here replaces both inside one transaction and every read
returns the post with its complete tag list, so callers never observe one
without the other.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import insert
from sqlalchemy.orm import Session

from brane.db import models, schemas
from brane.db.database import transaction
from brane.db.pagination import paginate
from brane.db.upsert import column_values, upsert, validate

logger = logging.getLogger(__name__)


def _replace_tags(db: Session, content_id: str, tags: List[str], now: int) -> None:
    # The delete always runs so an empty tag list clears the old set.
    db.query(models.Tag).filter(models.Tag.content_id == content_id).delete(synchronize_session=False)
    if not tags:
        return
    db.execute(
        insert(models.Tag),
        [{"content_id": content_id, "tag": tag, "created": now} for tag in tags],
    )


def write_content(db: Session, content: Any) -> schemas.ContentWrite:
    """Insert or replace a post together with exactly the tags it carries.

    The content row is written first; if that fails nothing touches the tag
    collection. Tags are de-duplicated keeping their first occurrence.
    """
    row = validate(models.Content, content)
    with transaction(db):
        upsert(db, models.Content, column_values(models.Content, row))
        _replace_tags(db, row.id, row.tags, models.now_unix())
    logger.debug(f"Wrote content {row.id} with {len(row.tags)} tags")
    return row


def delete_content(db: Session, content_id: str) -> None:
    """Delete a post and every tag row that belongs to it."""
    with transaction(db):
        db.query(models.Tag).filter(models.Tag.content_id == content_id).delete(synchronize_session=False)
        db.query(models.Content).filter(models.Content.id == content_id).delete(synchronize_session=False)


def get_tags(db: Session, content_id: str) -> List[str]:
    rows = (
        db.query(models.Tag.tag)
        .filter(models.Tag.content_id == content_id)
        .order_by(models.Tag.order_index)
        .all()
    )
    return [row.tag for row in rows]


def get_many_tags(db: Session, content_ids: Iterable[str]) -> Dict[str, List[str]]:
    """Fetch the tags of several posts in one query.

    Every requested id is present in the result, mapped to an empty list when
    it has no tags.
    """
    ids = list(dict.fromkeys(content_ids))
    if not ids:
        return {}
    tags: Dict[str, List[str]] = {content_id: [] for content_id in ids}
    rows = (
        db.query(models.Tag.content_id, models.Tag.tag)
        .filter(models.Tag.content_id.in_(ids))
        .order_by(models.Tag.order_index)
        .all()
    )
    for content_id, tag in rows:
        tags[content_id].append(tag)
    return tags


def _to_schema(db_content: models.Content, tags: List[str]) -> schemas.Content:
    content = schemas.Content.model_validate(db_content, from_attributes=True)
    content.tags = tags
    return content


def _with_tags(db: Session, rows: List[models.Content]) -> List[schemas.Content]:
    tags = get_many_tags(db, [row.id for row in rows])
    return [_to_schema(row, tags.get(row.id, [])) for row in rows]


def get_content(db: Session, content_id: str) -> Optional[schemas.Content]:
    db_content = db.query(models.Content).filter(models.Content.id == content_id).first()
    if db_content is None:
        return None
    return _to_schema(db_content, get_tags(db, content_id))


def get_many_content(db: Session, content_ids: Iterable[str]) -> List[schemas.Content]:
    """Read several posts by id, newest first, with their tags batched."""
    ids = list(dict.fromkeys(content_ids))
    if not ids:
        return []
    rows = (
        db.query(models.Content)
        .filter(models.Content.id.in_(ids))
        .order_by(models.Content.order_index.desc())
        .all()
    )
    return _with_tags(db, rows)


def get_content_page(db: Session, *, before: str = "", limit: int) -> Tuple[List[schemas.Content], int]:
    """Newest posts across all authors, strictly older than post ``before``."""
    rows, size = paginate(db, models.Content, cursor=before, limit=limit)
    return _with_tags(db, rows), size


def get_author_content_page(
    db: Session,
    author_id: str,
    *,
    before: str = "",
    limit: int,
) -> Tuple[List[schemas.Content], int]:
    """Same as `get_content_page`, restricted to one author."""
    rows, size = paginate(
        db,
        models.Content,
        scope=[models.Content.author == author_id],
        cursor=before,
        limit=limit,
    )
    return _with_tags(db, rows), size
