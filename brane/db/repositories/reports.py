"""
Report repository functions.

Reports are immutable once written except for resolution, which marks the
report resolved and records how.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session

from brane.db import models, schemas
from brane.db.database import transaction
from brane.db.pagination import paginate
from brane.db.upsert import upsert

logger = logging.getLogger(__name__)


def write_report(db: Session, report: Any) -> schemas.ReportWrite:
    with transaction(db):
        row = upsert(db, models.Report, report)
    return row


def get_report(db: Session, report_id: str) -> Optional[schemas.Report]:
    db_report = db.query(models.Report).filter(models.Report.id == report_id).first()
    if db_report is None:
        return None
    return schemas.Report.model_validate(db_report, from_attributes=True)


def get_unresolved_reports(db: Session, *, before: str = "", limit: int) -> Tuple[List[schemas.Report], int]:
    """The moderation queue: unresolved reports, most recent first."""
    rows, size = paginate(
        db,
        models.Report,
        scope=[models.Report.resolved.is_(False)],
        cursor=before,
        limit=limit,
    )
    return [schemas.Report.model_validate(row, from_attributes=True) for row in rows], size


def resolve_report(db: Session, report_id: str, resolution: str) -> bool:
    """Mark an unresolved report resolved. Returns False if nothing was updated."""
    if len(resolution) > 255:
        raise ValueError("resolution longer than 255 characters")
    with transaction(db):
        updated = (
            db.query(models.Report)
            .filter(models.Report.id == report_id, models.Report.resolved.is_(False))
            .update(
                {models.Report.resolved: True, models.Report.resolution: resolution},
                synchronize_session=False,
            )
        )
    if updated:
        logger.info(f"Report {report_id} resolved")
    return bool(updated)
