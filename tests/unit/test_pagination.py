import uuid

from brane.db import models, schemas
from brane.db.pagination import paginate
from brane.db.repositories import bans as repo_bans
from brane.db.repositories import reports as repo_reports


def _populate(db, count, banned=None):
    ids = []
    for _ in range(count):
        ban = schemas.BanWrite.new(str(uuid.uuid4()), banned or str(uuid.uuid4()), "", 0, True)
        repo_bans.write_ban(db, ban)
        ids.append(ban.id)
    # newest first
    return list(reversed(ids))


def test_first_page_is_newest_first(db):
    ids = _populate(db, 10)
    rows, size = paginate(db, models.Ban, limit=4)
    assert size == 4
    assert [row.id for row in rows] == ids[:4]
    indexes = [row.order_index for row in rows]
    assert indexes == sorted(indexes, reverse=True)


def test_chained_cursors_enumerate_everything_once(db):
    ids = _populate(db, 11)
    seen = []
    cursor = ""
    while True:
        rows, size = paginate(db, models.Ban, cursor=cursor, limit=3)
        assert size == len(rows)
        if not rows:
            break
        seen.extend(row.id for row in rows)
        cursor = rows[-1].id
    assert seen == ids


def test_limit_larger_than_population(db):
    ids = _populate(db, 5)
    rows, size = paginate(db, models.Ban, limit=50)
    assert size == 5
    assert [row.id for row in rows] == ids


def test_unknown_cursor_yields_empty_page(db):
    _populate(db, 5)
    rows, size = paginate(db, models.Ban, cursor=str(uuid.uuid4()), limit=5)
    assert rows == []
    assert size == 0


def test_cursor_outside_scope_still_positions_page(db):
    subject = str(uuid.uuid4())
    older = _populate(db, 3, banned=subject)
    other = _populate(db, 1)
    newer = _populate(db, 2, banned=subject)
    scope = [models.Ban.banned == subject]
    rows, size = paginate(db, models.Ban, scope=scope, cursor=other[0], limit=5)
    assert size == 3
    assert [row.id for row in rows] == older
    assert not set(newer) & {row.id for row in rows}


def test_non_positive_limit(db):
    _populate(db, 2)
    assert paginate(db, models.Ban, limit=0) == ([], 0)
    assert paginate(db, models.Ban, limit=-1) == ([], 0)


def test_appends_do_not_disturb_later_pages(db):
    ids = _populate(db, 6)
    first, _ = paginate(db, models.Ban, limit=3)
    _populate(db, 4)
    second, _ = paginate(db, models.Ban, cursor=first[-1].id, limit=3)
    assert [row.id for row in second] == ids[3:6]


def test_resolving_seen_reports_does_not_end_the_queue(db):
    ids = []
    for _ in range(6):
        report = schemas.ReportWrite.new(str(uuid.uuid4()), str(uuid.uuid4()), "content", "spam")
        repo_reports.write_report(db, report)
        ids.insert(0, report.id)

    page, _ = repo_reports.get_unresolved_reports(db, limit=3)
    assert [report.id for report in page] == ids[:3]
    for report in page:
        assert repo_reports.resolve_report(db, report.id, "handled")

    rest, size = repo_reports.get_unresolved_reports(db, before=page[-1].id, limit=3)
    assert size == 3
    assert [report.id for report in rest] == ids[3:]
