"""
Generic insert-or-replace writes keyed by a collection's public id.

Attribute maps are validated against the collection's write schema before a
statement is built, so an unknown, missing, or mis-shaped attribute fails the
write without touching the store.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from brane.db import models, schemas
from brane.db.errors import SchemaValidationError

WRITE_SCHEMAS: Dict[type, Type[schemas.WriteModel]] = {
    models.User: schemas.UserWrite,
    models.Content: schemas.ContentWrite,
    models.Ban: schemas.BanWrite,
    models.Report: schemas.ReportWrite,
    models.Credential: schemas.CredentialWrite,
    models.Secret: schemas.SecretWrite,
    models.Token: schemas.TokenWrite,
}

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
    "mysql": mysql.insert,
    "mariadb": mysql.insert,
}

KEY_COLUMN = "id"


def validate(model: type, attrs: Any) -> schemas.WriteModel:
    """Return ``attrs`` as the write schema registered for ``model``."""
    table = getattr(model, "__tablename__", repr(model))
    schema = WRITE_SCHEMAS.get(model)
    if schema is None:
        raise SchemaValidationError(table, "collection does not accept upserts")
    if isinstance(attrs, schema):
        return attrs
    if isinstance(attrs, BaseModel):
        attrs = attrs.model_dump()
    if not isinstance(attrs, Mapping):
        raise SchemaValidationError(table, f"expected a mapping, got {type(attrs).__name__}")
    try:
        return schema.model_validate(dict(attrs))
    except ValidationError as exc:
        raise SchemaValidationError(table, str(exc), exc.errors(include_url=False)) from exc


def column_values(model: type, row: schemas.WriteModel) -> Dict[str, Any]:
    """Pick the attributes of ``row`` that are physical columns of ``model``."""
    columns = {column.name for column in model.__table__.columns}
    return {key: value for key, value in row.model_dump().items() if key in columns}


def encode_upsert(dialect_name: str, model: type, values: Dict[str, Any]):
    """Build a single insert that replaces the existing row with the same key."""
    make_insert = _DIALECT_INSERTS.get(dialect_name)
    if make_insert is None:
        raise NotImplementedError(f"upsert is not supported on dialect {dialect_name!r}")

    stmt = make_insert(model.__table__).values(**values)
    replaced = [key for key in values if key != KEY_COLUMN]
    if make_insert is mysql.insert:
        return stmt.on_duplicate_key_update({key: stmt.inserted[key] for key in replaced})
    return stmt.on_conflict_do_update(
        index_elements=[model.__table__.c[KEY_COLUMN]],
        set_={key: stmt.excluded[key] for key in replaced},
    )


def upsert(db: Session, model: type, attrs: Any) -> schemas.WriteModel:
    """Validate ``attrs`` and issue one insert-or-replace for it.

    The caller owns the transaction; nothing is committed here.
    """
    row = validate(model, attrs)
    stmt = encode_upsert(db.get_bind().dialect.name, model, column_values(model, row))
    db.execute(stmt)
    return row
