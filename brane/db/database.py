"""
Store handle: engine, session factory, and bootstrap.

A `Database` is built once at startup from an explicit URL (or from the
environment), handed to whatever needs sessions, and disposed at shutdown.
In-memory SQLite URLs get a single shared connection so the schema survives
across sessions, which is what the unit tests rely on.
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from brane.db import models
from brane.db.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


_URL_COMPONENTS = (
    ("username", "POSTGRES_USER"),
    ("password", "POSTGRES_PASSWORD"),
    ("host", "POSTGRES_HOST"),
    ("port", "POSTGRES_PORT"),
    ("database", "POSTGRES_DB"),
)


def get_database_url() -> str:
    """Return ``DATABASE_URL``, or a PostgreSQL URL assembled from ``POSTGRES_*``.

    Every component must be set when ``DATABASE_URL`` is absent; the error
    names the ones that are missing.
    """
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    parts = {field: os.getenv(env_name) for field, env_name in _URL_COMPONENTS}
    missing = [env_name for field, env_name in _URL_COMPONENTS if not parts[field]]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    parts["port"] = int(parts["port"])
    return URL.create("postgresql", **parts).render_as_string(hide_password=False)


def _engine_kwargs(url: str) -> dict:
    kwargs = {
        "future": True,
        "echo": os.getenv("DATABASE_ECHO", "false").lower() == "true",
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return kwargs


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


class Database:
    """Shared, reusable handle to the backing store."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or get_database_url()
        self.engine = create_engine(self.url, **_engine_kwargs(self.url))
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, future=True)

    @classmethod
    def connect(cls, url: Optional[str] = None) -> "Database":
        """Build a handle and ping the store; failure is fatal to the caller."""
        try:
            database = cls(url)
        except SQLAlchemyError as exc:
            logger.error(f"Invalid store address: {exc}")
            raise StoreUnavailableError("invalid store address") from exc
        except ImportError as exc:
            # create_engine imports the DBAPI driver eagerly
            logger.error(f"Store driver not installed: {exc}")
            raise StoreUnavailableError(f"driver not installed: {exc.name or exc}") from exc
        try:
            database.health()
        except SQLAlchemyError as exc:
            logger.error(f"Could not reach store at {database.engine.url!r}: {exc}")
            database.dispose()
            raise StoreUnavailableError(f"store unreachable: {database.engine.url!r}") from exc
        logger.info(f"Connected to {database.engine.dialect.name} store")
        return database

    def health(self) -> None:
        """One no-op round trip; raises the driver error if the store is down."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create(self) -> None:
        """Create every collection that does not exist yet, in dependency order."""
        try:
            models.Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.error(f"Schema creation failed: {exc}")
            raise StoreUnavailableError("could not create collections") from exc
        logger.info(f"Ensured {len(models.Base.metadata.sorted_tables)} collections")

    def drop(self) -> None:
        models.Base.metadata.drop_all(bind=self.engine)

    def empty_table(self, name: str) -> None:
        """Delete every row of the collection called ``name``."""
        table = models.Base.metadata.tables.get(name)
        if table is None:
            raise ValueError(f"Unknown collection: {name}")
        with self.engine.begin() as conn:
            conn.execute(table.delete())

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Store handle released")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit everything issued inside the block, or roll it all back.

    Store faults are re-raised unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
