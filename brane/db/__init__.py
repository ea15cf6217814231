"""
Storage layer for users, content, moderation, and credentials.

Callers construct a `Database` once, open sessions from it, and pass those
sessions to the repository functions in `brane.db.repositories`.
"""
from .database import Database
from .errors import SchemaValidationError, StoreUnavailableError

__all__ = ["Database", "SchemaValidationError", "StoreUnavailableError"]
