"""Exceptions raised by the storage layer.

Store faults are not wrapped; SQLAlchemy errors reach the caller unchanged.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class SchemaValidationError(ValueError):
    """An attribute map was rejected before anything was written."""

    def __init__(self, collection: str, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(f"invalid {collection} attributes: {message}")
        self.collection = collection
        self.errors = errors or []


class StoreUnavailableError(RuntimeError):
    """Bootstrap could not reach or initialise the backing store."""
