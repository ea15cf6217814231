"""
Shared SQLAlchemy base and helpers.
"""
import time

from sqlalchemy import BigInteger, Column, Integer
from sqlalchemy.orm import declarative_base

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
OrderIndexType = BigInteger().with_variant(Integer(), "sqlite")


def now_unix() -> int:
    """Return the current wall-clock time as whole unix seconds."""
    return int(time.time())


def order_index_column():
    """Strictly increasing insertion sequence used only for pagination order."""
    return Column("order_index", OrderIndexType, primary_key=True, autoincrement=True)


Base = declarative_base()
