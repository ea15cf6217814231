import os

import pytest

# Cheap Argon2 parameters for tests; must be set before brane.utils is imported
os.environ.setdefault("BRANE_ARGON2_TIME_COST", "1")
os.environ.setdefault("BRANE_ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("BRANE_ARGON2_PARALLELISM", "1")

from brane.db import Database, models  # noqa: E402


@pytest.fixture(scope="session")
def store():
    # In-memory SQLite with StaticPool so the schema persists across sessions
    database = Database.connect("sqlite+pysqlite:///:memory:")
    database.create()
    try:
        yield database
    finally:
        database.drop()
        database.dispose()


@pytest.fixture()
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture(autouse=True)
def clean(store):
    for table in reversed(models.Base.metadata.sorted_tables):
        store.empty_table(table.name)
    yield
