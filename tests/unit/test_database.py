import os
from unittest.mock import patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.engine import make_url

from brane.db import Database, StoreUnavailableError, models, schemas
from brane.db import database as database_mod
from brane.db.database import get_database_url, transaction
from brane.db.repositories import users as repo_users


def test_database_url_from_env():
    with patch.dict(os.environ, {"DATABASE_URL": "sqlite://"}, clear=True):
        assert get_database_url() == "sqlite://"


def test_database_url_from_components():
    env = {
        "POSTGRES_USER": "u",
        "POSTGRES_PASSWORD": "p",
        "POSTGRES_HOST": "h",
        "POSTGRES_PORT": "5432",
        "POSTGRES_DB": "d",
    }
    with patch.dict(os.environ, env, clear=True):
        assert get_database_url() == "postgresql://u:p@h:5432/d"


def test_database_url_escapes_credentials():
    env = {
        "POSTGRES_USER": "brane",
        "POSTGRES_PASSWORD": "p@ss:word/1",
        "POSTGRES_HOST": "db.internal",
        "POSTGRES_PORT": "5432",
        "POSTGRES_DB": "brane",
    }
    with patch.dict(os.environ, env, clear=True):
        url = make_url(get_database_url())
    assert url.password == "p@ss:word/1"
    assert url.host == "db.internal"
    assert url.port == 5432


def test_database_url_missing_components():
    with patch.dict(os.environ, {"POSTGRES_USER": "u"}, clear=True):
        with pytest.raises(ValueError) as exc:
            get_database_url()
    assert "POSTGRES_PASSWORD" in str(exc.value)
    assert "POSTGRES_USER" not in str(exc.value)


def test_connect_malformed_address():
    with pytest.raises(StoreUnavailableError):
        Database.connect("foobar")


def test_connect_missing_driver(monkeypatch):
    def _no_driver(*args, **kwargs):
        raise ModuleNotFoundError("No module named 'psycopg2'", name="psycopg2")

    monkeypatch.setattr(database_mod, "create_engine", _no_driver)
    with pytest.raises(StoreUnavailableError) as exc:
        Database.connect("postgresql://u:p@localhost:5432/d")
    assert "psycopg2" in str(exc.value)
    assert isinstance(exc.value.__cause__, ImportError)


def test_connect_unreachable_address(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "store.sqlite3"
    with pytest.raises(StoreUnavailableError):
        Database.connect(f"sqlite+pysqlite:///{missing}")


def test_health(store):
    store.health()


def test_create_is_idempotent(store):
    store.create()
    tables = set(inspect(store.engine).get_table_names())
    assert tables == {"users", "content", "tags", "auth", "token", "secret", "bans", "reports", "subs"}


def test_empty_table(store, db):
    attrs = schemas.UserWrite.new("imonke", "mmm, monke", "me@imonke.io")
    repo_users.write_user(db, attrs)
    store.empty_table("users")
    assert repo_users.get_user(db, attrs.id) is None


def test_empty_unknown_table(store):
    with pytest.raises(ValueError):
        store.empty_table("foobar")


def test_transaction_rolls_back_on_error(db):
    attrs = schemas.UserWrite.new("imonke", "mmm, monke", "me@imonke.io")
    with pytest.raises(RuntimeError):
        with transaction(db):
            db.add(models.User(**attrs.model_dump()))
            db.flush()
            raise RuntimeError("boom")
    assert repo_users.get_user(db, attrs.id) is None


def test_separate_handles_are_independent():
    first = Database("sqlite+pysqlite:///:memory:")
    second = Database("sqlite+pysqlite:///:memory:")
    try:
        first.create()
        assert "users" in inspect(first.engine).get_table_names()
        assert "users" not in inspect(second.engine).get_table_names()
    finally:
        first.dispose()
        second.dispose()

