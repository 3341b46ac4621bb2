"""Tests for database bootstrap and schema migrations."""
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import ProgrammingError

from inspection.config import Settings
from inspection.database import Base
from inspection.errors import StoreWriteError
from inspection.utils.db import create_tables, ensure_database

ROOT = Path(__file__).resolve().parents[1]


def _columns(engine, table):
    return {column["name"] for column in inspect(engine).get_columns(table)}


def test_ensure_database_ignores_non_postgres(tmp_path):
    settings = Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'inspection.db'}")
    assert ensure_database(settings) is False


def test_create_tables_is_repeatable(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'inspection.db'}")
    create_tables(engine)
    create_tables(engine)
    assert set(inspect(engine).get_table_names()) >= {"inspection_group", "inspection_region"}
    assert _columns(engine, "inspection_region") == {"id", "group_id", "coord_x", "coord_y", "category"}
    engine.dispose()


def test_migration_creates_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", url)
    config.attributes["configure_logger"] = False

    command.upgrade(config, "head")
    engine = create_engine(url)
    assert {"inspection_group", "inspection_region"} <= set(inspect(engine).get_table_names())
    foreign_keys = inspect(engine).get_foreign_keys("inspection_region")
    assert foreign_keys[0]["referred_table"] == "inspection_group"
    engine.dispose()

    command.downgrade(config, "base")
    engine = create_engine(url)
    assert "inspection_region" not in inspect(engine).get_table_names()
    engine.dispose()


def _fake_admin_engine(monkeypatch, create_error):
    conn = MagicMock()
    conn.execute.side_effect = [MagicMock(first=MagicMock(return_value=None)), create_error]
    conn.dialect.identifier_preparer.quote.return_value = '"inspection_db"'
    admin_engine = MagicMock()
    admin_engine.connect.return_value.__enter__.return_value = conn
    monkeypatch.setattr("inspection.utils.db.create_engine", lambda *args, **kwargs: admin_engine)
    return admin_engine


def test_ensure_database_reports_create_failure(monkeypatch):
    admin_engine = _fake_admin_engine(
        monkeypatch,
        ProgrammingError("CREATE DATABASE", {}, Exception("permission denied to create database")),
    )
    settings = Settings(DATABASE_URL="postgresql://postgres:secret@db:5432/inspection_db")
    with pytest.raises(StoreWriteError, match="permission denied"):
        ensure_database(settings)
    admin_engine.dispose.assert_called_once()


def test_ensure_database_tolerates_concurrent_create(monkeypatch):
    _fake_admin_engine(
        monkeypatch,
        ProgrammingError("CREATE DATABASE", {}, Exception('database "inspection_db" already exists')),
    )
    settings = Settings(DATABASE_URL="postgresql://postgres:secret@db:5432/inspection_db")
    assert ensure_database(settings) is False


def test_create_tables_reports_sql_failure(tmp_path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'inspection.db'}")

    def refuse(bind, **kwargs):
        raise ProgrammingError("CREATE TABLE", {}, Exception("permission denied for schema public"))

    monkeypatch.setattr(Base.metadata, "create_all", refuse)
    with pytest.raises(StoreWriteError, match="permission denied"):
        create_tables(engine)
    engine.dispose()
