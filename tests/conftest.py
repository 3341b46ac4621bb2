"""Shared fixtures: SQLite-backed and in-memory region stores, source writers."""
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import inspection.models  # noqa: F401
from inspection.database import Base
from inspection.schemas.region import RegionRecord
from inspection.services.ingestion import ingest
from inspection.services.region_store_memory import InMemoryRegionStore
from inspection.services.region_store_sql import SqlRegionStore


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(eng, "connect", _enable_foreign_keys)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def sql_store(session):
    return SqlRegionStore(session, batch_size=2)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each store-level test runs against both store implementations."""
    if request.param == "memory":
        return InMemoryRegionStore()
    return request.getfixturevalue("sql_store")


def make_records(points):
    """Build records from (x, y, category, group_id) tuples, ids from 1."""
    return [
        RegionRecord(id=i, coord_x=x, coord_y=y, category=cat, group_id=gid)
        for i, (x, y, cat, gid) in enumerate(points, start=1)
    ]


@pytest.fixture
def populate():
    def _populate(target_store, points):
        records = make_records(points)
        ingest(target_store, records)
        return records
    return _populate


@pytest.fixture
def write_sources(tmp_path):
    """Write points/categories/groups files and return the directory."""
    def _write(points, categories, groups, directory: Path = None):
        directory = directory or tmp_path / "data"
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "points.txt").write_text("".join(f"{line}\n" for line in points))
        (directory / "categories.txt").write_text("".join(f"{line}\n" for line in categories))
        (directory / "groups.txt").write_text("".join(f"{line}\n" for line in groups))
        return directory
    return _write
