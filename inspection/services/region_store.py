"""Region store factory.

Consumers should use open_region_store() to get a store bound to a scoped
database session.
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine

from inspection.database import db_session
from inspection.services.region_store_base import RegionStore
from inspection.services.region_store_sql import SqlRegionStore


@contextmanager
def open_region_store(engine: Optional[Engine] = None) -> Iterator[RegionStore]:
    """Open a SQL region store; its session is released on every exit path."""
    with db_session(engine) as session:
        yield SqlRegionStore(session)
