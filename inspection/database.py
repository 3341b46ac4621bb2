"""Database engine, declarative base and session helpers."""
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session

from inspection.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


_engine: Optional[Engine] = None
_engine_lock = threading.Lock()


def get_engine() -> Engine:
    """Get or create the SQLAlchemy engine for DATABASE_URL (thread-safe singleton)."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_settings()
                _engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    return _engine


def dispose_engine() -> None:
    """Dispose the cached engine so the next call reconnects with fresh settings."""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None


@contextmanager
def db_session(engine: Optional[Engine] = None) -> Iterator[Session]:
    """Scoped database session.

    The session is closed on every exit path; uncommitted work is rolled back.

    Usage:
        with db_session() as db:
            store = SqlRegionStore(db)
    """
    with Session(engine or get_engine()) as session:
        yield session


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a request-scoped session."""
    with db_session() as session:
        yield session
