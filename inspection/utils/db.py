"""Database bootstrap helpers used by the loader."""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import InterfaceError, OperationalError, ProgrammingError, SQLAlchemyError

from inspection.config import Settings
from inspection.database import Base
from inspection.errors import StoreUnavailableError, StoreWriteError

logger = logging.getLogger(__name__)


def ensure_database(settings: Settings) -> bool:
    """Create the PostgreSQL database named in DATABASE_URL if it does not exist.

    Connects to ADMIN_DATABASE_NAME on the same server. Non-PostgreSQL URLs
    are left alone.

    Returns:
        True if the database was created
    """
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() != "postgresql":
        return False

    db_name = url.database
    admin_engine = create_engine(
        url.set(database=settings.ADMIN_DATABASE_NAME),
        isolation_level="AUTOCOMMIT",
    )
    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": db_name},
            ).first()
            if exists:
                logger.info(f"Database '{db_name}' already exists")
                return False
            try:
                # Identifiers cannot be bound parameters
                quoted = conn.dialect.identifier_preparer.quote(db_name)
                conn.execute(text(f"CREATE DATABASE {quoted}"))
            except ProgrammingError as e:
                if "already exists" in str(e.orig):
                    logger.warning(f"Database '{db_name}' was created concurrently")
                    return False
                raise StoreWriteError(f"Cannot create database '{db_name}': {e.orig}") from e
            logger.info(f"Database '{db_name}' created")
            return True
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailableError(f"Cannot connect to PostgreSQL: {e}") from e
    except SQLAlchemyError as e:
        raise StoreWriteError(f"Cannot create database '{db_name}': {e}") from e
    finally:
        admin_engine.dispose()


def create_tables(engine: Engine) -> None:
    """Create inspection tables that do not exist yet."""
    import inspection.models  # noqa: F401  register models on Base.metadata

    try:
        Base.metadata.create_all(engine)
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailableError(f"Cannot create tables: {e}") from e
    except SQLAlchemyError as e:
        raise StoreWriteError(f"Cannot create tables: {e}") from e
