"""Alembic migrations environment."""
from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

from inspection.config import get_settings
from inspection.database import Base
from inspection.models import *  # Import all models

settings = get_settings()
config = context.config

if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """sqlalchemy.url from the Alembic config wins over DATABASE_URL."""
    return config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL


def include_object(object, name, type_, reflected, compare_to):
    """Filter out any tables not explicitly defined in our metadata."""
    if type_ == "table":
        return name in target_metadata.tables
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object
        )
        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
