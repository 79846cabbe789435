"""
Alembic environment.

The database URL comes from ``sqlalchemy.url`` when the caller sets it on
the Alembic config, otherwise from the application settings.
"""

from sqlalchemy import create_engine, pool

from alembic import context

from resource_planner.config import get_settings
from resource_planner.core.database import Base
import resource_planner.models  # noqa: F401  registers the tables on Base.metadata

config = context.config
target_metadata = Base.metadata


def get_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url


def run_migrations_offline() -> None:
    """Emit SQL without a database connection."""
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
