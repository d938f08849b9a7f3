"""
Alembic environment.
The database URL comes from the application settings unless the caller set one.
"""

import logging

from alembic import context

from timesheets.config import get_settings
from timesheets.infrastructure.db.database import Base, build_engine
from timesheets.infrastructure.db import models  # noqa: F401  registers the tables

config = context.config
target_metadata = Base.metadata

logger = logging.getLogger("alembic.env")


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url


def run_migrations_offline() -> None:
    """Emit SQL without a live connection."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = build_engine(_database_url())
    with connectable.connect() as connection:
        # batch mode keeps ALTERs working on SQLite
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
