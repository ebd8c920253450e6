"""Alembic environment.

The database URL comes from the in-memory config built by
portfolio.factory._migrate_db, or from DATABASE_URL when alembic is run
by hand.
"""
import os

from alembic import context
from sqlalchemy import engine_from_config, pool

from portfolio.config import normalize_db_url
from portfolio.infra.db import db
import portfolio.models  # noqa: F401  (register tables)

config = context.config

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", normalize_db_url(os.environ["DATABASE_URL"]))

target_metadata = db.metadata


def run_migrations_offline():
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
