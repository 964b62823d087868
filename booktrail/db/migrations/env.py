"""Alembic environment for the booking audit schema.

Migrations are raw DDL executed through an async SQLAlchemy engine on the
asyncpg driver, so the same DSN works for the stores and for alembic.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from booktrail.config import get_settings
from booktrail.db.pool import PostgresPool

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Raw DDL migrations, no autogenerate
target_metadata = None


def get_database_url() -> str:
    """Resolve the migration DSN.

    Priority:
    1. storage.postgres.connection_url from booktrail settings
    2. BOOKTRAIL_DATABASE_URL, DATABASE_URL or POSTGRES_* variables
    3. alembic.ini sqlalchemy.url, when set

    postgresql:// is rewritten to postgresql+asyncpg://.
    """
    url = get_settings().storage.postgres.connection_url
    if not url:
        url = config.get_main_option("sqlalchemy.url", "") or PostgresPool.dsn_from_env()

    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return url


def run_migrations_offline() -> None:
    """Emit SQL without connecting, for review before applying."""
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply migrations over an asyncpg-backed engine."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
