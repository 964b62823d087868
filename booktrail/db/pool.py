"""PostgreSQL connection pool management.

Provides a single asyncpg pool shared by the audit stores.
"""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from booktrail.db.errors import ConnectionError
from booktrail.observability.logging import get_logger

logger = get_logger(__name__)


class PostgresPool:
    """Manages an asyncpg connection pool with health checks.

    Usage:
        pool = PostgresPool(dsn="postgresql://...")
        await pool.connect()
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch("SELECT ...")
        finally:
            await pool.close()
    """

    def __init__(
        self,
        dsn: str | None = None,
        min_size: int = 5,
        max_size: int = 20,
        max_inactive_connection_lifetime: float = 300.0,
        command_timeout: float = 60.0,
    ) -> None:
        """Initialize pool configuration.

        Args:
            dsn: Database connection string. Falls back to environment variables.
            min_size: Minimum number of connections to keep open.
            max_size: Maximum number of connections in the pool.
            max_inactive_connection_lifetime: Close connections idle longer than this (seconds).
            command_timeout: Default timeout for queries (seconds).
        """
        self._dsn = dsn or self.dsn_from_env()
        self._min_size = min_size
        self._max_size = max_size
        self._max_inactive_connection_lifetime = max_inactive_connection_lifetime
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @staticmethod
    def dsn_from_env() -> str:
        """Get database DSN from environment variables."""
        dsn = os.environ.get("BOOKTRAIL_DATABASE_URL")
        if dsn:
            return dsn

        dsn = os.environ.get("DATABASE_URL")
        if dsn:
            return dsn

        host = os.environ.get("POSTGRES_HOST", "localhost")
        port = os.environ.get("POSTGRES_PORT", "5432")
        user = os.environ.get("POSTGRES_USER", "booktrail")
        password = os.environ.get("POSTGRES_PASSWORD", "booktrail")
        database = os.environ.get("POSTGRES_DB", "booktrail")

        return f"postgresql://{user}:{password}@{host}:{port}/{database}"

    async def connect(self) -> None:
        """Initialize the connection pool."""
        if self._pool is not None:
            return

        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                max_inactive_connection_lifetime=self._max_inactive_connection_lifetime,
                command_timeout=self._command_timeout,
            )
            logger.info(
                "postgres_pool_connected",
                min_size=self._min_size,
                max_size=self._max_size,
            )
        except Exception as e:
            logger.error("postgres_pool_connection_failed", error=str(e))
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

    async def close(self) -> None:
        """Close the connection pool gracefully."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("postgres_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection from the pool.

        Auto-connects if not already connected. Constraint violations are
        re-raised untouched so stores can map them to ConflictError.
        """
        if self._pool is None:
            await self.connect()

        try:
            async with self._pool.acquire() as connection:
                yield connection
        except asyncpg.IntegrityConstraintViolationError:
            raise
        except asyncpg.PostgresError as e:
            logger.error("postgres_connection_error", error=str(e))
            raise ConnectionError(f"PostgreSQL error: {e}", cause=e) from e

    async def health_check(self) -> bool:
        """Check if the pool is connected and responsive."""
        if self._pool is None:
            return False

        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False

    @property
    def is_connected(self) -> bool:
        """Check if pool is initialized."""
        return self._pool is not None
