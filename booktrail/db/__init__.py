"""Database infrastructure: connection pool, errors and migrations."""

from booktrail.db.errors import (
    ConflictError,
    ConnectionError,
    NotFoundError,
    StoreError,
)
from booktrail.db.pool import PostgresPool

__all__ = [
    "ConflictError",
    "ConnectionError",
    "NotFoundError",
    "PostgresPool",
    "StoreError",
]
