"""AuditStore implementations."""

from booktrail.audit.stores.inmemory import InMemoryAuditStore
from booktrail.audit.stores.postgres import PostgresAuditStore

__all__ = ["InMemoryAuditStore", "PostgresAuditStore"]
