"""PostgreSQL implementation of AuditStore.

Uses asyncpg for async database access.
"""

import json
from collections.abc import Iterable
from typing import Any
from uuid import UUID

import asyncpg

from booktrail.audit.models import (
    ActionSource,
    Actor,
    ActorKey,
    ActorType,
    AuditAction,
    AuditData,
    AuditRecord,
    AuditRecordType,
)
from booktrail.audit.store import AuditStore
from booktrail.db.errors import ConflictError, ConnectionError, NotFoundError
from booktrail.db.pool import PostgresPool
from booktrail.observability.logging import get_logger

logger = get_logger(__name__)

_ACTOR_COLUMNS = "id, type, user_uuid, attendee_id, email, name, created_at"
_RECORD_COLUMNS = """
    id, sequence, booking_uid, actor_id, action, type, timestamp,
    source, operation_id, data, context, created_at
"""
# Identifier whitelist for natural key lookups
_ACTOR_KEY_COLUMNS = frozenset({"user_uuid", "attendee_id", "email"})


class PostgresAuditStore(AuditStore):
    """PostgreSQL implementation of AuditStore.

    Uses asyncpg connection pool for efficient database access.
    Records are immutable once written; idempotency comes from the unique
    operation_id column.
    """

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
        """
        self._pool = pool

    # Actor operations
    async def create_actor(self, actor: Actor) -> Actor:
        """Insert a new actor."""
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO booking_audit_actors (
                        id, type, user_uuid, attendee_id, email, name,
                        created_at, updated_at
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $7)
                    """,
                    actor.id,
                    actor.type.value,
                    actor.user_uuid,
                    actor.attendee_id,
                    actor.email,
                    actor.name,
                    actor.created_at,
                )
                return actor
        except asyncpg.UniqueViolationError as e:
            key = actor.natural_key
            raise ConflictError(
                f"{key.type.value} actor with {key.column}={key.value!r} already exists",
                cause=e,
            ) from e
        except ConnectionError:
            raise
        except Exception as e:
            logger.error("postgres_create_actor_error", actor_type=actor.type.value, error=str(e))
            raise ConnectionError(f"Failed to create actor: {e}", cause=e) from e

    async def find_actor(self, key: ActorKey) -> Actor | None:
        """Find an actor by natural key."""
        if key.column not in _ACTOR_KEY_COLUMNS:
            raise ValueError(f"Not an actor key column: {key.column}")
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_ACTOR_COLUMNS} FROM booking_audit_actors "
                    f"WHERE type = $1 AND {key.column} = $2",
                    key.type.value,
                    key.value,
                )
                if row:
                    return self._row_to_actor(row)
                return None
        except ConnectionError:
            raise
        except Exception as e:
            logger.error("postgres_find_actor_error", column=key.column, error=str(e))
            raise ConnectionError(f"Failed to find actor: {e}", cause=e) from e

    async def update_actor_name(self, actor_id: UUID, name: str) -> None:
        """Refresh an actor's display name."""
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    """
                    UPDATE booking_audit_actors
                    SET name = $2, updated_at = NOW()
                    WHERE id = $1
                    """,
                    actor_id,
                    name,
                )
        except ConnectionError:
            raise
        except Exception as e:
            logger.error("postgres_update_actor_error", actor_id=str(actor_id), error=str(e))
            raise ConnectionError(f"Failed to update actor: {e}", cause=e) from e
        if result == "UPDATE 0":
            raise NotFoundError(f"Actor {actor_id} not found")

    async def get_actors_by_ids(self, actor_ids: Iterable[UUID]) -> dict[UUID, Actor]:
        """Load many actors in one query."""
        ids = list(set(actor_ids))
        if not ids:
            return {}
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {_ACTOR_COLUMNS} FROM booking_audit_actors WHERE id = ANY($1::uuid[])",
                    ids,
                )
                actors = [self._row_to_actor(row) for row in rows]
                return {actor.id: actor for actor in actors}
        except ConnectionError:
            raise
        except Exception as e:
            logger.error("postgres_get_actors_error", count=len(ids), error=str(e))
            raise ConnectionError(f"Failed to load actors: {e}", cause=e) from e

    # Record operations
    async def insert_record(self, record: AuditRecord) -> bool:
        """Insert a record unless its operation id is already stored."""
        try:
            async with self._pool.acquire() as conn:
                inserted_id = await conn.fetchval(
                    """
                    INSERT INTO booking_audits (
                        id, booking_uid, actor_id, action, type, timestamp,
                        source, operation_id, data, context, created_at
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
                    ON CONFLICT (operation_id) DO NOTHING
                    RETURNING id
                    """,
                    record.id,
                    record.booking_uid,
                    record.actor_id,
                    _enum_value(record.action),
                    record.type.value,
                    record.timestamp,
                    _enum_value(record.source),
                    record.operation_id,
                    json.dumps(record.data.model_dump(mode="json", by_alias=True)),
                    json.dumps(record.context) if record.context is not None else None,
                    record.created_at,
                )
                if inserted_id is not None:
                    logger.debug("audit_record_saved", record_id=str(record.id))
                return inserted_id is not None
        except ConnectionError:
            raise
        except Exception as e:
            logger.error(
                "postgres_insert_record_error",
                operation_id=record.operation_id,
                error=str(e),
            )
            raise ConnectionError(f"Failed to insert audit record: {e}", cause=e) from e

    async def get_record_by_operation_id(self, operation_id: str) -> AuditRecord | None:
        """Get a record by its idempotency key."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_RECORD_COLUMNS} FROM booking_audits WHERE operation_id = $1",
                    operation_id,
                )
                if row:
                    return self._row_to_record(row)
                return None
        except ConnectionError:
            raise
        except Exception as e:
            logger.error(
                "postgres_get_record_error", operation_id=operation_id, error=str(e)
            )
            raise ConnectionError(f"Failed to get audit record: {e}", cause=e) from e

    async def list_records_by_booking(self, booking_uid: str) -> list[AuditRecord]:
        """List a booking's records in timeline order."""
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_RECORD_COLUMNS}
                    FROM booking_audits
                    WHERE booking_uid = $1
                    ORDER BY timestamp ASC, sequence ASC
                    """,
                    booking_uid,
                )
                return [self._row_to_record(row) for row in rows]
        except ConnectionError:
            raise
        except Exception as e:
            logger.error(
                "postgres_list_records_error", booking_uid=booking_uid, error=str(e)
            )
            raise ConnectionError(f"Failed to list audit records: {e}", cause=e) from e

    async def find_rescheduled_from(self, booking_uid: str) -> AuditRecord | None:
        """Find the RESCHEDULED record pointing at this booking."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_RECORD_COLUMNS}
                    FROM booking_audits
                    WHERE action = $1
                      AND data->'fields'->'rescheduledToUid'->>'new' = $2
                    ORDER BY timestamp DESC, sequence DESC
                    LIMIT 1
                    """,
                    AuditAction.RESCHEDULED.value,
                    booking_uid,
                )
                if row:
                    return self._row_to_record(row)
                return None
        except ConnectionError:
            raise
        except Exception as e:
            logger.error(
                "postgres_find_rescheduled_from_error",
                booking_uid=booking_uid,
                error=str(e),
            )
            raise ConnectionError(f"Failed to find rescheduled-from record: {e}", cause=e) from e

    # Helper methods
    def _row_to_actor(self, row: Any) -> Actor:
        """Convert database row to Actor."""
        return Actor(
            id=row["id"],
            type=ActorType(row["type"]),
            user_uuid=row["user_uuid"],
            attendee_id=row["attendee_id"],
            email=row["email"],
            name=row["name"],
            created_at=row["created_at"],
        )

    def _row_to_record(self, row: Any) -> AuditRecord:
        """Convert database row to AuditRecord."""
        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        context = row["context"]
        if isinstance(context, str):
            context = json.loads(context)

        return AuditRecord(
            id=row["id"],
            sequence=row["sequence"],
            booking_uid=row["booking_uid"],
            actor_id=row["actor_id"],
            action=row["action"],
            type=AuditRecordType(row["type"]),
            timestamp=row["timestamp"],
            source=row["source"],
            operation_id=row["operation_id"],
            data=AuditData.model_validate(data),
            context=context,
            created_at=row["created_at"],
        )


def _enum_value(value: AuditAction | ActionSource | str) -> str:
    return value.value if isinstance(value, AuditAction | ActionSource) else value
