"""In-memory implementation of AuditStore."""

from collections.abc import Iterable
from itertools import count
from uuid import UUID

from booktrail.audit.models import Actor, ActorKey, AuditAction, AuditRecord
from booktrail.audit.store import AuditStore
from booktrail.db.errors import ConflictError, NotFoundError


class InMemoryAuditStore(AuditStore):
    """In-memory implementation of AuditStore for testing and development.

    Uses simple dict storage with linear scan for queries.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._actors: dict[UUID, Actor] = {}
        self._records: dict[UUID, AuditRecord] = {}
        self._by_operation_id: dict[str, UUID] = {}
        self._sequence = count(1)

    # Actor operations
    async def create_actor(self, actor: Actor) -> Actor:
        """Insert a new actor."""
        key = actor.natural_key
        if self._find_by_key(key) is not None:
            raise ConflictError(
                f"{key.type.value} actor with {key.column}={key.value!r} already exists"
            )
        self._actors[actor.id] = actor
        return actor

    async def find_actor(self, key: ActorKey) -> Actor | None:
        """Find an actor by natural key."""
        return self._find_by_key(key)

    async def update_actor_name(self, actor_id: UUID, name: str) -> None:
        """Refresh an actor's display name."""
        actor = self._actors.get(actor_id)
        if actor is None:
            raise NotFoundError(f"Actor {actor_id} not found")
        self._actors[actor_id] = actor.model_copy(update={"name": name})

    async def get_actors_by_ids(self, actor_ids: Iterable[UUID]) -> dict[UUID, Actor]:
        """Load many actors at once."""
        return {
            actor_id: self._actors[actor_id]
            for actor_id in set(actor_ids)
            if actor_id in self._actors
        }

    def _find_by_key(self, key: ActorKey) -> Actor | None:
        for actor in self._actors.values():
            if actor.type == key.type and getattr(actor, key.column) == key.value:
                return actor
        return None

    # Record operations
    async def insert_record(self, record: AuditRecord) -> bool:
        """Insert a record unless its operation id is already stored."""
        if record.operation_id in self._by_operation_id:
            return False
        stored = record.model_copy(update={"sequence": next(self._sequence)})
        self._records[stored.id] = stored
        self._by_operation_id[stored.operation_id] = stored.id
        return True

    async def get_record_by_operation_id(self, operation_id: str) -> AuditRecord | None:
        """Get a record by its idempotency key."""
        record_id = self._by_operation_id.get(operation_id)
        if record_id is None:
            return None
        return self._records[record_id]

    async def list_records_by_booking(self, booking_uid: str) -> list[AuditRecord]:
        """List a booking's records in timeline order."""
        results = [
            record for record in self._records.values()
            if record.booking_uid == booking_uid
        ]
        results.sort(key=lambda x: x.sort_key)
        return results

    async def find_rescheduled_from(self, booking_uid: str) -> AuditRecord | None:
        """Find the RESCHEDULED record pointing at this booking."""
        matches = [
            record for record in self._records.values()
            if record.action == AuditAction.RESCHEDULED
            and _rescheduled_to_uid(record) == booking_uid
        ]
        if not matches:
            return None
        return max(matches, key=lambda x: x.sort_key)


def _rescheduled_to_uid(record: AuditRecord) -> str | None:
    change = record.data.fields.get("rescheduledToUid")
    if isinstance(change, dict):
        return change.get("new")
    return None
