"""AuditStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from booktrail.audit.models import Actor, ActorKey, AuditRecord


class AuditStore(ABC):
    """Abstract interface for booking audit storage.

    Holds the actor table and the append-only record table. Records are
    never updated or deleted; actors only have their display name refreshed.
    """

    # Actor operations
    @abstractmethod
    async def create_actor(self, actor: Actor) -> Actor:
        """Insert a new actor.

        Raises:
            ConflictError: If an actor with the same natural key exists
        """
        pass

    @abstractmethod
    async def find_actor(self, key: ActorKey) -> Actor | None:
        """Find an actor by natural key."""
        pass

    @abstractmethod
    async def update_actor_name(self, actor_id: UUID, name: str) -> None:
        """Refresh an actor's display name."""
        pass

    @abstractmethod
    async def get_actors_by_ids(self, actor_ids: Iterable[UUID]) -> dict[UUID, Actor]:
        """Load many actors in one round trip. Unknown ids are absent."""
        pass

    # Record operations
    @abstractmethod
    async def insert_record(self, record: AuditRecord) -> bool:
        """Insert a record unless its operation id is already stored.

        Returns:
            True if the record was inserted, False for a duplicate operation
        """
        pass

    @abstractmethod
    async def get_record_by_operation_id(self, operation_id: str) -> AuditRecord | None:
        """Get a record by its idempotency key."""
        pass

    @abstractmethod
    async def list_records_by_booking(self, booking_uid: str) -> list[AuditRecord]:
        """List a booking's records ordered by (timestamp, sequence)."""
        pass

    @abstractmethod
    async def find_rescheduled_from(self, booking_uid: str) -> AuditRecord | None:
        """Find the RESCHEDULED record of the booking this one replaced."""
        pass
