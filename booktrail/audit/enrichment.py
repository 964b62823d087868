"""Data requirement contracts and the request-scoped enrichment store.

Handlers declare which external entities they will read for a record;
the viewer unions those declarations across the whole timeline, fetches
each entity kind once, and hands handlers a read-only store restricted to
what they declared.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from booktrail.audit.errors import UndeclaredDataAccessError
from booktrail.audit.models import CamelModel
from booktrail.observability.logging import get_logger
from booktrail.observability.metrics import ENRICHMENT_BATCH_FETCHES

logger = get_logger(__name__)

UNKNOWN_NAME = "Unknown"


class EntityKind(str, Enum):
    """Kinds of external entity a handler may depend on."""

    USER_UUIDS = "userUuids"
    ATTENDEE_IDS = "attendeeIds"


@dataclass
class DataRequirements:
    """Natural keys a handler will dereference, grouped by entity kind."""

    user_uuids: set[str] = field(default_factory=set)
    attendee_ids: set[int] = field(default_factory=set)

    def keys(self, kind: EntityKind) -> set:
        if kind == EntityKind.USER_UUIDS:
            return self.user_uuids
        return self.attendee_ids

    def add(self, kind: EntityKind, key: str | int) -> None:
        self.keys(kind).add(key)

    def update(self, other: "DataRequirements") -> None:
        self.user_uuids |= other.user_uuids
        self.attendee_ids |= other.attendee_ids

    def is_empty(self) -> bool:
        return not self.user_uuids and not self.attendee_ids

    @classmethod
    def union(cls, requirements: Iterable["DataRequirements"]) -> "DataRequirements":
        merged = cls()
        for item in requirements:
            merged.update(item)
        return merged


class UserProjection(CamelModel):
    """Fields of a platform user shown in timelines."""

    uuid: str
    name: str | None = None
    email: str
    avatar_url: str | None = None


class AttendeeProjection(CamelModel):
    """Fields of a booking attendee shown in timelines."""

    id: int
    name: str | None = None
    email: str


class EnrichmentSource(ABC):
    """Batch lookups of external entities.

    Implementations must answer each call with a single round trip; the
    viewer relies on this to keep query count independent of timeline length.
    """

    @abstractmethod
    async def fetch_users_by_uuids(self, uuids: Collection[str]) -> list[UserProjection]:
        """Fetch users by uuid. Unknown uuids are omitted."""
        pass

    @abstractmethod
    async def fetch_attendees_by_ids(self, ids: Collection[int]) -> list[AttendeeProjection]:
        """Fetch attendees by id. Unknown ids are omitted."""
        pass


class InMemoryEnrichmentSource(EnrichmentSource):
    """In-memory EnrichmentSource for testing and development.

    Records every batch call in ``calls`` so tests can assert on query count.
    """

    def __init__(
        self,
        users: Iterable[UserProjection] = (),
        attendees: Iterable[AttendeeProjection] = (),
    ) -> None:
        self._users = {user.uuid: user for user in users}
        self._attendees = {attendee.id: attendee for attendee in attendees}
        self.calls: list[tuple[EntityKind, frozenset]] = []

    async def fetch_users_by_uuids(self, uuids: Collection[str]) -> list[UserProjection]:
        self.calls.append((EntityKind.USER_UUIDS, frozenset(uuids)))
        return [self._users[uuid] for uuid in uuids if uuid in self._users]

    async def fetch_attendees_by_ids(self, ids: Collection[int]) -> list[AttendeeProjection]:
        self.calls.append((EntityKind.ATTENDEE_IDS, frozenset(ids)))
        return [self._attendees[i] for i in ids if i in self._attendees]


class EnrichmentStore:
    """Read-only, request-scoped view of prefetched entities.

    Lookups are checked against the declared requirements: reading a key
    that was not declared raises UndeclaredDataAccessError, while a declared
    key that the source did not return yields None.
    """

    def __init__(
        self,
        requirements: DataRequirements,
        users: Mapping[str, UserProjection] | None = None,
        attendees: Mapping[int, AttendeeProjection] | None = None,
        unknown_name: str = UNKNOWN_NAME,
    ) -> None:
        self._requirements = requirements
        self._users = dict(users or {})
        self._attendees = dict(attendees or {})
        self.unknown_name = unknown_name

    @classmethod
    async def load(
        cls,
        requirements: DataRequirements,
        source: EnrichmentSource,
        unknown_name: str = UNKNOWN_NAME,
    ) -> "EnrichmentStore":
        """Fetch every required entity with one batch call per non-empty kind."""
        users: dict[str, UserProjection] = {}
        attendees: dict[int, AttendeeProjection] = {}

        if requirements.user_uuids:
            fetched = await source.fetch_users_by_uuids(sorted(requirements.user_uuids))
            users = {user.uuid: user for user in fetched}
            ENRICHMENT_BATCH_FETCHES.labels(kind=EntityKind.USER_UUIDS.value).inc()

        if requirements.attendee_ids:
            fetched_attendees = await source.fetch_attendees_by_ids(
                sorted(requirements.attendee_ids)
            )
            attendees = {attendee.id: attendee for attendee in fetched_attendees}
            ENRICHMENT_BATCH_FETCHES.labels(kind=EntityKind.ATTENDEE_IDS.value).inc()

        logger.debug(
            "enrichment_loaded",
            requested_users=len(requirements.user_uuids),
            found_users=len(users),
            requested_attendees=len(requirements.attendee_ids),
            found_attendees=len(attendees),
        )
        return cls(requirements, users, attendees, unknown_name=unknown_name)

    def scoped(self, requirements: DataRequirements) -> "EnrichmentStore":
        """View over the same data that only allows the given keys."""
        return EnrichmentStore(
            requirements, self._users, self._attendees, unknown_name=self.unknown_name
        )

    def get_user_by_uuid(self, uuid: str) -> UserProjection | None:
        if uuid not in self._requirements.user_uuids:
            raise UndeclaredDataAccessError(EntityKind.USER_UUIDS.value, uuid)
        return self._users.get(uuid)

    def get_attendee_by_id(self, attendee_id: int) -> AttendeeProjection | None:
        if attendee_id not in self._requirements.attendee_ids:
            raise UndeclaredDataAccessError(EntityKind.ATTENDEE_IDS.value, attendee_id)
        return self._attendees.get(attendee_id)

    def user_name(self, uuid: str) -> str:
        """Display name of a user, or the unknown-entity fallback."""
        user = self.get_user_by_uuid(uuid)
        if user is None:
            return self.unknown_name
        return user.name or user.email
