"""Actor resolution: actor reference -> persisted actor id."""

from collections.abc import Mapping
from typing import Any, assert_never
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from booktrail.audit.errors import ValidationError
from booktrail.audit.models.actor import (
    APP_ACTOR_EMAIL_DOMAIN,
    SYSTEM_ACTOR_EMAIL,
    SYSTEM_ACTOR_NAME,
    Actor,
    ActorRef,
    AppActorRef,
    AttendeeActorRef,
    GuestActorRef,
    SystemActorRef,
    UserActorRef,
)
from booktrail.audit.models.enums import ActorType
from booktrail.audit.store import AuditStore
from booktrail.db.errors import ConflictError
from booktrail.observability.logging import get_logger

logger = get_logger(__name__)

_actor_ref_adapter: TypeAdapter[ActorRef] = TypeAdapter(ActorRef)


def parse_actor_ref(value: ActorRef | Mapping[str, Any]) -> ActorRef:
    """Validate a raw mapping into one of the actor reference variants."""
    if isinstance(
        value, UserActorRef | AttendeeActorRef | GuestActorRef | SystemActorRef | AppActorRef
    ):
        return value
    try:
        return _actor_ref_adapter.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid actor reference", errors=e.errors(include_url=False)
        ) from e


def actor_from_ref(ref: ActorRef) -> Actor:
    """Build the actor row a reference maps to, keyed by its natural key."""
    if isinstance(ref, UserActorRef):
        return Actor(type=ActorType.USER, user_uuid=ref.user_uuid)
    if isinstance(ref, AttendeeActorRef):
        return Actor(type=ActorType.ATTENDEE, attendee_id=ref.attendee_id)
    if isinstance(ref, GuestActorRef):
        return Actor(type=ActorType.GUEST, email=ref.email.lower(), name=ref.name or None)
    if isinstance(ref, SystemActorRef):
        return Actor(type=ActorType.SYSTEM, email=SYSTEM_ACTOR_EMAIL, name=SYSTEM_ACTOR_NAME)
    if isinstance(ref, AppActorRef):
        return Actor(
            type=ActorType.APP,
            email=f"{ref.slug}@{APP_ACTOR_EMAIL_DOMAIN}",
            name=ref.name,
        )
    assert_never(ref)


class ActorResolver:
    """Upserts actors by natural key.

    Safe under concurrent first references: the store's unique constraint
    makes the losing insert raise ConflictError, which turns into a lookup
    of the winning row.
    """

    def __init__(self, store: AuditStore) -> None:
        self._store = store

    async def resolve(self, actor_ref: ActorRef | Mapping[str, Any]) -> UUID:
        """Return the persisted actor id for a reference, creating it if needed.

        Raises:
            ValidationError: If the reference is malformed
        """
        ref = parse_actor_ref(actor_ref)
        candidate = actor_from_ref(ref)
        key = candidate.natural_key

        existing = await self._store.find_actor(key)
        if existing is None:
            try:
                created = await self._store.create_actor(candidate)
                logger.debug("actor_created", actor_id=str(created.id), actor_type=created.type.value)
                return created.id
            except ConflictError:
                existing = await self._store.find_actor(key)
                if existing is None:
                    raise
                logger.debug("actor_create_race_lost", actor_id=str(existing.id))

        if candidate.name and existing.name != candidate.name:
            await self._store.update_actor_name(existing.id, candidate.name)
            logger.debug("actor_name_refreshed", actor_id=str(existing.id))

        return existing.id
