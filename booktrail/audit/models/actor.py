"""Actor references and persisted actor identities."""

from datetime import datetime
from typing import Annotated, Literal, NamedTuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from booktrail.audit.models.base import CamelModel, utc_now
from booktrail.audit.models.enums import ActorType

SYSTEM_ACTOR_EMAIL = "system@system.internal"
SYSTEM_ACTOR_NAME = "System"
APP_ACTOR_EMAIL_DOMAIN = "app.internal"


class UserActorRef(CamelModel):
    """A signed-in user of the scheduling application."""

    type: Literal["USER"] = "USER"
    user_uuid: str = Field(..., min_length=1, description="User's stable uuid")


class AttendeeActorRef(CamelModel):
    """An attendee of the booking acting through a booking link."""

    type: Literal["ATTENDEE"] = "ATTENDEE"
    attendee_id: int = Field(..., gt=0, description="Attendee row id")


class GuestActorRef(CamelModel):
    """Someone without an account, identified only by email."""

    type: Literal["GUEST"] = "GUEST"
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(default=None, description="Display name, refreshable")


class SystemActorRef(CamelModel):
    """Automated jobs inside the platform."""

    type: Literal["SYSTEM"] = "SYSTEM"


class AppActorRef(CamelModel):
    """An installed third-party app (payments, CRM, ...)."""

    type: Literal["APP"] = "APP"
    slug: str = Field(..., min_length=1, pattern=r"^[a-z0-9][a-z0-9_-]*$")
    name: str = Field(..., min_length=1)


ActorRef = Annotated[
    UserActorRef | AttendeeActorRef | GuestActorRef | SystemActorRef | AppActorRef,
    Field(discriminator="type"),
]


class ActorKey(NamedTuple):
    """Natural key of a persisted actor.

    Keys are scoped to the actor variant: a guest email never matches an
    APP or SYSTEM actor stored under the same address.
    """

    type: ActorType
    column: Literal["user_uuid", "attendee_id", "email"]
    value: str | int


class Actor(BaseModel):
    """Persisted actor identity.

    Exactly one natural key column is meaningful per type: user_uuid for
    USER, attendee_id for ATTENDEE and email for GUEST, SYSTEM and APP.
    Uniqueness holds per (type, column).
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Surrogate identifier")
    type: ActorType = Field(..., description="Actor variant")
    user_uuid: str | None = Field(default=None)
    attendee_id: int | None = Field(default=None)
    email: str | None = Field(default=None)
    name: str | None = Field(default=None, description="Non-identifying display name")
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def natural_key(self) -> ActorKey:
        """Unique key used for upsert-by-natural-key."""
        if self.type == ActorType.USER:
            return ActorKey(self.type, "user_uuid", self.user_uuid or "")
        if self.type == ActorType.ATTENDEE:
            return ActorKey(self.type, "attendee_id", self.attendee_id or 0)
        return ActorKey(self.type, "email", self.email or "")
