"""Factory helpers for building actor references at emission sites."""

from booktrail.audit.models.actor import (
    AppActorRef,
    AttendeeActorRef,
    GuestActorRef,
    SystemActorRef,
    UserActorRef,
)


def make_user_actor(user_uuid: str) -> UserActorRef:
    return UserActorRef(user_uuid=user_uuid)


def make_attendee_actor(attendee_id: int) -> AttendeeActorRef:
    return AttendeeActorRef(attendee_id=attendee_id)


def make_guest_actor(email: str, name: str | None = None) -> GuestActorRef:
    return GuestActorRef(email=email, name=name)


def make_system_actor() -> SystemActorRef:
    """Actor for scheduled jobs and other platform automation."""
    return SystemActorRef()


def make_app_actor(slug: str, name: str) -> AppActorRef:
    """Actor for an installed app acting on a booking (e.g. a payment app)."""
    return AppActorRef(slug=slug, name=name)
