"""Enums for the booking audit domain."""

from enum import Enum


class AuditAction(str, Enum):
    """Kind of booking state change an audit record describes."""

    CREATED = "CREATED"
    ACCEPTED = "ACCEPTED"
    RESCHEDULE_REQUESTED = "RESCHEDULE_REQUESTED"
    RESCHEDULED = "RESCHEDULED"
    LOCATION_CHANGED = "LOCATION_CHANGED"
    ATTENDEE_ADDED = "ATTENDEE_ADDED"
    ATTENDEE_REMOVED = "ATTENDEE_REMOVED"
    REASSIGNMENT = "REASSIGNMENT"
    NO_SHOW_UPDATED = "NO_SHOW_UPDATED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"
    SEAT_BOOKED = "SEAT_BOOKED"
    SEAT_RESCHEDULED = "SEAT_RESCHEDULED"


class AuditRecordType(str, Enum):
    """Whether the action created the booking (or a seat) or changed it."""

    RECORD_CREATED = "RECORD_CREATED"
    RECORD_UPDATED = "RECORD_UPDATED"


class ActionSource(str, Enum):
    """Channel that produced the action."""

    WEBAPP = "WEBAPP"
    API_V1 = "API_V1"
    API_V2 = "API_V2"
    WEBHOOK = "WEBHOOK"
    SYSTEM = "SYSTEM"
    MAGIC_LINK = "MAGIC_LINK"


class ActorType(str, Enum):
    """Kind of identity an audit record is attributed to."""

    USER = "USER"
    ATTENDEE = "ATTENDEE"
    GUEST = "GUEST"
    SYSTEM = "SYSTEM"
    APP = "APP"
