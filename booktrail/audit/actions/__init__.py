"""Per-action display handlers and their dispatch table."""

from booktrail.audit.actions.attendees import (
    AttendeeAddedHandler,
    AttendeeRemovedHandler,
    SeatBookedHandler,
)
from booktrail.audit.actions.base import AuditActionHandler
from booktrail.audit.actions.booking import (
    AcceptedHandler,
    CancelledHandler,
    CreatedHandler,
    LocationChangedHandler,
    RejectedHandler,
)
from booktrail.audit.actions.generic import GenericAuditActionHandler
from booktrail.audit.actions.no_show import NoShowUpdatedHandler
from booktrail.audit.actions.reassignment import ReassignmentHandler
from booktrail.audit.actions.registry import HandlerRegistry, default_handlers
from booktrail.audit.actions.reschedule import (
    RescheduledHandler,
    RescheduleRequestedHandler,
    SeatRescheduledHandler,
)

__all__ = [
    "AcceptedHandler",
    "AttendeeAddedHandler",
    "AttendeeRemovedHandler",
    "AuditActionHandler",
    "CancelledHandler",
    "CreatedHandler",
    "GenericAuditActionHandler",
    "HandlerRegistry",
    "LocationChangedHandler",
    "NoShowUpdatedHandler",
    "ReassignmentHandler",
    "RejectedHandler",
    "RescheduleRequestedHandler",
    "RescheduledHandler",
    "SeatBookedHandler",
    "SeatRescheduledHandler",
    "default_handlers",
]
