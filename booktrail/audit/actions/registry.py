"""Action -> handler dispatch table."""

from collections.abc import Mapping

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
from booktrail.audit.actions.reschedule import (
    RescheduledHandler,
    RescheduleRequestedHandler,
    SeatRescheduledHandler,
)
from booktrail.audit.models import AuditAction


def default_handlers() -> dict[AuditAction, AuditActionHandler]:
    handlers: list[AuditActionHandler] = [
        CreatedHandler(),
        AcceptedHandler(),
        RescheduleRequestedHandler(),
        RescheduledHandler(),
        LocationChangedHandler(),
        AttendeeAddedHandler(),
        AttendeeRemovedHandler(),
        ReassignmentHandler(),
        NoShowUpdatedHandler(),
        CancelledHandler(),
        RejectedHandler(),
        SeatBookedHandler(),
        SeatRescheduledHandler(),
    ]
    return {handler.action: handler for handler in handlers}


class HandlerRegistry:
    """Explicit handler table, complete over AuditAction.

    Actions outside the enum (written by newer producers) resolve to the
    generic fallback.
    """

    def __init__(
        self,
        handlers: Mapping[AuditAction, AuditActionHandler] | None = None,
        fallback: GenericAuditActionHandler | None = None,
    ) -> None:
        table = dict(handlers) if handlers is not None else default_handlers()

        missing = [action.value for action in AuditAction if action not in table]
        if missing:
            raise ValueError(f"No display handler for actions: {', '.join(missing)}")
        mismatched = [action.value for action, handler in table.items() if handler.action != action]
        if mismatched:
            raise ValueError(f"Handlers registered under the wrong action: {', '.join(mismatched)}")

        self._handlers = table
        self.fallback = fallback or GenericAuditActionHandler()

    def get(self, action: AuditAction | str) -> AuditActionHandler | None:
        """Dedicated handler for an action, or None for unknown actions."""
        if isinstance(action, AuditAction):
            return self._handlers[action]
        try:
            return self._handlers[AuditAction(action)]
        except ValueError:
            return None

    @property
    def rescheduled(self) -> RescheduledHandler:
        handler = self._handlers[AuditAction.RESCHEDULED]
        if not isinstance(handler, RescheduledHandler):
            raise TypeError("RESCHEDULED handler must be a RescheduledHandler")
        return handler
