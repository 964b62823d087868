"""Handlers for reschedule requests and reschedules of bookings and seats."""

from typing import Any

from booktrail.audit.actions.base import (
    AuditActionHandler,
    action_key,
    booking_history_link,
    datetime_change,
)
from booktrail.audit.enrichment import EnrichmentStore
from booktrail.audit.models import AuditAction, AuditData, DisplayField, DisplayTitle, TextValue
from booktrail.audit.schemas.payloads import (
    RescheduledFields,
    RescheduleRequestedFields,
    SeatRescheduledFields,
)


class RescheduleRequestedHandler(AuditActionHandler[RescheduleRequestedFields]):
    action = AuditAction.RESCHEDULE_REQUESTED
    fields_model = RescheduleRequestedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = []
        if fields.reschedule_reason:
            display.append(
                DisplayField(
                    label_key=action_key("reschedule_reason"),
                    field_value=TextValue(value=fields.reschedule_reason),
                )
            )
        if fields.rescheduled_requested_by:
            display.append(
                DisplayField(
                    label_key=action_key("rescheduled_requested_by"),
                    field_value=TextValue(value=fields.rescheduled_requested_by),
                )
            )
        return display


class RescheduledHandler(AuditActionHandler[RescheduledFields]):
    """Reschedule of a whole booking.

    The record is stored on the original booking. The replacement booking's
    timeline shows the same record as a "rescheduled from" entry.
    """

    action = AuditAction.RESCHEDULED
    fields_model = RescheduledFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = [
            datetime_change("start_time", fields.start_time.old, fields.start_time.new),
            datetime_change("end_time", fields.end_time.old, fields.end_time.new),
        ]
        if fields.rescheduled_by:
            display.append(
                DisplayField(
                    label_key=action_key("rescheduled_by"),
                    field_value=TextValue(value=fields.rescheduled_by),
                )
            )
        return display

    def get_display_title(self, data: AuditData, store: EnrichmentStore) -> DisplayTitle:
        fields = self.parse(data)
        params = {"startTime": fields.start_time.new}
        new_uid = fields.rescheduled_to_uid.new
        if not new_uid:
            return DisplayTitle(key=action_key("rescheduled"), params=params)
        return DisplayTitle(
            key=action_key("rescheduled"),
            params=params,
            components=[booking_history_link(new_uid, action_key("view_new_booking"))],
        )

    def get_display_title_for_rescheduled_from(
        self, data: AuditData, from_booking_uid: str
    ) -> DisplayTitle:
        """Title of the entry prepended to the replacement booking's timeline."""
        fields = self.parse(data)
        return DisplayTitle(
            key=action_key("rescheduled_from"),
            params={"startTime": fields.start_time.old},
            components=[booking_history_link(from_booking_uid, action_key("view_original_booking"))],
        )


class SeatRescheduledHandler(AuditActionHandler[SeatRescheduledFields]):
    action = AuditAction.SEAT_RESCHEDULED
    fields_model = SeatRescheduledFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        return [
            DisplayField(
                label_key=action_key("attendee"),
                field_value=TextValue(value=fields.attendee_email),
            ),
            datetime_change("start_time", fields.start_time.old, fields.start_time.new),
            datetime_change("end_time", fields.end_time.old, fields.end_time.new),
        ]

    def get_display_title(self, data: AuditData, store: EnrichmentStore) -> DisplayTitle:
        fields = self.parse(data)
        params = {"email": fields.attendee_email}
        new_uid = fields.rescheduled_to_booking_uid.new
        if not new_uid:
            return DisplayTitle(key=action_key("seat_rescheduled"), params=params)
        return DisplayTitle(
            key=action_key("seat_rescheduled"),
            params=params,
            components=[booking_history_link(new_uid, action_key("view_new_booking"))],
        )

    def get_display_json(self, data: AuditData) -> dict[str, Any]:
        fields = self.parse(data)
        return {
            "seatReferenceUid": fields.seat_reference_uid,
            "attendeeEmail": fields.attendee_email,
            "rescheduledToBookingUid": fields.rescheduled_to_booking_uid.new,
        }
