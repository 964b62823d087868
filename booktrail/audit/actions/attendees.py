"""Handlers for attendee and seat changes."""

from booktrail.audit.actions.base import AuditActionHandler, action_key
from booktrail.audit.enrichment import EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    DateTimeValue,
    DisplayField,
    DisplayTitle,
    TextListValue,
    TextValue,
)
from booktrail.audit.schemas.payloads import (
    AttendeeAddedFields,
    AttendeeRemovedFields,
    SeatBookedFields,
)


class AttendeeAddedHandler(AuditActionHandler[AttendeeAddedFields]):
    action = AuditAction.ATTENDEE_ADDED
    fields_model = AttendeeAddedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        return [
            DisplayField(
                label_key=action_key("added_attendees"),
                field_value=TextListValue(values=fields.added),
            )
        ]

    def get_display_title(self, data: AuditData, store: EnrichmentStore) -> DisplayTitle:
        fields = self.parse(data)
        return DisplayTitle(key=action_key("attendee_added"), params={"count": len(fields.added)})


class AttendeeRemovedHandler(AuditActionHandler[AttendeeRemovedFields]):
    action = AuditAction.ATTENDEE_REMOVED
    fields_model = AttendeeRemovedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        remaining = set(fields.attendees.new)
        removed = [email for email in fields.attendees.old or [] if email not in remaining]
        display = [
            DisplayField(
                label_key=action_key("removed_attendees"),
                field_value=TextListValue(values=removed),
            )
        ]
        if fields.attendees.new:
            display.append(
                DisplayField(
                    label_key=action_key("remaining_attendees"),
                    field_value=TextListValue(values=fields.attendees.new),
                )
            )
        return display


class SeatBookedHandler(AuditActionHandler[SeatBookedFields]):
    action = AuditAction.SEAT_BOOKED
    fields_model = SeatBookedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = [
            DisplayField(
                label_key=action_key("attendee"),
                field_value=TextValue(value=fields.attendee_email),
            )
        ]
        if fields.attendee_name:
            display.append(
                DisplayField(
                    label_key=action_key("attendee_name"),
                    field_value=TextValue(value=fields.attendee_name),
                )
            )
        display.extend(
            [
                DisplayField(label_key=action_key("start_time"), field_value=DateTimeValue(value=fields.start_time)),
                DisplayField(label_key=action_key("end_time"), field_value=DateTimeValue(value=fields.end_time)),
            ]
        )
        return display

    def get_display_title(self, data: AuditData, store: EnrichmentStore) -> DisplayTitle:
        fields = self.parse(data)
        return DisplayTitle(key=action_key("seat_booked"), params={"email": fields.attendee_email})
