"""Handlers for booking lifecycle actions."""

from booktrail.audit.actions.base import (
    AuditActionHandler,
    action_key,
    status_change,
    status_key,
    text_change,
)
from booktrail.audit.enrichment import DataRequirements, EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    DateTimeValue,
    DisplayField,
    TextValue,
    TranslationValue,
)
from booktrail.audit.schemas.payloads import (
    AcceptedFields,
    CancelledFields,
    CreatedFields,
    LocationChangedFields,
    RejectedFields,
)


class CreatedHandler(AuditActionHandler[CreatedFields]):
    action = AuditAction.CREATED
    fields_model = CreatedFields

    def get_data_requirements(self, data: AuditData) -> DataRequirements:
        fields = self.parse(data)
        if fields.host_user_uuid:
            return DataRequirements(user_uuids={fields.host_user_uuid})
        return DataRequirements()

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = [
            DisplayField(label_key=action_key("start_time"), field_value=DateTimeValue(value=fields.start_time)),
            DisplayField(label_key=action_key("end_time"), field_value=DateTimeValue(value=fields.end_time)),
            DisplayField(
                label_key=action_key("status"),
                field_value=TranslationValue(key=status_key(fields.status)),
            ),
        ]
        if fields.host_user_uuid:
            display.append(
                DisplayField(
                    label_key=action_key("host"),
                    field_value=TextValue(value=store.user_name(fields.host_user_uuid)),
                )
            )
        if fields.seat_reference_uid:
            display.append(
                DisplayField(
                    label_key=action_key("seat_reference"),
                    field_value=TextValue(value=fields.seat_reference_uid),
                )
            )
        return display


class AcceptedHandler(AuditActionHandler[AcceptedFields]):
    action = AuditAction.ACCEPTED
    fields_model = AcceptedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        return [status_change(fields.status.old, fields.status.new)]


class LocationChangedHandler(AuditActionHandler[LocationChangedFields]):
    action = AuditAction.LOCATION_CHANGED
    fields_model = LocationChangedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        return [text_change("location", fields.location.old, fields.location.new)]


class CancelledHandler(AuditActionHandler[CancelledFields]):
    action = AuditAction.CANCELLED
    fields_model = CancelledFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = []
        if fields.cancellation_reason:
            display.append(
                DisplayField(
                    label_key=action_key("cancellation_reason"),
                    field_value=TextValue(value=fields.cancellation_reason),
                )
            )
        if fields.cancelled_by:
            display.append(
                DisplayField(
                    label_key=action_key("cancelled_by"),
                    field_value=TextValue(value=fields.cancelled_by),
                )
            )
        display.append(status_change(fields.status.old, fields.status.new))
        return display


class RejectedHandler(AuditActionHandler[RejectedFields]):
    action = AuditAction.REJECTED
    fields_model = RejectedFields

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = []
        if fields.rejection_reason:
            display.append(
                DisplayField(
                    label_key=action_key("rejection_reason"),
                    field_value=TextValue(value=fields.rejection_reason),
                )
            )
        display.append(status_change(fields.status.old, fields.status.new))
        return display
