"""Handler for organizer reassignment."""

from booktrail.audit.actions.base import AuditActionHandler, action_key
from booktrail.audit.enrichment import DataRequirements, EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    ChangeValue,
    DisplayField,
    TextValue,
    TranslationValue,
)
from booktrail.audit.schemas.payloads import ReassignmentFields

_REASSIGNMENT_TYPE_KEYS = {
    "manual": "reassignment_type_manual",
    "roundRobin": "reassignment_type_round_robin",
}


class ReassignmentHandler(AuditActionHandler[ReassignmentFields]):
    """Shows previous and new organizer by name, not uuid."""

    action = AuditAction.REASSIGNMENT
    fields_model = ReassignmentFields

    def get_data_requirements(self, data: AuditData) -> DataRequirements:
        fields = self.parse(data)
        uuids = {fields.organizer_uuid.new}
        if fields.organizer_uuid.old:
            uuids.add(fields.organizer_uuid.old)
        return DataRequirements(user_uuids=uuids)

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        old_uuid = fields.organizer_uuid.old
        display = [
            DisplayField(
                label_key=action_key("organizer"),
                field_value=ChangeValue(
                    old=store.user_name(old_uuid) if old_uuid else None,
                    new=store.user_name(fields.organizer_uuid.new),
                ),
            )
        ]
        if fields.reassignment_reason:
            display.append(
                DisplayField(
                    label_key=action_key("reassignment_reason"),
                    field_value=TextValue(value=fields.reassignment_reason),
                )
            )
        if fields.reassignment_type:
            display.append(
                DisplayField(
                    label_key=action_key("reassignment_type"),
                    field_value=TranslationValue(
                        key=action_key(_REASSIGNMENT_TYPE_KEYS[fields.reassignment_type])
                    ),
                )
            )
        return display
