"""Handler for host and attendee no-show updates."""

from typing import Any

from booktrail.audit.actions.base import AuditActionHandler, action_key
from booktrail.audit.enrichment import DataRequirements, EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    DisplayField,
    TranslationsWithParamsValue,
    TranslationWithParams,
)
from booktrail.audit.schemas.payloads import NoShowUpdatedFields


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


class NoShowUpdatedHandler(AuditActionHandler[NoShowUpdatedFields]):
    """One operation may mark the host, any number of attendees, or both.

    Attendees are listed first, then the host. Only the host is enriched;
    attendees are shown by the email stored in the payload.
    """

    action = AuditAction.NO_SHOW_UPDATED
    fields_model = NoShowUpdatedFields

    def get_data_requirements(self, data: AuditData) -> DataRequirements:
        fields = self.parse(data)
        if fields.host is None:
            return DataRequirements()
        return DataRequirements(user_uuids={fields.host.user_uuid})

    def get_display_fields(self, data: AuditData, store: EnrichmentStore) -> list[DisplayField]:
        fields = self.parse(data)
        display = []

        if fields.attendees_no_show:
            display.append(
                DisplayField(
                    label_key=action_key("attendees"),
                    field_value=TranslationsWithParamsValue(
                        values_with_params=[
                            TranslationWithParams(
                                key=action_key(
                                    f"attendee_no_show_status_{_yes_no(entry.no_show.new)}"
                                ),
                                params={"email": entry.attendee_email},
                            )
                            for entry in fields.attendees_no_show
                        ]
                    ),
                )
            )

        if fields.host is not None:
            display.append(
                DisplayField(
                    label_key=action_key("host"),
                    field_value=TranslationsWithParamsValue(
                        values_with_params=[
                            TranslationWithParams(
                                key=action_key(
                                    f"host_no_show_status_{_yes_no(fields.host.no_show.new)}"
                                ),
                                params={"name": store.user_name(fields.host.user_uuid)},
                            )
                        ]
                    ),
                )
            )

        return display

    def get_display_json(self, data: AuditData) -> dict[str, Any]:
        fields = self.parse(data)
        result: dict[str, Any] = {}
        if fields.host is not None:
            result["hostUserUuid"] = fields.host.user_uuid
            result["hostNoShow"] = fields.host.no_show.new
            result["previousHostNoShow"] = fields.host.no_show.old
        if fields.attendees_no_show:
            result["attendeesNoShow"] = [
                entry.model_dump(mode="json", by_alias=True)
                for entry in fields.attendees_no_show
            ]
        return result
