"""Fallback handler for unknown actions and payloads that fail to render."""

import json
from typing import Any

from booktrail.audit.actions.base import action_key
from booktrail.audit.enrichment import DataRequirements, EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    ChangeValue,
    DisplayField,
    DisplayTitle,
    FieldValue,
    TextListValue,
    TextValue,
)


def _scalar(value: Any) -> str | int | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return json.dumps(value, sort_keys=True, default=str)


def _field_value(value: Any) -> FieldValue:
    if isinstance(value, dict) and "new" in value:
        return ChangeValue(old=_scalar(value.get("old")), new=_scalar(value["new"]))
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return TextListValue(values=value)
    if isinstance(value, str):
        return TextValue(value=value)
    return TextValue(value=json.dumps(value, sort_keys=True, default=str))


class GenericAuditActionHandler:
    """Renders raw field diffs without enrichment.

    Labels are the stored field names. Never raises for any payload, so it
    is safe to use when the dedicated handler failed.
    """

    def get_data_requirements(self, data: AuditData) -> DataRequirements:  # noqa: ARG002
        return DataRequirements()

    def get_display_fields(
        self, data: AuditData, store: EnrichmentStore | None = None  # noqa: ARG002
    ) -> list[DisplayField]:
        return [
            DisplayField(label_key=name, field_value=_field_value(value))
            for name, value in data.fields.items()
        ]

    def get_display_title(self, action: AuditAction | str) -> DisplayTitle:
        name = action.value if isinstance(action, AuditAction) else str(action)
        return DisplayTitle(key=action_key(name.lower()))

    def get_display_json(self, data: AuditData) -> dict[str, Any]:
        return dict(data.fields)
