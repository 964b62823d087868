"""Base class for per-action display handlers."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from booktrail.audit.enrichment import DataRequirements, EnrichmentStore
from booktrail.audit.models import (
    AuditAction,
    AuditData,
    CamelModel,
    ChangeValue,
    DisplayField,
    DisplayTitle,
    TitleComponent,
)

FieldsT = TypeVar("FieldsT", bound=CamelModel)

ACTION_KEY_PREFIX = "booking_audit_action"


def action_key(suffix: str) -> str:
    return f"{ACTION_KEY_PREFIX}.{suffix}"


def status_key(status: str | None) -> str | None:
    """Translation key of a booking status code."""
    if status is None:
        return None
    return f"booking_status.{status.lower()}"


def booking_history_link(booking_uid: str, text_key: str) -> TitleComponent:
    """Link to a booking's detail view, opened on its history segment."""
    return TitleComponent(
        text_key=text_key,
        href=f"/bookings?uid={booking_uid}&activeSegment=history",
    )


class AuditActionHandler(ABC, Generic[FieldsT]):
    """Renders records of one action.

    Every method is pure. get_data_requirements must declare exactly the
    keys that get_display_fields and get_display_title read from the store;
    the store rejects anything undeclared.
    """

    action: ClassVar[AuditAction]
    fields_model: ClassVar[type[CamelModel]]

    def parse(self, data: AuditData) -> FieldsT:
        """Validate migrated fields into the action's payload model."""
        return self.fields_model.model_validate(data.fields)  # type: ignore[return-value]

    def get_data_requirements(self, data: AuditData) -> DataRequirements:  # noqa: ARG002
        return DataRequirements()

    @abstractmethod
    def get_display_fields(
        self, data: AuditData, store: EnrichmentStore
    ) -> list[DisplayField]:
        """Labelled values shown under the entry title."""
        pass

    def get_display_title(
        self, data: AuditData, store: EnrichmentStore  # noqa: ARG002
    ) -> DisplayTitle:
        return DisplayTitle(key=action_key(self.action.value.lower()))

    def get_display_json(self, data: AuditData) -> dict[str, Any]:
        """Raw payload for detail views."""
        return dict(data.fields)


def text_change(label: str, old: str | int | None, new: str | int | None) -> DisplayField:
    return DisplayField(label_key=action_key(label), field_value=ChangeValue(old=old, new=new))


def datetime_change(label: str, old: int | None, new: int) -> DisplayField:
    return DisplayField(
        label_key=action_key(label),
        field_value=ChangeValue(format="dateTime", old=old, new=new),
    )


def status_change(old: str | None, new: str) -> DisplayField:
    return DisplayField(
        label_key=action_key("status"),
        field_value=ChangeValue(format="translation", old=status_key(old), new=status_key(new)),
    )
