"""Versioned payload schemas per audit action.

Every stored payload is an envelope {version, fields}. Writes always use
the current version; reads upgrade older versions step by step, so stored
history is never rewritten.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from booktrail.audit.errors import UnsupportedVersionError, ValidationError
from booktrail.audit.models import AuditAction, AuditData, AuditRecordType, CamelModel
from booktrail.audit.schemas import payloads
from booktrail.audit.schemas.migrations import migrate_no_show_v1_to_v2
from booktrail.observability.logging import get_logger

logger = get_logger(__name__)

MigrationFn = Callable[[dict[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ActionSchema:
    """Payload schema of one action.

    migrations maps a version to the function upgrading it to version + 1.
    """

    action: AuditAction
    record_type: AuditRecordType
    current_version: int
    fields_model: type[CamelModel]
    migrations: Mapping[int, MigrationFn] = field(default_factory=dict)


def _to_action(action: AuditAction | str) -> AuditAction | None:
    if isinstance(action, AuditAction):
        return action
    try:
        return AuditAction(action)
    except ValueError:
        return None


class ActionSchemaRegistry:
    """Lookup of payload schemas by action."""

    def __init__(self, schemas: Iterable[ActionSchema] = ()) -> None:
        self._schemas: dict[AuditAction, ActionSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: ActionSchema) -> None:
        missing = [v for v in range(1, schema.current_version) if v not in schema.migrations]
        if missing:
            raise ValueError(
                f"{schema.action.value} schema lacks migrations from versions {missing}"
            )
        self._schemas[schema.action] = schema

    def get(self, action: AuditAction | str) -> ActionSchema | None:
        key = _to_action(action)
        if key is None:
            return None
        return self._schemas.get(key)

    def require(self, action: AuditAction | str) -> ActionSchema:
        schema = self.get(action)
        if schema is None:
            raise ValidationError(f"No payload schema registered for action {action}")
        return schema

    def record_type_for(self, action: AuditAction | str) -> AuditRecordType:
        return self.require(action).record_type

    def wrap(self, action: AuditAction | str, fields: Mapping[str, Any]) -> AuditData:
        """Validate producer fields and wrap them at the current version.

        Only keys the producer actually sent are stored, so explicit nulls
        survive and absent optionals stay absent.

        Raises:
            ValidationError: If no schema is registered or fields are invalid
        """
        schema = self.require(action)
        try:
            model = schema.fields_model.model_validate(dict(fields))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {schema.action.value} payload",
                errors=e.errors(include_url=False),
            ) from e
        return AuditData(
            version=schema.current_version,
            fields=model.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )

    def migrate(self, action: AuditAction | str, data: AuditData) -> AuditData:
        """Upgrade a stored envelope to the current version.

        Unregistered actions are returned unchanged.

        Raises:
            UnsupportedVersionError: If the version is out of range or a step is missing
        """
        schema = self.get(action)
        if schema is None:
            return data

        current = schema.current_version
        if data.version < 1 or data.version > current:
            raise UnsupportedVersionError(schema.action.value, data.version, current)
        if data.version == current:
            return data

        version = data.version
        fields = dict(data.fields)
        while version < current:
            step = schema.migrations.get(version)
            if step is None:
                raise UnsupportedVersionError(schema.action.value, data.version, current)
            fields = step(fields)
            version += 1

        logger.debug(
            "audit_payload_migrated",
            action=schema.action.value,
            from_version=data.version,
            to_version=current,
        )
        return AuditData(version=version, fields=fields)

    @property
    def actions(self) -> frozenset[AuditAction]:
        return frozenset(self._schemas)


def _v1(action: AuditAction, fields_model: type[CamelModel]) -> ActionSchema:
    record_type = (
        AuditRecordType.RECORD_CREATED
        if action in (AuditAction.CREATED, AuditAction.SEAT_BOOKED)
        else AuditRecordType.RECORD_UPDATED
    )
    return ActionSchema(
        action=action,
        record_type=record_type,
        current_version=1,
        fields_model=fields_model,
    )


def build_default_registry() -> ActionSchemaRegistry:
    """Registry with the schema of every known action."""
    return ActionSchemaRegistry(
        [
            _v1(AuditAction.CREATED, payloads.CreatedFields),
            _v1(AuditAction.ACCEPTED, payloads.AcceptedFields),
            _v1(AuditAction.RESCHEDULE_REQUESTED, payloads.RescheduleRequestedFields),
            _v1(AuditAction.RESCHEDULED, payloads.RescheduledFields),
            _v1(AuditAction.LOCATION_CHANGED, payloads.LocationChangedFields),
            _v1(AuditAction.ATTENDEE_ADDED, payloads.AttendeeAddedFields),
            _v1(AuditAction.ATTENDEE_REMOVED, payloads.AttendeeRemovedFields),
            _v1(AuditAction.REASSIGNMENT, payloads.ReassignmentFields),
            ActionSchema(
                action=AuditAction.NO_SHOW_UPDATED,
                record_type=AuditRecordType.RECORD_UPDATED,
                current_version=2,
                fields_model=payloads.NoShowUpdatedFields,
                migrations={1: migrate_no_show_v1_to_v2},
            ),
            _v1(AuditAction.CANCELLED, payloads.CancelledFields),
            _v1(AuditAction.REJECTED, payloads.RejectedFields),
            _v1(AuditAction.SEAT_BOOKED, payloads.SeatBookedFields),
            _v1(AuditAction.SEAT_RESCHEDULED, payloads.SeatRescheduledFields),
        ]
    )
