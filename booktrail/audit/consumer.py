"""Write path: turns booking audit tasks into stored records."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from booktrail.audit.errors import ValidationError
from booktrail.audit.models import AuditRecord, BookingAuditTask, from_epoch_millis
from booktrail.audit.resolver import ActorResolver
from booktrail.audit.schemas import ActionSchemaRegistry
from booktrail.audit.store import AuditStore
from booktrail.db.errors import StoreError
from booktrail.observability.logging import audit_log_context, get_logger
from booktrail.observability.metrics import (
    AUDIT_DUPLICATE_OPERATIONS,
    AUDIT_RECORDS_WRITTEN,
    AUDIT_WRITE_FAILURES,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Outcome of one delivery.

    inserted is False when the operation id was already stored; record_id
    then points at the record written by the first delivery.
    """

    inserted: bool
    operation_id: str
    record_id: UUID | None
    actor_id: UUID


def parse_task(event: BookingAuditTask | Mapping[str, Any]) -> BookingAuditTask:
    """Validate a camelCase task mapping into a BookingAuditTask."""
    if isinstance(event, BookingAuditTask):
        return event
    try:
        return BookingAuditTask.model_validate(event)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid booking audit task", errors=e.errors(include_url=False)
        ) from e


class BookingAuditTaskConsumer:
    """Consumes booking audit tasks delivered at least once.

    The payload is validated and the actor resolved before anything is
    written; the record itself is one conditional insert keyed by
    operation id, so replays are harmless no-ops. Store errors propagate
    for the transport to retry.
    """

    def __init__(
        self,
        store: AuditStore,
        resolver: ActorResolver,
        registry: ActionSchemaRegistry,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._registry = registry

    async def on_booking_action(
        self, event: BookingAuditTask | Mapping[str, Any]
    ) -> IngestResult:
        """Validate, resolve and store one booking action.

        Raises:
            ValidationError: If the envelope, payload or actor is malformed
            StoreError: If the store fails; safe to retry
        """
        try:
            task = parse_task(event)
        except ValidationError:
            action = event.get("action", "unknown") if isinstance(event, Mapping) else "unknown"
            AUDIT_WRITE_FAILURES.labels(action=str(action), reason="invalid_envelope").inc()
            logger.warning("audit_task_rejected", reason="invalid_envelope")
            raise

        with audit_log_context(
            booking_uid=task.booking_uid,
            action=task.action.value,
            operation_id=task.operation_id,
        ):
            return await self._ingest(task)

    async def _ingest(self, task: BookingAuditTask) -> IngestResult:
        try:
            data = self._registry.wrap(task.action, task.data)
        except ValidationError as e:
            AUDIT_WRITE_FAILURES.labels(action=task.action.value, reason="invalid_payload").inc()
            logger.warning("audit_task_rejected", reason="invalid_payload", errors=e.errors)
            raise

        existing: AuditRecord | None = None
        try:
            actor_id = await self._resolver.resolve(task.actor)
            record = AuditRecord(
                booking_uid=task.booking_uid,
                actor_id=actor_id,
                action=task.action,
                type=self._registry.record_type_for(task.action),
                timestamp=from_epoch_millis(task.timestamp),
                source=task.source,
                operation_id=task.operation_id,
                data=data,
                context=task.context,
            )
            inserted = await self._store.insert_record(record)
            if not inserted:
                existing = await self._store.get_record_by_operation_id(task.operation_id)
        except StoreError as e:
            AUDIT_WRITE_FAILURES.labels(action=task.action.value, reason="store_error").inc()
            logger.error("audit_record_write_failed", error=str(e))
            raise

        if not inserted:
            AUDIT_DUPLICATE_OPERATIONS.labels(action=task.action.value).inc()
            logger.info("audit_operation_duplicate")
            return IngestResult(
                inserted=False,
                operation_id=task.operation_id,
                record_id=existing.id if existing else None,
                actor_id=actor_id,
            )

        AUDIT_RECORDS_WRITTEN.labels(action=task.action.value, source=task.source.value).inc()
        logger.info("audit_record_written", record_id=str(record.id), actor_id=str(actor_id))
        return IngestResult(
            inserted=True,
            operation_id=task.operation_id,
            record_id=record.id,
            actor_id=actor_id,
        )
