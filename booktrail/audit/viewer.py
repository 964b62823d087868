"""Read path: builds the translation-ready timeline of a booking."""

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, assert_never
from uuid import UUID

from booktrail.audit.access import BookingAccessChecker, RequesterContext
from booktrail.audit.actions import AuditActionHandler, HandlerRegistry
from booktrail.audit.enrichment import (
    UNKNOWN_NAME,
    DataRequirements,
    EnrichmentSource,
    EnrichmentStore,
)
from booktrail.audit.errors import PermissionDenied
from booktrail.audit.models import (
    SYSTEM_ACTOR_NAME,
    Actor,
    ActorDisplay,
    ActorType,
    AuditData,
    AuditLogView,
    AuditRecord,
    BookingAuditLogs,
    DisplayField,
    DisplayTitle,
    to_epoch_millis,
)
from booktrail.audit.schemas import ActionSchemaRegistry
from booktrail.audit.store import AuditStore
from booktrail.observability.logging import audit_log_context, get_logger
from booktrail.observability.metrics import DEGRADED_RENDERS, TIMELINE_LATENCY, TIMELINE_SIZE

logger = get_logger(__name__)


@dataclass
class _TimelineEntry:
    record: AuditRecord
    data: AuditData
    handler: AuditActionHandler | None
    requirements: DataRequirements = field(default_factory=DataRequirements)
    rescheduled_from: bool = False
    degraded_reason: str | None = None


class BookingAuditViewerService:
    """Builds a booking's audit timeline for an authorized requester.

    Reads per request are bounded: one access check, one ordered record
    load, one rescheduled-from lookup, one actor batch and at most one
    batch per enrichment entity kind, however long the timeline is.
    """

    def __init__(
        self,
        store: AuditStore,
        access_checker: BookingAccessChecker,
        enrichment_source: EnrichmentSource,
        schema_registry: ActionSchemaRegistry,
        handler_registry: HandlerRegistry | None = None,
        unknown_name: str = UNKNOWN_NAME,
    ) -> None:
        self._store = store
        self._access = access_checker
        self._source = enrichment_source
        self._schemas = schema_registry
        self._handlers = handler_registry or HandlerRegistry()
        self._unknown_name = unknown_name

    async def get_audit_logs_for_booking(
        self, booking_uid: str, requester: RequesterContext
    ) -> BookingAuditLogs:
        """Return the ordered, rendered timeline of a booking.

        Raises:
            PermissionDenied: If the requester may not view the booking
            UnsupportedVersionError: If a stored payload cannot be migrated
        """
        if not await self._access.can_view_audit_log(booking_uid, requester):
            logger.warning(
                "audit_log_access_denied",
                booking_uid=booking_uid,
                user_id=requester.user_id,
            )
            raise PermissionDenied(booking_uid)

        with audit_log_context(booking_uid=booking_uid):
            return await self._build_timeline(booking_uid)

    async def _build_timeline(self, booking_uid: str) -> BookingAuditLogs:
        started = time.perf_counter()

        records = await self._store.list_records_by_booking(booking_uid)
        entries: list[_TimelineEntry] = []

        origin = await self._store.find_rescheduled_from(booking_uid)
        if origin is not None and origin.booking_uid != booking_uid:
            entries.append(self._prepare(origin, rescheduled_from=True))
        entries.extend(self._prepare(record) for record in records)

        actors = await self._store.get_actors_by_ids({e.record.actor_id for e in entries})

        requirements = DataRequirements.union(e.requirements for e in entries)
        requirements.update(self._actor_requirements(actors.values()))
        enrichment = await EnrichmentStore.load(
            requirements, self._source, unknown_name=self._unknown_name
        )

        views = [self._render(entry, actors, enrichment) for entry in entries]

        TIMELINE_SIZE.observe(len(views))
        TIMELINE_LATENCY.observe(time.perf_counter() - started)
        logger.info(
            "audit_timeline_built",
            records=len(views),
            rescheduled_from=origin is not None,
        )
        return BookingAuditLogs(booking_uid=booking_uid, audit_logs=views)

    def _prepare(self, record: AuditRecord, rescheduled_from: bool = False) -> _TimelineEntry:
        """Migrate a record and collect its handler's requirements."""
        data = self._schemas.migrate(record.action, record.data)
        handler = self._handlers.get(record.action)
        entry = _TimelineEntry(
            record=record,
            data=data,
            handler=handler,
            rescheduled_from=rescheduled_from,
        )
        if handler is None:
            entry.degraded_reason = "unknown_action"
            return entry
        try:
            entry.requirements = handler.get_data_requirements(data)
        except Exception as e:
            entry.degraded_reason = "invalid_payload"
            logger.warning(
                "audit_requirements_failed",
                record_id=str(record.id),
                action=str(record.action),
                error=str(e),
            )
        return entry

    @staticmethod
    def _actor_requirements(actors: Iterable[Actor]) -> DataRequirements:
        requirements = DataRequirements()
        for actor in actors:
            if actor.type == ActorType.USER and actor.user_uuid:
                requirements.user_uuids.add(actor.user_uuid)
            elif actor.type == ActorType.ATTENDEE and actor.attendee_id is not None:
                requirements.attendee_ids.add(actor.attendee_id)
        return requirements

    def _render(
        self,
        entry: _TimelineEntry,
        actors: Mapping[UUID, Actor],
        enrichment: EnrichmentStore,
    ) -> AuditLogView:
        record = entry.record
        actor = self._actor_display(record.actor_id, actors.get(record.actor_id), enrichment)

        if entry.handler is not None and entry.degraded_reason is None:
            try:
                scoped = enrichment.scoped(entry.requirements)
                if entry.rescheduled_from:
                    title = self._handlers.rescheduled.get_display_title_for_rescheduled_from(
                        entry.data, record.booking_uid
                    )
                else:
                    title = entry.handler.get_display_title(entry.data, scoped)
                return self._view(
                    record,
                    actor,
                    title=title,
                    fields=entry.handler.get_display_fields(entry.data, scoped),
                    display_json=entry.handler.get_display_json(entry.data),
                )
            except Exception as e:
                entry.degraded_reason = "render_failed"
                logger.error(
                    "audit_record_render_failed",
                    record_id=str(record.id),
                    action=str(record.action),
                    error=str(e),
                    error_type=type(e).__name__,
                )

        DEGRADED_RENDERS.labels(
            action=str(getattr(record.action, "value", record.action)),
            reason=entry.degraded_reason or "render_failed",
        ).inc()
        fallback = self._handlers.fallback
        return self._view(
            record,
            actor,
            title=fallback.get_display_title(record.action),
            fields=fallback.get_display_fields(entry.data),
            display_json=fallback.get_display_json(entry.data),
        )

    @staticmethod
    def _view(
        record: AuditRecord,
        actor: ActorDisplay,
        title: DisplayTitle,
        fields: list[DisplayField],
        display_json: dict[str, Any],
    ) -> AuditLogView:
        return AuditLogView(
            id=record.id,
            booking_uid=record.booking_uid,
            action=record.action,
            type=record.type,
            source=record.source,
            timestamp=to_epoch_millis(record.timestamp),
            actor=actor,
            display_title=title,
            display_fields=fields,
            display_json=display_json,
        )

    def _actor_display(
        self, actor_id: UUID, actor: Actor | None, store: EnrichmentStore
    ) -> ActorDisplay:
        if actor is None:
            logger.warning("audit_actor_missing", actor_id=str(actor_id))
            return ActorDisplay(id=actor_id, display_name=store.unknown_name)

        if actor.type == ActorType.USER:
            user = store.get_user_by_uuid(actor.user_uuid) if actor.user_uuid else None
            if user is None:
                return ActorDisplay(id=actor.id, type=actor.type, display_name=store.unknown_name)
            return ActorDisplay(
                id=actor.id,
                type=actor.type,
                display_name=user.name or user.email,
                display_email=user.email,
                avatar_url=user.avatar_url,
            )
        elif actor.type == ActorType.ATTENDEE:
            attendee = (
                store.get_attendee_by_id(actor.attendee_id)
                if actor.attendee_id is not None
                else None
            )
            if attendee is None:
                return ActorDisplay(id=actor.id, type=actor.type, display_name=store.unknown_name)
            return ActorDisplay(
                id=actor.id,
                type=actor.type,
                display_name=attendee.name or attendee.email,
                display_email=attendee.email,
            )
        elif actor.type == ActorType.GUEST:
            return ActorDisplay(
                id=actor.id,
                type=actor.type,
                display_name=actor.name or actor.email or store.unknown_name,
                display_email=actor.email,
            )
        elif actor.type == ActorType.SYSTEM:
            return ActorDisplay(id=actor.id, type=actor.type, display_name=SYSTEM_ACTOR_NAME)
        elif actor.type == ActorType.APP:
            return ActorDisplay(
                id=actor.id,
                type=actor.type,
                display_name=actor.name or actor.email or store.unknown_name,
            )
        else:
            assert_never(actor.type)
