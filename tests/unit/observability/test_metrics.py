"""Tests for Prometheus metrics."""

import pytest
from prometheus_client import REGISTRY

from booktrail.audit.access import RequesterContext, StaticBookingAccessChecker
from booktrail.audit.consumer import BookingAuditTaskConsumer
from booktrail.audit.enrichment import InMemoryEnrichmentSource
from booktrail.audit.errors import ValidationError
from booktrail.audit.models import Actor, ActorType, AuditData
from booktrail.audit.resolver import ActorResolver
from booktrail.audit.schemas import build_default_registry
from booktrail.audit.stores import InMemoryAuditStore
from booktrail.audit.viewer import BookingAuditViewerService
from booktrail.observability.metrics import (
    AUDIT_DUPLICATE_OPERATIONS,
    AUDIT_RECORDS_WRITTEN,
    AUDIT_TASKS_QUEUED,
    AUDIT_WRITE_FAILURES,
    DEGRADED_RENDERS,
    ENRICHMENT_BATCH_FETCHES,
    TIMELINE_LATENCY,
    TIMELINE_SIZE,
)
from tests.factories import AuditRecordFactory, AuditTaskFactory


def sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.fixture
def store() -> InMemoryAuditStore:
    return InMemoryAuditStore()


@pytest.fixture
def consumer(store) -> BookingAuditTaskConsumer:
    return BookingAuditTaskConsumer(store, ActorResolver(store), build_default_registry())


class TestMetricDefinitions:
    """All metrics are registered and accept their labels."""

    def test_counters_accept_labels(self) -> None:
        AUDIT_RECORDS_WRITTEN.labels(action="ACCEPTED", source="WEBAPP")
        AUDIT_DUPLICATE_OPERATIONS.labels(action="ACCEPTED")
        AUDIT_WRITE_FAILURES.labels(action="ACCEPTED", reason="invalid_payload")
        AUDIT_TASKS_QUEUED.labels(action="ACCEPTED", source="WEBAPP")
        ENRICHMENT_BATCH_FETCHES.labels(kind="userUuids")
        DEGRADED_RENDERS.labels(action="ACCEPTED", reason="render_failed")

    def test_histograms_observe(self) -> None:
        TIMELINE_SIZE.observe(3)
        TIMELINE_LATENCY.observe(0.01)


class TestWritePathMetrics:
    @pytest.mark.asyncio
    async def test_written_and_duplicate_counters(self, consumer) -> None:
        written = sample(
            "booktrail_audit_records_written_total", action="ACCEPTED", source="WEBAPP"
        )
        duplicates = sample("booktrail_audit_duplicate_operations_total", action="ACCEPTED")
        raw = AuditTaskFactory.create()

        await consumer.on_booking_action(raw)
        await consumer.on_booking_action(raw)

        assert sample(
            "booktrail_audit_records_written_total", action="ACCEPTED", source="WEBAPP"
        ) == written + 1
        assert sample(
            "booktrail_audit_duplicate_operations_total", action="ACCEPTED"
        ) == duplicates + 1

    @pytest.mark.asyncio
    async def test_failure_reason_recorded(self, consumer) -> None:
        before = sample(
            "booktrail_audit_write_failures_total", action="ACCEPTED", reason="invalid_payload"
        )

        with pytest.raises(ValidationError):
            await consumer.on_booking_action(AuditTaskFactory.create(data={"status": 1}))

        assert sample(
            "booktrail_audit_write_failures_total", action="ACCEPTED", reason="invalid_payload"
        ) == before + 1


class TestReadPathMetrics:
    @pytest.mark.asyncio
    async def test_degraded_render_counted(self, store) -> None:
        actor = await store.create_actor(Actor(type=ActorType.SYSTEM, email="system@system.internal"))
        await store.insert_record(
            AuditRecordFactory.create(
                actor_id=actor.id,
                action="FUTURE_ACTION",
                data=AuditData(version=1, fields={}),
            )
        )
        viewer = BookingAuditViewerService(
            store,
            StaticBookingAccessChecker(booking_owners={"booking-uid": 1}),
            InMemoryEnrichmentSource(),
            build_default_registry(),
        )
        before = sample(
            "booktrail_degraded_renders_total", action="FUTURE_ACTION", reason="unknown_action"
        )

        await viewer.get_audit_logs_for_booking(
            "booking-uid", RequesterContext(user_id=1, email="owner@example.com")
        )

        assert sample(
            "booktrail_degraded_renders_total", action="FUTURE_ACTION", reason="unknown_action"
        ) == before + 1
