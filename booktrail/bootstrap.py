"""Bootstrap module for wiring the booking audit stack.

Builds stores, the write path, the read path and the producer from
configuration. Collaborators owned by the host application (access
checks, entity lookups, the task transport) can be passed in; otherwise
in-memory development versions are used.

Example usage:

    from booktrail.bootstrap import bootstrap

    stack = bootstrap()

    await stack.producer.queue_audit(
        booking_uid="booking-uid",
        actor=make_user_actor("user-uuid"),
        action=AuditAction.ACCEPTED,
        source=ActionSource.WEBAPP,
        data={"status": {"old": "PENDING", "new": "ACCEPTED"}},
        organization_id=1,
    )
"""

from dataclasses import dataclass

from prometheus_client import start_http_server

from booktrail.audit.access import BookingAccessChecker, StaticBookingAccessChecker
from booktrail.audit.actions import HandlerRegistry
from booktrail.audit.consumer import BookingAuditTaskConsumer
from booktrail.audit.enrichment import EnrichmentSource, InMemoryEnrichmentSource
from booktrail.audit.producer import (
    AuditFeatureChecker,
    AuditTaskQueue,
    BookingAuditProducer,
    ConfigFeatureChecker,
    InlineAuditTaskQueue,
)
from booktrail.audit.resolver import ActorResolver
from booktrail.audit.schemas import ActionSchemaRegistry, build_default_registry
from booktrail.audit.store import AuditStore
from booktrail.audit.stores import InMemoryAuditStore, PostgresAuditStore
from booktrail.audit.viewer import BookingAuditViewerService
from booktrail.config import Settings, get_settings
from booktrail.db.pool import PostgresPool
from booktrail.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class BookingAuditStack:
    """Everything bootstrap() created, for callers and tests."""

    settings: Settings
    store: AuditStore
    pool: PostgresPool | None
    schema_registry: ActionSchemaRegistry
    handler_registry: HandlerRegistry
    resolver: ActorResolver
    consumer: BookingAuditTaskConsumer
    viewer: BookingAuditViewerService
    producer: BookingAuditProducer
    access_checker: BookingAccessChecker
    enrichment_source: EnrichmentSource

    async def close(self) -> None:
        """Release the database pool, if one was created."""
        if self.pool is not None:
            await self.pool.close()


def create_store(settings: Settings) -> tuple[AuditStore, PostgresPool | None]:
    """Create the configured audit store backend."""
    if settings.storage.backend == "postgres":
        postgres = settings.storage.postgres
        pool = PostgresPool(
            dsn=postgres.connection_url,
            min_size=postgres.min_pool_size,
            max_size=postgres.max_pool_size,
            max_inactive_connection_lifetime=postgres.max_inactive_connection_lifetime,
            command_timeout=postgres.command_timeout,
        )
        return PostgresAuditStore(pool), pool
    return InMemoryAuditStore(), None


def bootstrap(
    settings: Settings | None = None,
    access_checker: BookingAccessChecker | None = None,
    enrichment_source: EnrichmentSource | None = None,
    task_queue: AuditTaskQueue | None = None,
    feature_checker: AuditFeatureChecker | None = None,
    start_metrics_server: bool = False,
) -> BookingAuditStack:
    """Wire the booking audit stack from settings.

    Args:
        settings: Override settings (default: get_settings())
        access_checker: Read authorization (default: static, grants nothing)
        enrichment_source: User/attendee lookups (default: empty in-memory source)
        task_queue: Transport to the consumer (default: inline delivery)
        feature_checker: Organization feature flag (default: from [audit] config)
        start_metrics_server: Expose Prometheus metrics on the configured port

    Returns:
        BookingAuditStack with every component
    """
    settings = settings or get_settings()
    logging_config = settings.observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_pii=logging_config.redact_pii,
    )

    store, pool = create_store(settings)
    schema_registry = build_default_registry()
    handler_registry = HandlerRegistry()
    resolver = ActorResolver(store)
    consumer = BookingAuditTaskConsumer(store, resolver, schema_registry)

    access_checker = access_checker or StaticBookingAccessChecker()
    enrichment_source = enrichment_source or InMemoryEnrichmentSource()
    viewer = BookingAuditViewerService(
        store=store,
        access_checker=access_checker,
        enrichment_source=enrichment_source,
        schema_registry=schema_registry,
        handler_registry=handler_registry,
        unknown_name=settings.audit.unknown_entity_name,
    )

    producer = BookingAuditProducer(
        queue=task_queue or InlineAuditTaskQueue(consumer),
        feature_checker=feature_checker or ConfigFeatureChecker(settings.audit),
    )

    metrics_config = settings.observability.metrics
    if start_metrics_server and metrics_config.enabled:
        start_http_server(metrics_config.port)
        logger.info("metrics_server_started", port=metrics_config.port)

    logger.info(
        "booking_audit_bootstrapped",
        backend=settings.storage.backend,
        audit_enabled=settings.audit.enabled,
    )

    return BookingAuditStack(
        settings=settings,
        store=store,
        pool=pool,
        schema_registry=schema_registry,
        handler_registry=handler_registry,
        resolver=resolver,
        consumer=consumer,
        viewer=viewer,
        producer=producer,
        access_checker=access_checker,
        enrichment_source=enrichment_source,
    )
