"""Emission side: booking flows queue audit tasks through the producer."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from booktrail.audit.consumer import BookingAuditTaskConsumer
from booktrail.audit.models import (
    ActionSource,
    ActorRef,
    AuditAction,
    BookingAuditTask,
    to_epoch_millis,
    utc_now,
)
from booktrail.config.models.audit import AuditConfig
from booktrail.observability.logging import get_logger
from booktrail.observability.metrics import AUDIT_TASKS_QUEUED

logger = get_logger(__name__)


class AuditTaskQueue(ABC):
    """At-least-once transport carrying tasks to the consumer."""

    @abstractmethod
    async def enqueue(self, task: BookingAuditTask) -> None:
        pass


class InlineAuditTaskQueue(AuditTaskQueue):
    """Delivers tasks straight to the consumer in the caller's task.

    For development and tests; production uses a durable queue.
    """

    def __init__(self, consumer: BookingAuditTaskConsumer) -> None:
        self._consumer = consumer

    async def enqueue(self, task: BookingAuditTask) -> None:
        await self._consumer.on_booking_action(task)


class AuditFeatureChecker(ABC):
    """Whether an organization has booking audit enabled."""

    @abstractmethod
    async def is_enabled(self, organization_id: int | None) -> bool:
        pass


class ConfigFeatureChecker(AuditFeatureChecker):
    """Feature flag read from the [audit] configuration section."""

    def __init__(self, config: AuditConfig) -> None:
        self._config = config

    async def is_enabled(self, organization_id: int | None) -> bool:
        if not self._config.enabled or organization_id is None:
            return False
        if self._config.enabled_for_all_organizations:
            return True
        return organization_id in self._config.enabled_organization_ids


class BookingAuditProducer:
    """Builds audit tasks and hands them to the task queue.

    Emission is best effort: failures are logged and never propagate into
    the booking flow that triggered them.
    """

    def __init__(self, queue: AuditTaskQueue, feature_checker: AuditFeatureChecker) -> None:
        self._queue = queue
        self._features = feature_checker

    async def queue_audit(
        self,
        *,
        booking_uid: str,
        actor: ActorRef | Mapping[str, Any],
        action: AuditAction,
        source: ActionSource,
        data: Mapping[str, Any],
        organization_id: int | None,
        operation_id: str | None = None,
        timestamp: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> BookingAuditTask | None:
        """Queue one audit task.

        Returns:
            The queued task, or None if the feature is disabled or queueing failed
        """
        try:
            if not await self._features.is_enabled(organization_id):
                logger.debug(
                    "audit_task_skipped",
                    booking_uid=booking_uid,
                    action=action.value,
                    organization_id=organization_id,
                )
                return None

            task = BookingAuditTask(
                booking_uid=booking_uid,
                actor=actor,
                action=action,
                source=source,
                operation_id=operation_id or str(uuid4()),
                data=dict(data),
                timestamp=timestamp if timestamp is not None else to_epoch_millis(utc_now()),
                context=context,
            )
            await self._queue.enqueue(task)
        except Exception as e:
            logger.error(
                "audit_task_queue_failed",
                booking_uid=booking_uid,
                action=action.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        AUDIT_TASKS_QUEUED.labels(action=action.value, source=source.value).inc()
        logger.debug("audit_task_queued", booking_uid=booking_uid, operation_id=task.operation_id)
        return task
