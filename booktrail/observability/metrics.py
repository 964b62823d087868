"""Prometheus metrics for the booking audit trail.

Write-path counters track ingestion outcomes; read-path metrics expose the
timeline size and the number of batched enrichment fetches, which should
grow with distinct entity kinds and never with timeline length.
"""

from prometheus_client import Counter, Histogram

# Write path
AUDIT_RECORDS_WRITTEN = Counter(
    "booktrail_audit_records_written_total",
    "Audit records inserted",
    labelnames=["action", "source"],
)

AUDIT_DUPLICATE_OPERATIONS = Counter(
    "booktrail_audit_duplicate_operations_total",
    "Deliveries ignored because the operation id was already stored",
    labelnames=["action"],
)

AUDIT_WRITE_FAILURES = Counter(
    "booktrail_audit_write_failures_total",
    "Rejected or failed audit writes",
    labelnames=["action", "reason"],
)

AUDIT_TASKS_QUEUED = Counter(
    "booktrail_audit_tasks_queued_total",
    "Audit tasks handed to the task queue by producers",
    labelnames=["action", "source"],
)

# Read path
ENRICHMENT_BATCH_FETCHES = Counter(
    "booktrail_enrichment_batch_fetches_total",
    "Batched external entity lookups issued while rendering timelines",
    labelnames=["kind"],
)

DEGRADED_RENDERS = Counter(
    "booktrail_degraded_renders_total",
    "Records rendered with the generic fallback handler",
    labelnames=["action", "reason"],
)

TIMELINE_SIZE = Histogram(
    "booktrail_timeline_records",
    "Number of records in a rendered booking timeline",
    buckets=(0, 1, 2, 5, 10, 20, 50, 100, 250, 500),
)

TIMELINE_LATENCY = Histogram(
    "booktrail_timeline_latency_seconds",
    "Time spent building a booking timeline",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
