"""Test factories for creating test data."""

from tests.factories.audit import (
    SAMPLE_FIELDS,
    AuditRecordFactory,
    AuditTaskFactory,
    ContractResult,
    TrackingEnrichmentStore,
    current_data,
    verify_data_requirements_contract,
)

__all__ = [
    "SAMPLE_FIELDS",
    "AuditRecordFactory",
    "AuditTaskFactory",
    "ContractResult",
    "TrackingEnrichmentStore",
    "current_data",
    "verify_data_requirements_contract",
]
