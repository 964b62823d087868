"""Configuration model exports.

    from booktrail.config.models import AuditConfig, StorageConfig
"""

from booktrail.config.models.audit import AuditConfig
from booktrail.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from booktrail.config.models.storage import PostgresConfig, StorageConfig

__all__ = [
    "AuditConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PostgresConfig",
    "StorageConfig",
]
