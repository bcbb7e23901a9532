"""
Data models and structures for the exporter.

Configuration Models:
- The immutable exporter configuration and its allowed choices

Connection Models:
- Raw connection records produced by a connection source
- Aggregation keys, metric samples and process presence flags

All models are frozen dataclasses; nothing here carries state across
refresh cycles.
"""

# Configuration models
from .config import (
    DEFAULT_EXPORTER_PORT,
    DEFAULT_NETSTAT_COMMAND,
    REFRESH_INTERVAL,
    REFRESH_MODE_CHOICES,
    REFRESH_ON_DEMAND,
    SOURCE_CHOICES,
    SOURCE_NETSTAT,
    SOURCE_PSUTIL,
    ExporterConfig,
)

# Connection models
from .connections import (
    AggregationKey,
    AggregationResult,
    ConnectionRecord,
    MetricSample,
    ProcessPresence,
)

__all__ = [
    # Configuration
    "DEFAULT_EXPORTER_PORT",
    "DEFAULT_NETSTAT_COMMAND",
    "REFRESH_INTERVAL",
    "REFRESH_MODE_CHOICES",
    "REFRESH_ON_DEMAND",
    "SOURCE_CHOICES",
    "SOURCE_NETSTAT",
    "SOURCE_PSUTIL",
    "ExporterConfig",
    # Connections
    "AggregationKey",
    "AggregationResult",
    "ConnectionRecord",
    "MetricSample",
    "ProcessPresence",
]
