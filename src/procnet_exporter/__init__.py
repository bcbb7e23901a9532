"""
procnet_exporter: network connection metrics for selected processes.

This package periodically discovers the network connections owned by a
configured set of processes and republishes them as labeled Prometheus
gauges.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Input validation and error types
- system: External command execution
- classification: Protocol normalization and process name matching
- collectors: Connection sources (netstat text output, psutil)
- monitoring: Aggregation, metric store and refresh scheduling
- exposition: HTTP metrics endpoint
- cli: Command-line interface

Usage:
    From command line:
        procnet-exporter -c config.toml

    Programmatically:
        from procnet_exporter import MetricStore, RefreshScheduler, create_connection_source
        source = create_connection_source(config)
        scheduler = RefreshScheduler(source, MetricStore(), config.processes)
        scheduler.refresh_once()
"""

__version__ = "1.0.0"
BUILD_TIME = "unknown"
COMMIT_HASH = "none"

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .collectors import (
    AbstractConnectionSource,
    NetstatConnectionSource,
    PsutilConnectionSource,
    create_connection_source,
)
from .monitoring import MetricStore, RefreshScheduler, aggregate

# Model classes for external use
from .models import (
    AggregationKey,
    AggregationResult,
    ConnectionRecord,
    ExporterConfig,
    MetricSample,
    ProcessPresence,
)

# Error types
from .validation import (
    ConfigurationError,
    PartialReadFailure,
    SourceUnavailable,
    ValidationError,
)

# Classification utilities
from .classification import match_process_specs, normalize_protocol

__all__ = [
    "__version__",
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "AbstractConnectionSource",
    "NetstatConnectionSource",
    "PsutilConnectionSource",
    "create_connection_source",
    "MetricStore",
    "RefreshScheduler",
    "aggregate",
    # Models
    "AggregationKey",
    "AggregationResult",
    "ConnectionRecord",
    "ExporterConfig",
    "MetricSample",
    "ProcessPresence",
    # Errors
    "ConfigurationError",
    "PartialReadFailure",
    "SourceUnavailable",
    "ValidationError",
    # Classification
    "match_process_specs",
    "normalize_protocol",
]
