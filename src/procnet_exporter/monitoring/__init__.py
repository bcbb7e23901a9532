"""
Connection metric aggregation and refresh coordination.

- aggregate: reduce a batch of connection records to counts and presence
- MetricStore: snapshot holder read by the exposition endpoint
- RefreshScheduler: interval or on-demand refresh cycles
"""

from .aggregator import aggregate
from .scheduler import RefreshScheduler, RefreshState
from .store import CONNECTIONS_METRIC, EXISTS_METRIC, MetricStore

__all__ = [
    "CONNECTIONS_METRIC",
    "EXISTS_METRIC",
    "MetricStore",
    "RefreshScheduler",
    "RefreshState",
    "aggregate",
]
