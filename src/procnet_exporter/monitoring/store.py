"""
Metric store backing the exposition endpoint.

The store holds the result of the latest completed aggregation as one
immutable snapshot. Publishing replaces the snapshot as a whole under a
lock, and every read takes a single snapshot reference, so a scrape sees
either the previous cycle or the new one and never a half-reset mix.

The store is a prometheus-client custom collector and owns its own
registry; nothing is registered in the process-global default registry.
"""

import logging
import threading
from typing import Iterator, List, Optional

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from ..models.connections import AggregationResult

logger = logging.getLogger(__name__)

CONNECTIONS_METRIC = "process_network_connections"
CONNECTIONS_HELP = "Number of active network connections for specified processes"
CONNECTIONS_LABELS = ["process_name", "protocol", "state"]

EXISTS_METRIC = "process_exists"
EXISTS_HELP = "Indicates if the process is running (1) or not (0)"
EXISTS_LABELS = ["process_name"]


class MetricStore:
    """
    Thread-safe holder of the currently exposed connection metrics.

    Attributes:
        registry: The CollectorRegistry this store is registered in.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self._lock = threading.Lock()
        self._snapshot = AggregationResult()
        self._generation = 0
        self.registry = registry if registry is not None else CollectorRegistry()
        self.registry.register(self)

    def publish(self, result: AggregationResult) -> None:
        """Replace everything currently exposed with `result`."""
        with self._lock:
            self._snapshot = result
            self._generation += 1
            generation = self._generation
        logger.debug(
            f"Published generation {generation}: {len(result.samples)} samples, "
            f"{sum(p.present for p in result.presence)}/{len(result.presence)} processes present"
        )

    def clear(self) -> None:
        """Drop all exposed samples and presence values."""
        self.publish(AggregationResult())

    def snapshot(self) -> AggregationResult:
        """The result of the latest publish."""
        with self._lock:
            return self._snapshot

    @property
    def generation(self) -> int:
        """Number of publishes so far."""
        with self._lock:
            return self._generation

    def _families(self, result: AggregationResult) -> List[GaugeMetricFamily]:
        connections = GaugeMetricFamily(CONNECTIONS_METRIC, CONNECTIONS_HELP, labels=CONNECTIONS_LABELS)
        for sample in result.samples:
            connections.add_metric(
                [sample.key.process_name, sample.key.protocol, sample.key.state],
                sample.count,
            )

        exists = GaugeMetricFamily(EXISTS_METRIC, EXISTS_HELP, labels=EXISTS_LABELS)
        for entry in result.presence:
            exists.add_metric([entry.process_name], 1 if entry.present else 0)

        return [connections, exists]

    def describe(self) -> Iterator[GaugeMetricFamily]:
        return iter(self._families(AggregationResult()))

    def collect(self) -> Iterator[GaugeMetricFamily]:
        return iter(self._families(self.snapshot()))

    def render(self) -> bytes:
        """Current contents in the Prometheus text exposition format."""
        return generate_latest(self.registry)
