"""
Connection and metric data models.

These are the transient values passed along one refresh cycle: raw
connection records produced by a source, and the samples and presence flags
the aggregator derives from them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ConnectionRecord:
    """
    One observed socket endpoint with its owning process.

    Attributes:
        protocol: Raw protocol token as reported by the source (e.g. "6", "tcp").
        local_address: Local IP address without the port.
        local_port: Local port, or "*" when unbound.
        remote_address: Remote IP address without the port.
        remote_port: Remote port, or "*" when not connected.
        state: Raw connection state token (e.g. "ESTABLISHED", "NONE").
        pid: Owning process id, if known.
        process_name: Owning process name, if the source reports one.
    """

    protocol: str
    local_address: str
    local_port: str
    remote_address: str
    remote_port: str
    state: str
    pid: Optional[int] = None
    process_name: Optional[str] = None

    @property
    def local_endpoint(self) -> str:
        return f"{self.local_address}:{self.local_port}"

    @property
    def remote_endpoint(self) -> str:
        return f"{self.remote_address}:{self.remote_port}"


@dataclass(frozen=True, order=True)
class AggregationKey:
    """Identity of one published connection series."""

    process_name: str
    protocol: str
    state: str


@dataclass(frozen=True)
class MetricSample:
    """Connection count for one aggregation key."""

    key: AggregationKey
    count: int


@dataclass(frozen=True)
class ProcessPresence:
    """Whether a configured process name matched anything in the latest cycle."""

    process_name: str
    present: bool


@dataclass(frozen=True)
class AggregationResult:
    """
    Output of one aggregation pass.

    `samples` is sorted by key and `presence` follows configuration order, so
    two results built from the same multiset of records compare equal.
    """

    samples: Tuple[MetricSample, ...] = ()
    presence: Tuple[ProcessPresence, ...] = ()

    def count_for(self, process_name: str, state: str, protocol: Optional[str] = None) -> int:
        """Sum of counts for a process/state pair, optionally for one protocol."""
        return sum(
            sample.count
            for sample in self.samples
            if sample.key.process_name == process_name
            and sample.key.state == state
            and (protocol is None or sample.key.protocol == protocol)
        )

    def is_present(self, process_name: str) -> bool:
        for entry in self.presence:
            if entry.process_name == process_name:
                return entry.present
        raise KeyError(process_name)
