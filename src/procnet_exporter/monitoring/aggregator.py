"""
Aggregation of connection records into metric samples.

Turns one batch of raw connection records into per-process, per-protocol,
per-state counts plus a presence flag for every configured process name.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Sequence

from ..classification.matcher import match_process_specs
from ..classification.protocols import normalize_protocol, normalize_state
from ..models.connections import (
    AggregationKey,
    AggregationResult,
    ConnectionRecord,
    MetricSample,
    ProcessPresence,
)

logger = logging.getLogger(__name__)


def aggregate(
    records: Iterable[ConnectionRecord],
    specs: Sequence[str],
    debug: bool = False,
) -> AggregationResult:
    """Count matched connections and compute presence for every spec.

    Each record is matched against all specs; a record matching several
    specs is counted once under each of them. Presence starts False for
    every spec and only ever flips to True within a pass.

    The result does not depend on record order: samples are sorted by key
    and presence follows the order of `specs`.

    Args:
        records: Connection records from one acquisition.
        specs: Configured process name fragments.
        debug: Log every matched connection.

    Returns:
        AggregationResult with one sample per non-zero counter and one
        presence entry per spec.
    """
    presence: Dict[str, bool] = {spec: False for spec in specs}
    counts: Counter = Counter()

    for record in records:
        matched = match_process_specs(record.process_name, presence)
        if not matched:
            continue

        protocol = normalize_protocol(record.protocol)
        state = normalize_state(record.state)

        if debug:
            logger.debug(
                f"protocol={protocol}, src={record.local_endpoint}, "
                f"dest={record.remote_endpoint}, state={state}, "
                f"process={record.process_name} (PID={record.pid})"
            )

        for spec in matched:
            presence[spec] = True
            counts[AggregationKey(process_name=spec, protocol=protocol, state=state)] += 1

    samples = tuple(
        MetricSample(key=key, count=count)
        for key, count in sorted(counts.items())
        if count > 0
    )
    return AggregationResult(
        samples=samples,
        presence=tuple(ProcessPresence(name, present) for name, present in presence.items()),
    )
