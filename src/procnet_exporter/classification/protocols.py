"""
Protocol and connection state vocabulary.

Maps raw protocol identifiers (IANA protocol numbers as printed by some
listing utilities, or derived from socket types) to the canonical names used
as metric labels.
"""

from typing import Dict

# IANA protocol numbers to canonical names.
PROTOCOL_MAP: Dict[str, str] = {
    "0": "ip",
    "1": "icmp",
    "6": "tcp",
    "17": "udp",
    "41": "ipv6",
    "58": "ipv6-icmp",
    "132": "sctp",
    "162": "ethernet-over-ip",
}

# Reported for sockets that have no state, e.g. UDP.
STATE_NONE = "NONE"


def normalize_protocol(raw: str) -> str:
    """Return the canonical protocol name for `raw`.

    Unknown tokens are returned unchanged so unlisted protocols stay visible
    in the metrics instead of being dropped.

    Examples:
        >>> normalize_protocol("6")
        'tcp'
        >>> normalize_protocol("9999")
        '9999'
    """
    return PROTOCOL_MAP.get(raw, raw)


def normalize_state(raw: str) -> str:
    """Upper-case a raw state token; empty or missing states become NONE."""
    state = (raw or "").strip().upper()
    return state or STATE_NONE
