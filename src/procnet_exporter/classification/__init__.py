"""
Connection classification utilities.

- Protocol and state normalization into metric label vocabulary
- Substring matching of observed process names against configured names
"""

from .matcher import match_process_specs, process_in_config
from .protocols import PROTOCOL_MAP, STATE_NONE, normalize_protocol, normalize_state

__all__ = [
    "PROTOCOL_MAP",
    "STATE_NONE",
    "match_process_specs",
    "normalize_protocol",
    "normalize_state",
    "process_in_config",
]
