"""
Process name matching.

Decides which configured process name fragments an observed process name
belongs to.
"""

import logging
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


def match_process_specs(
    observed_name: Optional[str], specs: Iterable[str]
) -> Tuple[str, ...]:
    """Return every spec whose text appears in `observed_name`.

    Matching is plain substring containment: not anchored and case-sensitive,
    so OS-added prefixes or suffixes on executable names still match. A name
    can match several specs; all of them are returned, in configuration order.

    Args:
        observed_name: Process name reported by the connection source.
            None or empty never matches.
        specs: Configured process name fragments.

    Returns:
        Tuple of matching specs, empty if none match.

    Examples:
        >>> match_process_specs("nginx-worker", ["nginx", "ngin", "redis"])
        ('nginx', 'ngin')
    """
    if not observed_name:
        return ()
    return tuple(spec for spec in specs if spec and spec in observed_name)


def process_in_config(observed_name: Optional[str], specs: Iterable[str]) -> bool:
    """True if `observed_name` matches at least one configured spec."""
    return bool(match_process_specs(observed_name, specs))
