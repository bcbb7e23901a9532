"""
Connection sources.

This package provides the acquisition side of the exporter:

- An abstract interface defining the `acquire()` contract
- Two implementations with different backends:
  - netstat: runs a listing utility and parses its tabular output
  - psutil: enumerates processes and queries their sockets directly
- A factory selecting the implementation from configuration

New backends are added as new subclasses; the aggregator and scheduler only
see the abstract interface.
"""

from .base import AbstractConnectionSource
from .factory import create_connection_source
from .netstat import NetstatConnectionSource, parse_netstat_line, parse_netstat_output
from .psutil_source import PsutilConnectionSource

__all__ = [
    "AbstractConnectionSource",
    "NetstatConnectionSource",
    "PsutilConnectionSource",
    "create_connection_source",
    "parse_netstat_line",
    "parse_netstat_output",
]
