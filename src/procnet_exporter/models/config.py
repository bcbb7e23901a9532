"""
Configuration data models.

This module contains the immutable configuration object built once at
startup from `config.toml`.
"""

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_EXPORTER_PORT = 9042
DEFAULT_NETSTAT_COMMAND: Tuple[str, ...] = ("netstat", "-tanup")

SOURCE_NETSTAT = "netstat"
SOURCE_PSUTIL = "psutil"
SOURCE_CHOICES = [SOURCE_NETSTAT, SOURCE_PSUTIL]

REFRESH_ON_DEMAND = "on_demand"
REFRESH_INTERVAL = "interval"
REFRESH_MODE_CHOICES = [REFRESH_ON_DEMAND, REFRESH_INTERVAL]


@dataclass(frozen=True)
class ExporterConfig:
    """
    Configuration for the exporter, loaded from `config.toml`.
    """

    # Process name fragments to watch, in configuration order.
    processes: Tuple[str, ...]

    # Address to bind the metrics endpoint to. Empty string binds all interfaces.
    exporter_addr: str = ""
    exporter_port: int = DEFAULT_EXPORTER_PORT

    # Which acquisition strategy to use ("netstat" or "psutil").
    source: str = SOURCE_NETSTAT
    # "on_demand" refreshes inside each scrape, "interval" on a background timer.
    refresh_mode: str = REFRESH_ON_DEMAND
    refresh_interval: float = 15.0
    # Upper bound for a single acquisition, in seconds.
    acquisition_timeout: float = 10.0
    netstat_command: Tuple[str, ...] = field(default=DEFAULT_NETSTAT_COMMAND)

    @property
    def listen_address(self) -> str:
        """Human-readable host:port the endpoint binds to."""
        host = self.exporter_addr or "0.0.0.0"
        return f"{host}:{self.exporter_port}"
