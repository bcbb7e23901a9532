"""
Connection source factory.

Creates the connection source selected in the exporter configuration.
"""

import logging

from ..models.config import SOURCE_NETSTAT, SOURCE_PSUTIL, ExporterConfig
from .base import AbstractConnectionSource

logger = logging.getLogger(__name__)


def create_connection_source(config: ExporterConfig) -> AbstractConnectionSource:
    """
    Create the connection source named by `config.source`.

    Args:
        config: Validated exporter configuration

    Returns:
        A connection source instance

    Raises:
        ValueError: If the source type is unknown
    """
    logger.info(f"Creating connection source: {config.source}")

    if config.source == SOURCE_NETSTAT:
        from .netstat import NetstatConnectionSource

        return NetstatConnectionSource(
            command=config.netstat_command,
            acquisition_timeout=config.acquisition_timeout,
        )
    elif config.source == SOURCE_PSUTIL:
        from .psutil_source import PsutilConnectionSource

        return PsutilConnectionSource(
            acquisition_timeout=config.acquisition_timeout,
            process_filter=config.processes,
        )
    else:
        raise ValueError(f"Unknown connection source: {config.source}")
