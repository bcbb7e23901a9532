"""
Configuration validation utilities.

Turns the raw TOML document into a validated, immutable ExporterConfig.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    DEFAULT_EXPORTER_PORT,
    DEFAULT_NETSTAT_COMMAND,
    REFRESH_MODE_CHOICES,
    REFRESH_ON_DEMAND,
    SOURCE_CHOICES,
    SOURCE_NETSTAT,
    ExporterConfig,
)
from ..validation import (
    ValidationError,
    validate_command,
    validate_enum_choice,
    validate_port,
    validate_positive_float,
    validate_process_list,
)

logger = logging.getLogger(__name__)


def validate_exporter_config(config_data: Dict[str, Any]) -> ExporterConfig:
    """
    Validate and create an ExporterConfig from raw configuration data.

    Args:
        config_data: Raw configuration from TOML

    Returns:
        Validated ExporterConfig instance

    Raises:
        ValidationError: If validation fails
    """
    processes = validate_process_list(config_data.get("processes"), field_name="processes")

    exporter_addr = config_data.get("exporter_addr", "")
    if not isinstance(exporter_addr, str):
        raise ValidationError(
            "exporter_addr must be a string",
            field_name="exporter_addr",
            value=exporter_addr,
        )

    exporter_port = validate_port(
        config_data.get("exporter_port", str(DEFAULT_EXPORTER_PORT)),
        field_name="exporter_port",
    )

    source = validate_enum_choice(
        config_data.get("source", SOURCE_NETSTAT),
        valid_choices=SOURCE_CHOICES,
        field_name="source",
    )

    refresh_mode = validate_enum_choice(
        config_data.get("refresh_mode", REFRESH_ON_DEMAND),
        valid_choices=REFRESH_MODE_CHOICES,
        field_name="refresh_mode",
    )

    refresh_interval = validate_positive_float(
        config_data.get("refresh_interval", 15.0),
        min_value=0.1,
        max_value=3600.0,
        field_name="refresh_interval",
    )

    acquisition_timeout = validate_positive_float(
        config_data.get("acquisition_timeout", 10.0),
        min_value=0.1,
        max_value=600.0,
        field_name="acquisition_timeout",
    )

    netstat_command = validate_command(
        config_data.get("netstat_command", list(DEFAULT_NETSTAT_COMMAND)),
        field_name="netstat_command",
    )

    unknown_keys = set(config_data) - {
        "processes",
        "exporter_addr",
        "exporter_port",
        "source",
        "refresh_mode",
        "refresh_interval",
        "acquisition_timeout",
        "netstat_command",
    }
    if unknown_keys:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown_keys)}")

    return ExporterConfig(
        processes=tuple(processes),
        exporter_addr=exporter_addr,
        exporter_port=exporter_port,
        source=source,
        refresh_mode=refresh_mode,
        refresh_interval=refresh_interval,
        acquisition_timeout=acquisition_timeout,
        netstat_command=tuple(netstat_command),
    )
