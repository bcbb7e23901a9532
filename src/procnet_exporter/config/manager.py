"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, caching the
validated ExporterConfig so the file is read only once per process.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import ExporterConfig
from ..validation import ConfigurationError, ValidationError, ErrorSeverity, handle_config_error
from .loader import load_toml_file
from .validators import validate_exporter_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[ExporterConfig] = None

# Relative to the working directory, like the `-c` flag default.
_CONFIG_FILE_PATH = Path("config.toml")


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to the config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def load_config(config_path: Path) -> ExporterConfig:
    """
    Load and validate the exporter configuration from a TOML file.

    Args:
        config_path: Path to the config.toml file

    Returns:
        Fully validated ExporterConfig instance

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    try:
        config_data = load_toml_file(config_path, "exporter configuration file")
        config = validate_exporter_config(config_data)
    except ValidationError as e:
        handle_config_error(
            error=e,
            context="validating configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger
        )
        raise ConfigurationError(str(e)) from e
    except ConfigurationError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise

    logger.info(
        f"Successfully loaded configuration with {len(config.processes)} processes "
        f"(source={config.source}, refresh_mode={config.refresh_mode})"
    )
    return config


def get_config() -> ExporterConfig:
    """
    Get the exporter configuration, loading it on first access.

    Returns:
        The singleton ExporterConfig instance

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """Get information about the current configuration state."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "processes_count": len(_CONFIG.processes) if _CONFIG else 0,
    }
