"""
Configuration management for the procnet_exporter package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    set_config_path,
)

# For advanced usage - direct access to the loader and validator
from .loader import load_toml_file
from .validators import validate_exporter_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "load_config",
    # Advanced interface
    "load_toml_file",
    "validate_exporter_config",
]
