"""
Validation and error handling for the procnet_exporter package.

This module provides input validation for configuration values and the
exception taxonomy shared by the acquisition pipeline.
"""

# Core exception classes and error handling
from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    PartialReadFailure,
    SourceUnavailable,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    validate_command,
    validate_enum_choice,
    validate_port,
    validate_positive_float,
    validate_positive_integer,
    validate_process_list,
)

__all__ = [
    # Core functionality
    "ConfigurationError",
    "ErrorSeverity",
    "PartialReadFailure",
    "SourceUnavailable",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "validate_command",
    "validate_enum_choice",
    "validate_port",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_process_list",
]
