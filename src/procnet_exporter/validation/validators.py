"""
Simplified validation functions.

This module provides the value-level validators used when turning the raw
TOML document into an ExporterConfig.
"""

from typing import Any, List, Optional

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; a TOML `true` is never a valid count
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        valid_choices: List of valid choices
        field_name: Name of the field being validated
        case_sensitive: Whether comparison should be case sensitive

    Returns:
        Validated choice value

    Raises:
        ValidationError: If value is not a valid choice
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in valid_choices:
            raise ValidationError(
                f"{field_name} must be one of {valid_choices}, got '{str_value}'",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in valid_choices]
    if str_value.lower() not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {valid_choices}, got '{str_value}'",
            field_name=field_name,
            value=value
        )
    return valid_choices[lower_choices.index(str_value.lower())]


def validate_port(value: Any, field_name: str = "port") -> int:
    """
    Validate a TCP port given either as an integer or a numeric string.

    Raises:
        ValidationError: If the value is not a port number in 1-65535
    """
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise ValidationError(
                f"{field_name} must be a numeric port, got '{value}'",
                field_name=field_name,
                value=value
            )
    return validate_positive_integer(
        value, min_value=1, max_value=65535, field_name=field_name
    )


def validate_process_list(value: Any, field_name: str = "processes") -> List[str]:
    """
    Validate the configured list of process name fragments.

    The list must be non-empty and every entry must be a non-empty string.
    Order is preserved; duplicates are dropped after their first occurrence.

    Raises:
        ValidationError: If the list is missing, empty or has invalid entries
    """
    if value is None:
        raise ValidationError(
            f"{field_name} is required",
            field_name=field_name,
            value=value
        )
    if not isinstance(value, list) or not value:
        raise ValidationError(
            f"{field_name} must be a non-empty list of strings",
            field_name=field_name,
            value=value
        )

    validated: List[str] = []
    for i, entry in enumerate(value):
        if not isinstance(entry, str) or not entry.strip():
            raise ValidationError(
                f"{field_name}[{i}] must be a non-empty string, got {entry!r}",
                field_name=f"{field_name}[{i}]",
                value=entry
            )
        if entry not in validated:
            validated.append(entry)
    return validated


def validate_command(value: Any, field_name: str = "command") -> List[str]:
    """
    Validate an external command given as a list of argument strings.

    Raises:
        ValidationError: If the command is empty or contains non-strings
    """
    if not isinstance(value, list) or not value:
        raise ValidationError(
            f"{field_name} must be a non-empty list of arguments",
            field_name=field_name,
            value=value
        )
    if not all(isinstance(arg, str) and arg for arg in value):
        raise ValidationError(
            f"{field_name} must contain only non-empty strings",
            field_name=field_name,
            value=value
        )
    return list(value)
