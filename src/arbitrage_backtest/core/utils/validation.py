"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from collections.abc import Collection
from datetime import datetime

from arbitrage_backtest.core.exceptions.backtest import ConfigurationError, ValidationError


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a numeric value is zero or positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return value


def validate_date_range(start_date: datetime, end_date: datetime) -> None:
    """Validate that a backtest window is non-empty.

    Raises:
        ConfigurationError: If start_date is not before end_date
    """
    if start_date >= end_date:
        raise ConfigurationError(
            f"start_date must be before end_date, got {start_date.isoformat()} >= "
            f"{end_date.isoformat()}"
        )


def validate_non_empty(values: Collection[str], param_name: str) -> None:
    """Validate that a selection contains at least one entry.

    Raises:
        ConfigurationError: If the collection is empty
    """
    if len(values) == 0:
        raise ConfigurationError(f"At least one entry is required in {param_name}")
