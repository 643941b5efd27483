"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    AMOUNT_DECIMALS,
    HUNDRED,
    INFINITY,
    PERCENTAGE_DECIMALS,
    ZERO,
    as_percentage,
    drawdown_percentage,
    json_safe_float,
    round_amount,
    round_percentage,
)

__all__ = [
    # Utility functions
    "round_amount",
    "round_percentage",
    "as_percentage",
    "drawdown_percentage",
    "json_safe_float",
    # Constants
    "AMOUNT_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "ZERO",
    "HUNDRED",
    "INFINITY",
]
