"""
Financial value helpers for backtest calculations.

All engine arithmetic runs on plain floats. Results are never rounded inside
the simulation so that derived series (equity curve, daily returns) stay
exactly consistent with the simulated trade stream; rounding is only applied
when values are presented.

Undefined ratios resolve to sentinels instead of raising:
- 0.0 when there is not enough data
- math.inf when the denominator is structurally zero (e.g. no losing trades)
"""

import math

PERCENTAGE_DECIMALS = 4  # 4 decimal places for percentages
AMOUNT_DECIMALS = 2  # 2 decimal places for USD amounts

ZERO = 0.0
HUNDRED = 100.0
INFINITY = math.inf


def round_amount(amount: float) -> float:
    """Round a currency amount for presentation."""
    return round(amount, AMOUNT_DECIMALS)


def round_percentage(percentage: float) -> float:
    """Round a percentage for presentation."""
    return round(percentage, PERCENTAGE_DECIMALS)


def as_percentage(part: float, whole: float) -> float:
    """Express part as a percentage of whole.

    Args:
        part: Numerator
        whole: Denominator

    Returns:
        part / whole * 100, or 0.0 when whole is zero
    """
    if whole == ZERO:
        return ZERO
    return part / whole * HUNDRED


def drawdown_percentage(peak: float, current: float) -> float:
    """Calculate the percentage decline of current from peak.

    Args:
        peak: Highest value observed so far
        current: Current value

    Returns:
        Drawdown in percent, never negative
    """
    if peak <= ZERO or current >= peak:
        return ZERO
    return (peak - current) / peak * HUNDRED


def json_safe_float(value: float) -> float | None:
    """Map non-finite sentinels to None for strict JSON encoders."""
    if math.isfinite(value):
        return value
    return None
