"""
Cost model enumerations.

This module defines the named variants for slippage, fee and latency models
that a backtest configuration can select.
"""

from enum import StrEnum

from arbitrage_backtest.core.constants import (
    ACTUAL_FEE_RATE,
    ESTIMATED_FEE_RATE,
    PESSIMISTIC_LATENCY_MS,
    REALISTIC_LATENCY_MS,
)


class SlippageModel(StrEnum):
    """
    Allowed slippage models.

    Slippage is always expressed as a fraction of the trade's expected profit.
    """

    FIXED = "fixed"  # Constant 0.1%
    DYNAMIC = "dynamic"  # Random 0.05% - 0.25%
    REALISTIC = "realistic"  # Scaled by recorded volatility
    ZERO = "zero"  # No slippage

    @property
    def is_stochastic(self) -> bool:
        """Check if the model draws from the random source."""
        return self == self.DYNAMIC


class FeeModel(StrEnum):
    """
    Allowed fee models.

    Fees are expressed as a fraction of the trade's expected profit.
    """

    ACTUAL = "actual"
    ESTIMATED = "estimated"
    ZERO = "zero"

    @classmethod
    def rate(cls, model: "FeeModel") -> float:
        """
        Get the fee rate applied by a fee model.

        Args:
            model: Fee model enum value

        Returns:
            Fee rate as a fraction of expected profit
        """
        rates = {
            cls.ACTUAL: ACTUAL_FEE_RATE,
            cls.ESTIMATED: ESTIMATED_FEE_RATE,
            cls.ZERO: 0.0,
        }
        return rates[model]


class LatencyModel(StrEnum):
    """
    Allowed execution latency models.

    Latency degrades the probability that a historical opportunity is still
    capturable when the simulated order lands.
    """

    INSTANT = "instant"
    REALISTIC = "realistic"  # 500ms - 2.5s
    PESSIMISTIC = "pessimistic"  # 1s - 6s

    @classmethod
    def latency_range_ms(cls, model: "LatencyModel") -> tuple[float, float]:
        """
        Get the latency range drawn by a latency model.

        Args:
            model: Latency model enum value

        Returns:
            (minimum, maximum) latency in milliseconds
        """
        ranges = {
            cls.INSTANT: (0.0, 0.0),
            cls.REALISTIC: REALISTIC_LATENCY_MS,
            cls.PESSIMISTIC: PESSIMISTIC_LATENCY_MS,
        }
        return ranges[model]

    @property
    def is_stochastic(self) -> bool:
        """Check if the model draws from the random source."""
        return self != self.INSTANT
