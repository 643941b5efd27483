"""
Execution cost models.

This module implements the Strategy Pattern for the three independently
selectable cost models (slippage, fees, latency) and the execution-success
draw that latency feeds into. Stochastic variants draw only from the
RandomSource handed to them, never from the global random module.
"""

from dataclasses import dataclass
from typing import Protocol

from arbitrage_backtest.core.constants import (
    BASE_EXECUTION_FAILURE_RATE,
    DYNAMIC_SLIPPAGE_MAX_RATE,
    DYNAMIC_SLIPPAGE_MIN_RATE,
    FIXED_SLIPPAGE_RATE,
    LATENCY_PENALTY_DIVISOR_MS,
    VOLATILITY_SLIPPAGE_DIVISOR,
)
from arbitrage_backtest.core.enums import FeeModel, LatencyModel, SlippageModel
from arbitrage_backtest.core.exceptions.backtest import UnknownModelError
from arbitrage_backtest.core.models.backtest import BacktestConfig
from arbitrage_backtest.core.models.trade import HistoricalTrade
from arbitrage_backtest.core.protocols import RandomSource


class SlippageStrategy(Protocol):
    """Protocol for slippage calculation strategies."""

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:
        """Return the slippage cost of the trade."""
        ...


class FeeStrategy(Protocol):
    """Protocol for fee calculation strategies."""

    def calculate(self, trade: HistoricalTrade) -> float:
        """Return the fee cost of the trade."""
        ...


class LatencyStrategy(Protocol):
    """Protocol for execution latency strategies."""

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:
        """Return the execution delay in milliseconds."""
        ...


class FixedSlippage:
    """Constant 0.1% of expected profit."""

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:  # noqa: ARG002
        return trade.expected_profit * FIXED_SLIPPAGE_RATE


class DynamicSlippage:
    """Uniformly drawn 0.05% - 0.25% of expected profit."""

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:
        rate = rng.uniform(DYNAMIC_SLIPPAGE_MIN_RATE, DYNAMIC_SLIPPAGE_MAX_RATE)
        return trade.expected_profit * rate


class VolatilitySlippage:
    """Expected profit scaled by the trade's recorded volatility / 1000."""

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:  # noqa: ARG002
        return trade.expected_profit * (trade.volatility / VOLATILITY_SLIPPAGE_DIVISOR)


class NoSlippage:
    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:  # noqa: ARG002
        return 0.0


class RateFee:
    """Fee charged as a fixed fraction of expected profit."""

    def __init__(self, rate: float):
        self.rate = rate

    def calculate(self, trade: HistoricalTrade) -> float:
        if self.rate == 0.0:
            return 0.0
        return trade.expected_profit * self.rate


class UniformLatency:
    """Latency drawn uniformly from a millisecond range."""

    def __init__(self, min_ms: float, max_ms: float):
        self.min_ms = min_ms
        self.max_ms = max_ms

    def calculate(self, trade: HistoricalTrade, rng: RandomSource) -> float:  # noqa: ARG002
        if self.max_ms == 0.0:
            return 0.0
        return rng.uniform(self.min_ms, self.max_ms)


_SLIPPAGE_STRATEGIES: dict[SlippageModel, SlippageStrategy] = {
    SlippageModel.FIXED: FixedSlippage(),
    SlippageModel.DYNAMIC: DynamicSlippage(),
    SlippageModel.REALISTIC: VolatilitySlippage(),
    SlippageModel.ZERO: NoSlippage(),
}


def get_slippage_strategy(model: SlippageModel) -> SlippageStrategy:
    """Select the slippage strategy registered for a model."""
    try:
        return _SLIPPAGE_STRATEGIES[model]
    except KeyError as e:
        raise UnknownModelError("slippage", str(model), [m.value for m in SlippageModel]) from e


def get_fee_strategy(model: FeeModel) -> FeeStrategy:
    """Select the fee strategy for a model."""
    return RateFee(FeeModel.rate(model))


def get_latency_strategy(model: LatencyModel) -> LatencyStrategy:
    """Select the latency strategy for a model."""
    min_ms, max_ms = LatencyModel.latency_range_ms(model)
    return UniformLatency(min_ms, max_ms)


def simulate_execution(latency_ms: float, rng: RandomSource) -> bool:
    """Simulate whether the opportunity is still capturable after the delay.

    Base success probability is 90%, reduced by 1 percentage point for every
    100ms of latency.

    Args:
        latency_ms: Execution delay in milliseconds
        rng: Random source for the competition draw

    Returns:
        True if the trade executes
    """
    threshold = BASE_EXECUTION_FAILURE_RATE + latency_ms / LATENCY_PENALTY_DIVISOR_MS
    return rng.random() > threshold


@dataclass(frozen=True)
class TradeCosts:
    """Simulated costs for a single trade."""

    slippage: float
    fees: float
    latency_ms: float
    executed: bool


class CostModels:
    """Bundle of the cost strategies selected by a configuration.

    One instance serves one simulation pass; the random source it holds is
    consumed in a fixed order per trade (slippage, latency, execution draw)
    so a seeded source always reproduces the same costs.
    """

    def __init__(
        self,
        slippage: SlippageStrategy,
        fees: FeeStrategy,
        latency: LatencyStrategy,
        rng: RandomSource,
    ):
        self.slippage = slippage
        self.fees = fees
        self.latency = latency
        self.rng = rng

    @classmethod
    def for_config(cls, config: BacktestConfig, rng: RandomSource) -> "CostModels":
        """Build the cost models named in a backtest configuration."""
        return cls(
            slippage=get_slippage_strategy(config.slippage_model),
            fees=get_fee_strategy(config.fee_model),
            latency=get_latency_strategy(config.latency_model),
            rng=rng,
        )

    def evaluate(self, trade: HistoricalTrade) -> TradeCosts:
        """Compute slippage, fees and latency, then run the execution draw."""
        slippage = self.slippage.calculate(trade, self.rng)
        fees = self.fees.calculate(trade)
        latency_ms = self.latency.calculate(trade, self.rng)
        executed = simulate_execution(latency_ms, self.rng)
        return TradeCosts(slippage=slippage, fees=fees, latency_ms=latency_ms, executed=executed)
