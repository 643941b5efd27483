"""
Shared fixtures for backtesting engine tests.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from arbitrage_backtest.core.enums import FeeModel, LatencyModel, SlippageModel
from arbitrage_backtest.core.models.backtest import BacktestConfig
from arbitrage_backtest.core.models.risk import RiskParameters
from arbitrage_backtest.core.models.trade import HistoricalTrade

START = datetime(2025, 1, 1, tzinfo=UTC)
END = datetime(2025, 3, 31, tzinfo=UTC)


class FixedRandom:
    """Deterministic random source: random() is constant, uniform() returns its lower bound."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls: list[str] = []

    def random(self) -> float:
        self.calls.append("random")
        return self.value

    def uniform(self, a: float, b: float) -> float:  # noqa: ARG002
        self.calls.append("uniform")
        return a


@pytest.fixture
def fixed_rng() -> FixedRandom:
    """Random source under which every trade executes."""
    return FixedRandom(0.5)


@pytest.fixture
def make_rng() -> type[FixedRandom]:
    """Constructor for random sources pinned to a given draw."""
    return FixedRandom


@pytest.fixture
def risk_params() -> RiskParameters:
    """Risk limits loose enough that only the 5% capital rule can bite."""
    return RiskParameters(
        max_position_size=1000.0,
        max_daily_loss=2000.0,
        max_drawdown=50.0,
        stop_loss_percentage=2.0,
        emergency_stop_loss=10000.0,
        max_network_exposure=30.0,
        max_strategy_exposure=40.0,
        max_transactions_per_hour=50.0,
        cooldown_after_loss=60000.0,
        max_volatility=25.0,
        volatility_window=3600000.0,
    )


@pytest.fixture
def make_trade() -> Callable[..., HistoricalTrade]:
    """Factory for historical trades with neutral defaults."""
    counter = iter(range(1_000_000))

    def factory(**overrides: Any) -> HistoricalTrade:
        index = next(counter)
        values: dict[str, Any] = {
            "id": f"trade_{index}",
            "timestamp": START + timedelta(hours=index),
            "network": "ethereum",
            "strategy": "CROSS_DEX",
            "entry_price": 1000.0,
            "exit_price": 1001.0,
            "expected_profit": 100.0,
            "gas_cost": 5.0,
            "execution_time": 1500.0,
            "success": True,
            "volatility": 20.0,
            "liquidity": 500_000.0,
            "gas_price": 30.0,
        }
        values.update(overrides)
        return HistoricalTrade(**values)

    return factory


@pytest.fixture
def make_config(risk_params: RiskParameters) -> Callable[..., BacktestConfig]:
    """Factory for backtest configs with cost-free, instant execution by default."""

    def factory(**overrides: Any) -> BacktestConfig:
        values: dict[str, Any] = {
            "start_date": START,
            "end_date": END,
            "initial_capital": 10000.0,
            "max_drawdown": 20.0,
            "strategies": frozenset({"CROSS_DEX", "DEX_TRIANGULAR"}),
            "networks": frozenset({"ethereum", "bsc"}),
            "risk_parameters": risk_params,
            "slippage_model": SlippageModel.ZERO,
            "fee_model": FeeModel.ZERO,
            "latency_model": LatencyModel.INSTANT,
        }
        values.update(overrides)
        return BacktestConfig(**values)

    return factory
