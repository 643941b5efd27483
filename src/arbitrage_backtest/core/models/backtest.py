"""
Backtest configuration and results models.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from arbitrage_backtest.core.enums import FeeModel, LatencyModel, SimulationState, SlippageModel
from arbitrage_backtest.core.exceptions.backtest import UnknownModelError
from arbitrage_backtest.core.types.financial import json_safe_float

from .risk import RiskParameters
from .trade import SimulatedTrade


def _coerce_model[E: (SlippageModel, FeeModel, LatencyModel)](
    enum_cls: type[E], value: Any, kind: str
) -> E:
    """Convert a model name to its enum, raising a configuration error if unknown."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise UnknownModelError(kind, str(value), [m.value for m in enum_cls]) from e


@dataclass(frozen=True)
class BacktestConfig:
    """Configuration for a backtest execution.

    Structural checks (date order, capital, non-empty selections) are left to
    the orchestrator so that a run fails fast with ConfigurationError before
    any trade is loaded.
    """

    start_date: datetime
    end_date: datetime
    initial_capital: float
    max_drawdown: float
    strategies: frozenset[str]
    networks: frozenset[str]
    risk_parameters: RiskParameters
    slippage_model: SlippageModel = SlippageModel.FIXED
    fee_model: FeeModel = FeeModel.ACTUAL
    latency_model: LatencyModel = LatencyModel.REALISTIC
    benchmark_strategy: str | None = None

    def __post_init__(self) -> None:
        """Normalize selections to frozensets and model names to enums."""
        if not isinstance(self.start_date, datetime):
            raise TypeError(f"start_date must be datetime, got {type(self.start_date).__name__}")
        if not isinstance(self.end_date, datetime):
            raise TypeError(f"end_date must be datetime, got {type(self.end_date).__name__}")

        object.__setattr__(self, "strategies", frozenset(self.strategies))
        object.__setattr__(self, "networks", frozenset(self.networks))
        object.__setattr__(
            self, "slippage_model", _coerce_model(SlippageModel, self.slippage_model, "slippage")
        )
        object.__setattr__(self, "fee_model", _coerce_model(FeeModel, self.fee_model, "fee"))
        object.__setattr__(
            self, "latency_model", _coerce_model(LatencyModel, self.latency_model, "latency")
        )

    def is_valid_date_range(self) -> bool:
        """Validate that end_date is after start_date."""
        return self.end_date > self.start_date

    def is_valid_capital(self) -> bool:
        """Validate initial capital is positive."""
        return self.initial_capital > 0

    def duration_days(self) -> float:
        """Calculate duration of backtest in (fractional) days."""
        return (self.end_date - self.start_date).total_seconds() / 86400

    def accepts(self, strategy: str, network: str) -> bool:
        """Check if a trade's strategy and network are both selected."""
        return strategy in self.strategies and network in self.networks

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "initial_capital": self.initial_capital,
            "max_drawdown": self.max_drawdown,
            "strategies": sorted(self.strategies),
            "networks": sorted(self.networks),
            "risk_parameters": self.risk_parameters.to_dict(),
            "slippage_model": self.slippage_model.value,
            "fee_model": self.fee_model.value,
            "latency_model": self.latency_model.value,
            "benchmark_strategy": self.benchmark_strategy,
        }


@dataclass(frozen=True)
class ProgressUpdate:
    """Advisory progress notification emitted during simulation."""

    progress_pct: float
    trades_processed: int
    capital: float


@dataclass(frozen=True)
class EquityPoint:
    """Capital value after a given number of admitted trades."""

    timestamp: datetime
    equity: float
    drawdown: float
    trades: int

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "equity": self.equity,
            "drawdown": self.drawdown,
            "trades": self.trades,
        }


@dataclass(frozen=True)
class DrawdownPeriod:
    """A maximal run of equity points below the running peak."""

    start_date: datetime
    end_date: datetime
    duration: int
    max_drawdown: float
    recovery: int

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "duration": self.duration,
            "max_drawdown": self.max_drawdown,
            "recovery": self.recovery,
        }


@dataclass(frozen=True)
class MonthlyReturn:
    """Profit of one calendar month relative to initial capital."""

    year: int
    month: int
    return_pct: float
    trades: int
    best_day: float
    worst_day: float


@dataclass(frozen=True)
class StrategyBacktestResults:
    """Rollup of simulated trades for one strategy."""

    strategy: str
    total_trades: int
    net_profit: float
    win_rate: float
    sharpe_ratio: float
    max_drawdown: float
    average_execution_time: float
    profit_factor: float
    best_trade: float
    worst_trade: float


@dataclass(frozen=True)
class NetworkBacktestResults:
    """Rollup of simulated trades for one network."""

    network: str
    total_trades: int
    net_profit: float
    win_rate: float
    profit_factor: float
    best_trade: float
    worst_trade: float
    average_gas_cost: float
    average_slippage: float
    average_latency: float


@dataclass(frozen=True)
class BenchmarkComparison:
    """Comparison of the run's return against a benchmark."""

    benchmark: str
    our_return: float
    benchmark_return: float
    alpha: float
    beta: float
    correlation: float
    information_ratio: float
    tracking_error: float


@dataclass(frozen=True)
class SimulationResult:
    """Output of a single execution simulator pass."""

    trades: tuple[SimulatedTrade, ...]
    final_capital: float
    max_capital: float
    state: SimulationState
    trades_considered: int

    @property
    def emergency_stopped(self) -> bool:
        return self.state == SimulationState.EMERGENCY_STOPPED


def _strict_json(value: Any) -> Any:
    """Recursively replace non-finite floats with None."""
    if isinstance(value, float):
        return json_safe_float(value)
    if isinstance(value, dict):
        return {k: _strict_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_strict_json(v) for v in value]
    return value


@dataclass
class BacktestResults:
    """Results from a backtest execution."""

    config: BacktestConfig

    total_trades: int
    successful_trades: int
    total_profit: float
    total_costs: float
    net_profit: float

    roi: float
    sharpe_ratio: float
    sortino_ratio: float
    max_drawdown: float
    max_drawdown_duration: int

    win_rate: float
    profit_factor: float
    average_win: float
    average_loss: float
    largest_win: float
    largest_loss: float

    strategy_results: dict[str, StrategyBacktestResults]
    network_results: dict[str, NetworkBacktestResults]

    monthly_returns: list[MonthlyReturn]
    daily_returns: list[float]
    equity_curve: list[EquityPoint]
    drawdown_analysis: list[DrawdownPeriod]

    benchmark_comparison: BenchmarkComparison | None = None

    execution_time: float = 0.0
    data_quality: float = 0.0
    confidence: float = 0.0

    simulated_trades: list[SimulatedTrade] = field(default_factory=list, repr=False)

    def breached_max_drawdown(self) -> bool:
        """Check if the run hit its emergency stop drawdown."""
        return self.max_drawdown > self.config.max_drawdown

    def to_dict(self, strict_json: bool = False) -> dict:
        """Convert results to dictionary.

        Args:
            strict_json: Replace inf sentinels (profit factor, Sortino) with None

        Returns:
            JSON-compatible dictionary
        """
        data = {
            "config": self.config.to_dict(),
            "total_trades": self.total_trades,
            "successful_trades": self.successful_trades,
            "total_profit": self.total_profit,
            "total_costs": self.total_costs,
            "net_profit": self.net_profit,
            "roi": self.roi,
            "sharpe_ratio": self.sharpe_ratio,
            "sortino_ratio": self.sortino_ratio,
            "max_drawdown": self.max_drawdown,
            "max_drawdown_duration": self.max_drawdown_duration,
            "win_rate": self.win_rate,
            "profit_factor": self.profit_factor,
            "average_win": self.average_win,
            "average_loss": self.average_loss,
            "largest_win": self.largest_win,
            "largest_loss": self.largest_loss,
            "strategy_results": {k: asdict(v) for k, v in self.strategy_results.items()},
            "network_results": {k: asdict(v) for k, v in self.network_results.items()},
            "monthly_returns": [asdict(m) for m in self.monthly_returns],
            "daily_returns": list(self.daily_returns),
            "equity_curve": [p.to_dict() for p in self.equity_curve],
            "drawdown_analysis": [d.to_dict() for d in self.drawdown_analysis],
            "benchmark_comparison": (
                asdict(self.benchmark_comparison) if self.benchmark_comparison else None
            ),
            "execution_time": self.execution_time,
            "data_quality": self.data_quality,
            "confidence": self.confidence,
            "trades": [t.to_dict() for t in self.simulated_trades],
        }
        if strict_json:
            return _strict_json(data)
        return data

