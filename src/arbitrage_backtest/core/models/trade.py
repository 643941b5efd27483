"""
Historical and simulated trade domain models.
Optimized for high-performance backtesting with float operations.
"""

from dataclasses import dataclass, fields
from datetime import datetime

from arbitrage_backtest.core.exceptions.backtest import ValidationError
from arbitrage_backtest.core.types.financial import ZERO, as_percentage


@dataclass(frozen=True)
class HistoricalTrade:
    """A recorded arbitrage opportunity as supplied by the trade store.

    The success flag is the raw outcome recorded at the time; the simulator
    recomputes success from the simulated net profit.
    """

    id: str
    timestamp: datetime
    network: str
    strategy: str
    entry_price: float
    exit_price: float
    expected_profit: float
    gas_cost: float
    execution_time: float
    success: bool
    volatility: float
    liquidity: float
    gas_price: float

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if not isinstance(self.timestamp, datetime):
            raise TypeError(f"timestamp must be datetime, got {type(self.timestamp).__name__}")
        if not self.id:
            raise ValidationError("Trade id must not be empty")
        if self.gas_cost < ZERO:
            raise ValidationError(f"Gas cost must be non-negative, got {self.gas_cost}")
        if self.execution_time < ZERO:
            raise ValidationError(
                f"Execution time must be non-negative, got {self.execution_time}"
            )
        if self.volatility < ZERO:
            raise ValidationError(f"Volatility must be non-negative, got {self.volatility}")
        if self.liquidity < ZERO:
            raise ValidationError(f"Liquidity must be non-negative, got {self.liquidity}")
        if self.gas_price < ZERO:
            raise ValidationError(f"Gas price must be non-negative, got {self.gas_price}")

    def to_dict(self) -> dict:
        """Convert trade to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass(frozen=True)
class SimulatedTrade(HistoricalTrade):
    """A historical trade admitted by the simulator, with its simulated costs."""

    actual_profit: float
    slippage: float
    fees: float
    profit_percentage: float

    @property
    def total_cost(self) -> float:
        """Gas, slippage and fees charged against the trade."""
        return self.gas_cost + self.slippage + self.fees

    @classmethod
    def from_historical(
        cls,
        trade: HistoricalTrade,
        slippage: float,
        fees: float,
        capital: float,
    ) -> "SimulatedTrade":
        """Create a simulated trade from its historical record.

        Args:
            trade: Source historical trade
            slippage: Simulated slippage cost
            fees: Simulated fee cost
            capital: Capital available when the trade was executed

        Returns:
            SimulatedTrade with net profit and success recomputed
        """
        actual_profit = trade.expected_profit - slippage - fees - trade.gas_cost
        base = {f.name: getattr(trade, f.name) for f in fields(HistoricalTrade)}
        base["success"] = actual_profit > ZERO
        return cls(
            **base,
            actual_profit=actual_profit,
            slippage=slippage,
            fees=fees,
            profit_percentage=as_percentage(actual_profit, capital),
        )
