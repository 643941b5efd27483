"""
Data access interfaces.

The engine never fetches trades or benchmark prices itself; callers plug in
implementations of these interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from arbitrage_backtest.core.models.trade import HistoricalTrade


class ITradeLoader(ABC):
    """Abstract interface for historical trade supply."""

    @abstractmethod
    def load_trades(
        self, networks: Iterable[str], start_date: datetime, end_date: datetime
    ) -> list[HistoricalTrade]:
        """Load historical trades for the given networks within the date window."""
        pass


class IBenchmarkProvider(ABC):
    """Abstract interface for benchmark return supply."""

    @abstractmethod
    def get_benchmark_return(
        self, benchmark_name: str, start_date: datetime, end_date: datetime
    ) -> float:
        """Return the benchmark's percentage return over the window."""
        pass

    def get_benchmark_daily_returns(
        self,
        benchmark_name: str,  # noqa: ARG002
        start_date: datetime,  # noqa: ARG002
        end_date: datetime,  # noqa: ARG002
    ) -> list[float] | None:
        """Return the benchmark's daily percentage returns, if known."""
        return None
