"""
Static benchmark return provider.
"""

from datetime import datetime

from arbitrage_backtest.core.exceptions.backtest import DataError
from arbitrage_backtest.core.interfaces.data import IBenchmarkProvider


class StaticBenchmarkProvider(IBenchmarkProvider):
    """Serves pre-computed benchmark returns, ignoring the requested window."""

    def __init__(
        self,
        returns: dict[str, float],
        daily_returns: dict[str, list[float]] | None = None,
    ) -> None:
        self.returns = dict(returns)
        self.daily_returns = dict(daily_returns or {})

    def get_benchmark_return(
        self,
        benchmark_name: str,
        start_date: datetime,  # noqa: ARG002
        end_date: datetime,  # noqa: ARG002
    ) -> float:
        if benchmark_name not in self.returns:
            raise DataError(f"Unknown benchmark: {benchmark_name}")
        return self.returns[benchmark_name]

    def get_benchmark_daily_returns(
        self,
        benchmark_name: str,
        start_date: datetime,  # noqa: ARG002
        end_date: datetime,  # noqa: ARG002
    ) -> list[float] | None:
        series = self.daily_returns.get(benchmark_name)
        return list(series) if series is not None else None
