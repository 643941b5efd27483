"""
Benchmark comparison arithmetic.

The benchmark's own returns come from an external provider; this module only
compares them with the run's returns.
"""

from collections.abc import Sequence

import numpy as np

from arbitrage_backtest.core.constants import (
    DEFAULT_BENCHMARK_BETA,
    DEFAULT_BENCHMARK_CORRELATION,
    MIN_RETURN_SAMPLES,
    TRACKING_ERROR_ALPHA_FACTOR,
)
from arbitrage_backtest.core.models.backtest import BenchmarkComparison


class BenchmarkComparator:
    """Compares a backtest's return with a named benchmark."""

    def compare(
        self,
        benchmark: str,
        our_return: float,
        benchmark_return: float,
        sharpe_ratio: float,
        our_daily_returns: Sequence[float] | None = None,
        benchmark_daily_returns: Sequence[float] | None = None,
    ) -> BenchmarkComparison:
        """Produce alpha, beta, correlation, information ratio and tracking error.

        Beta, correlation and tracking error are estimated from the daily
        series when both are supplied and overlap by at least two samples;
        otherwise beta falls back to 1.0, correlation to 0.0 and tracking
        error to 10% of |alpha|.

        Args:
            benchmark: Benchmark name
            our_return: Run ROI in percent
            benchmark_return: Benchmark return in percent over the same window
            sharpe_ratio: Run Sharpe ratio
            our_daily_returns: Run daily returns in percent
            benchmark_daily_returns: Benchmark daily returns in percent

        Returns:
            BenchmarkComparison
        """
        alpha = our_return - benchmark_return
        information_ratio = alpha / sharpe_ratio if sharpe_ratio != 0 else alpha

        beta = DEFAULT_BENCHMARK_BETA
        correlation = DEFAULT_BENCHMARK_CORRELATION
        tracking_error = abs(alpha) * TRACKING_ERROR_ALPHA_FACTOR

        if our_daily_returns is not None and benchmark_daily_returns is not None:
            aligned = min(len(our_daily_returns), len(benchmark_daily_returns))
            if aligned >= MIN_RETURN_SAMPLES:
                ours = np.asarray(our_daily_returns[:aligned], dtype=float)
                theirs = np.asarray(benchmark_daily_returns[:aligned], dtype=float)
                beta, correlation, tracking_error = self._series_statistics(ours, theirs)

        return BenchmarkComparison(
            benchmark=benchmark,
            our_return=our_return,
            benchmark_return=benchmark_return,
            alpha=alpha,
            beta=beta,
            correlation=correlation,
            information_ratio=information_ratio,
            tracking_error=tracking_error,
        )

    @staticmethod
    def _series_statistics(ours: np.ndarray, theirs: np.ndarray) -> tuple[float, float, float]:
        """Beta, Pearson correlation and tracking error of two aligned series."""
        benchmark_var = float(theirs.var())
        covariance = float(np.mean((ours - ours.mean()) * (theirs - theirs.mean())))
        beta = covariance / benchmark_var if benchmark_var > 0 else DEFAULT_BENCHMARK_BETA

        denominator = float(ours.std()) * float(theirs.std())
        correlation = covariance / denominator if denominator > 0 else DEFAULT_BENCHMARK_CORRELATION

        tracking_error = float((ours - theirs).std())
        return beta, correlation, tracking_error
