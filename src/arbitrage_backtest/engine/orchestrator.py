"""
Backtest orchestration.

Coordinates validation, trade loading, simulation, metrics and benchmark
comparison for one run at a time per orchestrator instance.
"""

import random
import threading
import time

from loguru import logger

from arbitrage_backtest.core.exceptions.backtest import (
    BacktestAlreadyRunningError,
    ConfigurationError,
    DataError,
)
from arbitrage_backtest.core.interfaces.data import IBenchmarkProvider, ITradeLoader
from arbitrage_backtest.core.models.backtest import (
    BacktestConfig,
    BacktestResults,
    BenchmarkComparison,
)
from arbitrage_backtest.core.models.trade import HistoricalTrade
from arbitrage_backtest.core.protocols import (
    Clock,
    ProgressCallback,
    RandomSource,
    TradeLoaderFn,
)
from arbitrage_backtest.core.utils.decorators import log_operation
from arbitrage_backtest.core.utils.validation import validate_date_range, validate_non_empty

from .benchmark import BenchmarkComparator
from .cost_models import CostModels
from .metrics import MetricsEngine
from .report import log_backtest_report
from .simulator import ExecutionSimulator


class BacktestOrchestrator:
    """Top-level coordinator for backtest runs.

    Thread Safety:
        Only one run may be active per instance. A second call made while a
        run is in flight (from another thread or re-entrantly) fails
        immediately with BacktestAlreadyRunningError; calls are never queued.
        Separate instances run independently.
    """

    def __init__(
        self,
        trade_loader: ITradeLoader | TradeLoaderFn,
        benchmark_provider: IBenchmarkProvider | None = None,
        seed: int | None = None,
        clock: Clock = time.perf_counter,
        metrics_engine: MetricsEngine | None = None,
        comparator: BenchmarkComparator | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            trade_loader: Supplier of historical trades
            benchmark_provider: Supplier of benchmark returns; comparison is
                skipped when absent
            seed: Seed for the per-run random source
            clock: Seconds clock used to stamp execution time
            metrics_engine: Metrics engine override
            comparator: Benchmark comparator override
        """
        self.trade_loader = trade_loader
        self.benchmark_provider = benchmark_provider
        self.seed = seed
        self.clock = clock
        self.metrics_engine = metrics_engine or MetricsEngine()
        self.comparator = comparator or BenchmarkComparator()
        self._run_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Check if a backtest is currently in flight."""
        return self._run_lock.locked()

    @staticmethod
    def validate_config(config: BacktestConfig) -> None:
        """Validate a configuration before any trade is read.

        Raises:
            ConfigurationError: If the window, capital, selections or risk
                parameters are invalid
        """
        validate_date_range(config.start_date, config.end_date)

        if not config.is_valid_capital():
            raise ConfigurationError(
                f"initial_capital must be positive, got {config.initial_capital}"
            )

        validate_non_empty(config.strategies, "strategies")
        validate_non_empty(config.networks, "networks")

        negative = config.risk_parameters.negative_fields()
        if negative:
            raise ConfigurationError(
                f"Risk parameters must be non-negative: {', '.join(negative)}"
            )

    def _load_trades(self, config: BacktestConfig) -> list[HistoricalTrade]:
        """Fetch the trade corpus for the configured networks and window."""
        networks = sorted(config.networks)
        if isinstance(self.trade_loader, ITradeLoader):
            trades = self.trade_loader.load_trades(networks, config.start_date, config.end_date)
        else:
            trades = self.trade_loader(networks, config.start_date, config.end_date)

        trades = list(trades)
        invalid = [t for t in trades if not isinstance(t, HistoricalTrade)]
        if invalid:
            raise DataError(
                f"Trade loader returned {len(invalid)} records that are not HistoricalTrade"
            )
        return trades

    def _compare_to_benchmark(
        self, config: BacktestConfig, results: BacktestResults
    ) -> BenchmarkComparison | None:
        if not config.benchmark_strategy or self.benchmark_provider is None:
            return None

        name = config.benchmark_strategy
        benchmark_return = self.benchmark_provider.get_benchmark_return(
            name, config.start_date, config.end_date
        )
        benchmark_daily = self.benchmark_provider.get_benchmark_daily_returns(
            name, config.start_date, config.end_date
        )
        return self.comparator.compare(
            benchmark=name,
            our_return=results.roi,
            benchmark_return=benchmark_return,
            sharpe_ratio=results.sharpe_ratio,
            our_daily_returns=results.daily_returns,
            benchmark_daily_returns=benchmark_daily,
        )

    @log_operation
    def run_backtest(
        self,
        config: BacktestConfig,
        on_progress: ProgressCallback | None = None,
        rng: RandomSource | None = None,
    ) -> BacktestResults:
        """Run a complete backtest.

        Args:
            config: Backtest configuration
            on_progress: Optional advisory progress callback
            rng: Random source for stochastic cost models; defaults to a fresh
                random.Random seeded with the orchestrator seed

        Returns:
            Fully populated BacktestResults

        Raises:
            BacktestAlreadyRunningError: If a run is already in flight
            ConfigurationError: If the configuration is invalid
        """
        if not self._run_lock.acquire(blocking=False):
            raise BacktestAlreadyRunningError()

        try:
            start_time = self.clock()

            self.validate_config(config)
            logger.info(
                f"Backtest window {config.start_date.isoformat()} - {config.end_date.isoformat()}, "
                f"capital {config.initial_capital:,.2f}, "
                f"strategies {sorted(config.strategies)}, networks {sorted(config.networks)}"
            )

            trades = self._load_trades(config)
            logger.info(f"Loaded {len(trades)} historical trades")

            if rng is None and self.seed is None:
                logger.debug("No seed supplied, execution draws are not reproducible")

            random_source = rng if rng is not None else random.Random(self.seed)
            simulator = ExecutionSimulator(
                config,
                CostModels.for_config(config, random_source),
                on_progress=on_progress,
            )
            simulation = simulator.run(trades)

            results = self.metrics_engine.compute(config, simulation)
            results.benchmark_comparison = self._compare_to_benchmark(config, results)
            results.execution_time = (self.clock() - start_time) * 1000

            log_backtest_report(results)
            return results
        finally:
            self._run_lock.release()
