#!/usr/bin/env python3
"""
Sample Backtest Runner

Runs a backtest over synthetic arbitrage trades and writes the report as JSON.
Useful for smoke-testing cost model and risk settings without a trade store.
"""

import argparse
import json
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

from loguru import logger

from arbitrage_backtest.core.enums import FeeModel, LatencyModel, SlippageModel
from arbitrage_backtest.core.exceptions.backtest import BacktestException
from arbitrage_backtest.core.models.backtest import BacktestConfig, ProgressUpdate
from arbitrage_backtest.core.models.risk import RiskParameters
from arbitrage_backtest.engine import BacktestOrchestrator
from arbitrage_backtest.infrastructure.data import (
    InMemoryTradeStore,
    SampleTradeGenerator,
    StaticBenchmarkProvider,
)
from arbitrage_backtest.infrastructure.data.sample_generator import (
    DEFAULT_NETWORKS,
    DEFAULT_STRATEGIES,
)

DEFAULT_RISK_PARAMETERS = RiskParameters(
    max_position_size=5000,
    max_daily_loss=2000,
    max_drawdown=15,
    stop_loss_percentage=2,
    emergency_stop_loss=10000,
    max_network_exposure=30,
    max_strategy_exposure=40,
    max_transactions_per_hour=50,
    cooldown_after_loss=60000,
    max_volatility=25,
    volatility_window=3600000,
)


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def log_progress(update: ProgressUpdate) -> None:
    logger.info(
        f"Progress {update.progress_pct:.1f}% - {update.trades_processed} trades, "
        f"capital ${update.capital:,.2f}"
    )


def main():
    parser = argparse.ArgumentParser(
        description="Run a backtest over synthetic arbitrage trades",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_sample_backtest.py --seed 42
  python run_sample_backtest.py --slippage dynamic --latency pessimistic --days 90
  python run_sample_backtest.py --output reports/sample.json
        """,
    )

    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--days", type=int, default=30, help="Length of the backtest window in days (default: 30)"
    )
    parser.add_argument(
        "--trades-per-network",
        type=int,
        default=1000,
        help="Synthetic trades generated per network (default: 1000)",
    )
    parser.add_argument("--capital", type=float, default=100000.0, help="Initial capital")
    parser.add_argument(
        "--max-drawdown", type=float, default=15.0, help="Emergency stop drawdown in percent"
    )
    parser.add_argument(
        "--strategies",
        nargs="+",
        default=list(DEFAULT_STRATEGIES[:3]),
        help="Strategies to replay",
    )
    parser.add_argument(
        "--networks", nargs="+", default=list(DEFAULT_NETWORKS[:3]), help="Networks to replay"
    )
    parser.add_argument(
        "--slippage",
        choices=[m.value for m in SlippageModel],
        default=SlippageModel.REALISTIC.value,
    )
    parser.add_argument(
        "--fees", choices=[m.value for m in FeeModel], default=FeeModel.ACTUAL.value
    )
    parser.add_argument(
        "--latency",
        choices=[m.value for m in LatencyModel],
        default=LatencyModel.REALISTIC.value,
    )
    parser.add_argument(
        "--benchmark-return",
        type=float,
        default=None,
        help="Compare against an 'ETH Buy & Hold' benchmark with this return in percent",
    )
    parser.add_argument("--output", type=str, help="Write the JSON report to this path")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    end_date = datetime.now(UTC)
    start_date = end_date - timedelta(days=args.days)

    generator = SampleTradeGenerator(seed=args.seed, end=end_date, span_days=args.days)
    store = InMemoryTradeStore(
        generator.generate_for_networks(args.networks, args.trades_per_network)
    )

    benchmark_provider = None
    benchmark_name = None
    if args.benchmark_return is not None:
        benchmark_name = "ETH Buy & Hold"
        benchmark_provider = StaticBenchmarkProvider({benchmark_name: args.benchmark_return})

    config = BacktestConfig(
        start_date=start_date,
        end_date=end_date,
        initial_capital=args.capital,
        max_drawdown=args.max_drawdown,
        strategies=frozenset(args.strategies),
        networks=frozenset(args.networks),
        risk_parameters=DEFAULT_RISK_PARAMETERS,
        slippage_model=SlippageModel(args.slippage),
        fee_model=FeeModel(args.fees),
        latency_model=LatencyModel(args.latency),
        benchmark_strategy=benchmark_name,
    )

    orchestrator = BacktestOrchestrator(store, benchmark_provider, seed=args.seed)

    try:
        results = orchestrator.run_backtest(config, on_progress=log_progress)
    except BacktestException as e:
        logger.error(f"Backtest failed: {e}")
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(results.to_dict(strict_json=True), indent=2))
        logger.success(f"Report written to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
