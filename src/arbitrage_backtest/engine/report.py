"""
Backtest summary reporting through the application log.
"""

from loguru import logger

from arbitrage_backtest.core.models.backtest import BacktestResults
from arbitrage_backtest.core.types.financial import round_amount, round_percentage

TOP_N = 3


def build_report_lines(results: BacktestResults) -> list[str]:
    """Render the key figures of a backtest as human-readable lines."""
    lines = [
        "BACKTEST REPORT",
        f"ROI: {round_percentage(results.roi):.2f}%",
        f"Net profit: ${round_amount(results.net_profit):,.2f}",
        f"Win rate: {results.win_rate:.1f}%",
        f"Max drawdown: {results.max_drawdown:.2f}%",
        f"Sharpe ratio: {results.sharpe_ratio:.3f}",
        f"Total trades: {results.total_trades}",
    ]

    if results.breached_max_drawdown():
        lines.append(
            f"Emergency stop: drawdown limit {results.config.max_drawdown:.2f}% was breached"
        )

    best_strategies = sorted(
        results.strategy_results.values(), key=lambda s: s.net_profit, reverse=True
    )[:TOP_N]
    if best_strategies:
        lines.append("Top strategies:")
        for rank, strategy in enumerate(best_strategies, start=1):
            lines.append(
                f"  {rank}. {strategy.strategy}: ${round_amount(strategy.net_profit):,.2f} "
                f"({strategy.win_rate:.1f}% win rate)"
            )

    best_networks = sorted(
        results.network_results.values(), key=lambda n: n.net_profit, reverse=True
    )[:TOP_N]
    if best_networks:
        lines.append("Top networks:")
        for rank, network in enumerate(best_networks, start=1):
            lines.append(
                f"  {rank}. {network.network.upper()}: ${round_amount(network.net_profit):,.2f} "
                f"({network.total_trades} trades)"
            )

    comparison = results.benchmark_comparison
    if comparison is not None:
        lines.extend(
            [
                f"Benchmark ({comparison.benchmark}):",
                f"  Our return: {comparison.our_return:.2f}%",
                f"  Benchmark return: {comparison.benchmark_return:.2f}%",
                f"  Alpha: {comparison.alpha:.2f}%",
                f"  Beta: {comparison.beta:.3f}",
            ]
        )

    lines.extend(
        [
            f"Data quality: {results.data_quality:.0f}%",
            f"Confidence: {results.confidence:.0f}%",
            f"Execution time: {results.execution_time:.1f}ms",
        ]
    )
    return lines


def log_backtest_report(results: BacktestResults) -> None:
    """Write the backtest summary to the log."""
    for line in build_report_lines(results):
        logger.info(line)
