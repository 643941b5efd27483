"""
Performance metrics for simulated trade streams.

Pure aggregation over the ordered SimulatedTrade sequence and the initial
capital. Undefined ratios resolve to sentinel values (0.0 or inf) so the
report is always fully populated.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd
from loguru import logger

from arbitrage_backtest.core.constants import (
    CONFIDENCE_BASE,
    CONFIDENCE_CAP,
    CONFIDENCE_HIGH_TRADE_COUNT,
    CONFIDENCE_LONG_SPAN_DAYS,
    CONFIDENCE_MEDIUM_SPAN_DAYS,
    CONFIDENCE_MEDIUM_TRADE_COUNT,
    CONFIDENCE_MIN_NETWORKS,
    CONFIDENCE_MIN_STRATEGIES,
    DATA_QUALITY_MAX,
    DATA_QUALITY_STEPS,
    MIN_RETURN_SAMPLES,
    RISK_FREE_RATE_DAILY,
)
from arbitrage_backtest.core.models.backtest import (
    BacktestConfig,
    BacktestResults,
    DrawdownPeriod,
    EquityPoint,
    MonthlyReturn,
    NetworkBacktestResults,
    SimulationResult,
    StrategyBacktestResults,
)
from arbitrage_backtest.core.models.trade import SimulatedTrade
from arbitrage_backtest.core.types.financial import (
    INFINITY,
    ZERO,
    as_percentage,
    drawdown_percentage,
)


def _trades_frame(trades: Sequence[SimulatedTrade]) -> pd.DataFrame:
    """Build a DataFrame view of the trade stream, one row per trade in order."""
    return pd.DataFrame(
        {
            "day": [t.timestamp.date() for t in trades],
            "year": [t.timestamp.year for t in trades],
            "month": [t.timestamp.month for t in trades],
            "strategy": [t.strategy for t in trades],
            "network": [t.network for t in trades],
            "actual_profit": [t.actual_profit for t in trades],
        }
    )


def calculate_win_rate(trades: Sequence[SimulatedTrade]) -> float:
    """Percentage of successful trades, 0 when there are none."""
    if not trades:
        return ZERO
    successful = sum(1 for t in trades if t.success)
    return successful / len(trades) * 100


def calculate_roi(initial_capital: float, total_profit: float) -> float:
    """Return on investment in percent."""
    return ((initial_capital + total_profit) / initial_capital - 1) * 100


def calculate_daily_returns(
    trades: Sequence[SimulatedTrade], initial_capital: float
) -> list[float]:
    """Bucket profit by calendar day and express it against start-of-day capital.

    Days appear in first-seen order; capital advances additively day by day.
    """
    if not trades:
        return []

    day_profits = _trades_frame(trades).groupby("day", sort=False)["actual_profit"].sum()

    daily_returns: list[float] = []
    capital = initial_capital
    for profit in day_profits:
        daily_returns.append(float(as_percentage(profit, capital)))
        capital += float(profit)
    return daily_returns


def calculate_sharpe_ratio(daily_returns: Sequence[float]) -> float:
    """Daily Sharpe ratio over a 2% annual risk-free rate.

    Returns 0 with fewer than two samples or zero volatility.
    """
    if len(daily_returns) < MIN_RETURN_SAMPLES:
        return ZERO

    returns = np.asarray(daily_returns, dtype=float)
    std_dev = float(returns.std())
    if std_dev <= 0:
        return ZERO
    return float((returns.mean() - RISK_FREE_RATE_DAILY) / std_dev)


def calculate_sortino_ratio(daily_returns: Sequence[float]) -> float:
    """Daily Sortino ratio using the downside deviation of negative returns.

    Returns 0 with fewer than two samples and inf when no return is negative.
    """
    if len(daily_returns) < MIN_RETURN_SAMPLES:
        return ZERO

    returns = np.asarray(daily_returns, dtype=float)
    negative = returns[returns < 0]
    if negative.size == 0:
        return INFINITY

    downside_dev = float(np.sqrt(np.mean(negative**2)))
    if downside_dev <= 0:
        return ZERO
    return float((returns.mean() - RISK_FREE_RATE_DAILY) / downside_dev)


def calculate_profit_factor(trades: Sequence[SimulatedTrade]) -> float:
    """Gross wins over gross losses; inf when there is no losing trade."""
    losing = [-t.actual_profit for t in trades if t.actual_profit < ZERO]
    if not losing:
        return INFINITY

    gross_win = sum(t.actual_profit for t in trades if t.actual_profit > ZERO)
    return gross_win / sum(losing)


def generate_equity_curve(
    trades: Sequence[SimulatedTrade], initial_capital: float, start: datetime
) -> list[EquityPoint]:
    """Build the equity curve: one initial point plus one point per trade.

    Args:
        trades: Simulated trades in replay order
        initial_capital: Equity of the initial point
        start: Timestamp of the initial point when there are no trades

    Returns:
        List of equity points of length len(trades) + 1
    """
    equity = initial_capital
    peak = initial_capital
    curve = [
        EquityPoint(
            timestamp=trades[0].timestamp if trades else start,
            equity=equity,
            drawdown=ZERO,
            trades=0,
        )
    ]

    for count, trade in enumerate(trades, start=1):
        equity += trade.actual_profit
        if equity > peak:
            peak = equity
        curve.append(
            EquityPoint(
                timestamp=trade.timestamp,
                equity=equity,
                drawdown=drawdown_percentage(peak, equity),
                trades=count,
            )
        )

    return curve


def analyze_drawdowns(curve: Sequence[EquityPoint]) -> tuple[float, int, list[DrawdownPeriod]]:
    """Segment the equity curve into drawdown periods.

    A period is a maximal run of consecutive points with drawdown > 0,
    including a run still open at the end of the curve. Duration and recovery
    are the number of points in the run.

    Returns:
        (max drawdown %, longest period in points, periods)
    """
    periods: list[DrawdownPeriod] = []
    run_start: int | None = None
    run_max = ZERO

    def close_run(end_index: int) -> None:
        length = end_index - run_start
        periods.append(
            DrawdownPeriod(
                start_date=curve[run_start].timestamp,
                end_date=curve[min(end_index, len(curve) - 1)].timestamp,
                duration=length,
                max_drawdown=run_max,
                recovery=length,
            )
        )

    for index, point in enumerate(curve):
        if point.drawdown > 0:
            if run_start is None:
                run_start = index
                run_max = point.drawdown
            else:
                run_max = max(run_max, point.drawdown)
        elif run_start is not None:
            close_run(index)
            run_start = None
            run_max = ZERO

    if run_start is not None:
        close_run(len(curve))

    max_drawdown = max((p.drawdown for p in curve), default=ZERO)
    max_duration = max((p.duration for p in periods), default=0)
    return max_drawdown, max_duration, periods


def _trade_statistics(trades: Sequence[SimulatedTrade]) -> dict[str, Any]:
    """Win rate, profit, profit factor and best/worst trade for a group."""
    wins = [t.actual_profit for t in trades if t.success]
    losses = [abs(t.actual_profit) for t in trades if not t.success]
    return {
        "total_trades": len(trades),
        "net_profit": sum(t.actual_profit for t in trades),
        "win_rate": calculate_win_rate(trades),
        "profit_factor": calculate_profit_factor(trades),
        "best_trade": max(wins) if wins else ZERO,
        "worst_trade": -max(losses) if losses else ZERO,
    }


def _group_trades(
    trades: Sequence[SimulatedTrade], column: str
) -> list[tuple[str, list[SimulatedTrade]]]:
    """Group trades by a column, keeping first-seen group order and trade order."""
    if not trades:
        return []
    frame = _trades_frame(trades)
    return [
        (str(key), [trades[i] for i in group.index])
        for key, group in frame.groupby(column, sort=False)
    ]


def calculate_strategy_results(
    trades: Sequence[SimulatedTrade], initial_capital: float
) -> dict[str, StrategyBacktestResults]:
    """Roll simulated trades up per strategy."""
    results: dict[str, StrategyBacktestResults] = {}
    for strategy, group in _group_trades(trades, "strategy"):
        curve = generate_equity_curve(group, initial_capital, group[0].timestamp)
        results[strategy] = StrategyBacktestResults(
            strategy=strategy,
            sharpe_ratio=calculate_sharpe_ratio(calculate_daily_returns(group, initial_capital)),
            max_drawdown=max(p.drawdown for p in curve),
            average_execution_time=float(np.mean([t.execution_time for t in group])),
            **_trade_statistics(group),
        )
    return results


def calculate_network_results(
    trades: Sequence[SimulatedTrade],
) -> dict[str, NetworkBacktestResults]:
    """Roll simulated trades up per network."""
    results: dict[str, NetworkBacktestResults] = {}
    for network, group in _group_trades(trades, "network"):
        results[network] = NetworkBacktestResults(
            network=network,
            average_gas_cost=float(np.mean([t.gas_cost for t in group])),
            average_slippage=float(np.mean([t.slippage for t in group])),
            average_latency=float(np.mean([t.execution_time for t in group])),
            **_trade_statistics(group),
        )
    return results


def calculate_monthly_returns(
    trades: Sequence[SimulatedTrade], initial_capital: float
) -> list[MonthlyReturn]:
    """Monthly profit and best/worst day, all relative to initial capital."""
    if not trades:
        return []

    monthly: list[MonthlyReturn] = []
    for (year, month), group in _trades_frame(trades).groupby(["year", "month"]):
        day_profits = group.groupby("day")["actual_profit"].sum()
        monthly.append(
            MonthlyReturn(
                year=int(year),
                month=int(month),
                return_pct=as_percentage(float(group["actual_profit"].sum()), initial_capital),
                trades=len(group),
                best_day=as_percentage(float(day_profits.max()), initial_capital),
                worst_day=as_percentage(float(day_profits.min()), initial_capital),
            )
        )
    return monthly


def assess_data_quality(trade_count: int) -> float:
    """Step score of how much the sample size supports the statistics."""
    for threshold, score in DATA_QUALITY_STEPS:
        if trade_count < threshold:
            return score
    return DATA_QUALITY_MAX


def calculate_confidence(trade_count: int, config: BacktestConfig) -> float:
    """Confidence score from sample size, date span and breadth of the config."""
    confidence = CONFIDENCE_BASE

    if trade_count > CONFIDENCE_HIGH_TRADE_COUNT:
        confidence += 20
    elif trade_count > CONFIDENCE_MEDIUM_TRADE_COUNT:
        confidence += 10

    days_covered = config.duration_days()
    if days_covered > CONFIDENCE_LONG_SPAN_DAYS:
        confidence += 20
    elif days_covered > CONFIDENCE_MEDIUM_SPAN_DAYS:
        confidence += 10

    if len(config.strategies) >= CONFIDENCE_MIN_STRATEGIES:
        confidence += 10
    if len(config.networks) >= CONFIDENCE_MIN_NETWORKS:
        confidence += 10

    return min(confidence, CONFIDENCE_CAP)


class MetricsEngine:
    """Builds a BacktestResults report from a simulation pass."""

    def compute(self, config: BacktestConfig, simulation: SimulationResult) -> BacktestResults:
        """Compute every report statistic for the simulated trade stream.

        Args:
            config: Configuration the simulation ran under
            simulation: Output of ExecutionSimulator.run

        Returns:
            BacktestResults without benchmark comparison or execution time
        """
        trades = list(simulation.trades)
        initial_capital = config.initial_capital
        logger.info(f"Calculating performance metrics for {len(trades)} simulated trades")

        wins = [t.actual_profit for t in trades if t.success]
        losses = [abs(t.actual_profit) for t in trades if not t.success]
        total_profit = sum(t.actual_profit for t in trades)
        total_costs = sum(t.total_cost for t in trades)

        daily_returns = calculate_daily_returns(trades, initial_capital)
        equity_curve = generate_equity_curve(trades, initial_capital, config.start_date)
        max_drawdown, max_drawdown_duration, drawdown_periods = analyze_drawdowns(equity_curve)

        return BacktestResults(
            config=config,
            total_trades=len(trades),
            successful_trades=len(wins),
            total_profit=total_profit,
            total_costs=total_costs,
            net_profit=total_profit - total_costs,
            roi=calculate_roi(initial_capital, total_profit),
            sharpe_ratio=calculate_sharpe_ratio(daily_returns),
            sortino_ratio=calculate_sortino_ratio(daily_returns),
            max_drawdown=max_drawdown,
            max_drawdown_duration=max_drawdown_duration,
            win_rate=calculate_win_rate(trades),
            profit_factor=calculate_profit_factor(trades),
            average_win=sum(wins) / len(wins) if wins else ZERO,
            average_loss=sum(losses) / len(losses) if losses else ZERO,
            largest_win=max(wins) if wins else ZERO,
            largest_loss=max(losses) if losses else ZERO,
            strategy_results=calculate_strategy_results(trades, initial_capital),
            network_results=calculate_network_results(trades),
            monthly_returns=calculate_monthly_returns(trades, initial_capital),
            daily_returns=daily_returns,
            equity_curve=equity_curve,
            drawdown_analysis=drawdown_periods,
            data_quality=assess_data_quality(len(trades)),
            confidence=calculate_confidence(len(trades), config),
            simulated_trades=trades,
        )
