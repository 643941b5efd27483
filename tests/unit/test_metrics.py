"""
Unit tests for performance metrics calculations.
"""

import math
from datetime import UTC, datetime, timedelta

import pytest

from arbitrage_backtest.core.constants import RISK_FREE_RATE_DAILY
from arbitrage_backtest.core.enums import SimulationState
from arbitrage_backtest.core.models.backtest import EquityPoint, SimulationResult
from arbitrage_backtest.core.models.trade import SimulatedTrade
from arbitrage_backtest.engine.metrics import (
    MetricsEngine,
    analyze_drawdowns,
    assess_data_quality,
    calculate_confidence,
    calculate_daily_returns,
    calculate_monthly_returns,
    calculate_network_results,
    calculate_profit_factor,
    calculate_roi,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_strategy_results,
    calculate_win_rate,
    generate_equity_curve,
)

DAY_1 = datetime(2025, 1, 10, 9, tzinfo=UTC)
DAY_2 = datetime(2025, 1, 11, 9, tzinfo=UTC)


@pytest.fixture
def simulate(make_trade):
    """Build a SimulatedTrade whose net profit equals the given value."""

    def factory(profit: float, capital: float = 10000.0, **overrides) -> SimulatedTrade:
        trade = make_trade(expected_profit=profit, gas_cost=0.0, **overrides)
        return SimulatedTrade.from_historical(trade, slippage=0.0, fees=0.0, capital=capital)

    return factory


class TestTradeRatios:
    """Tests for win rate, ROI and profit factor."""

    def test_should_calculate_win_rate(self, simulate) -> None:
        trades = [simulate(10.0), simulate(20.0), simulate(-5.0), simulate(1.0)]
        assert calculate_win_rate(trades) == 75.0

    def test_should_return_zero_win_rate_without_trades(self) -> None:
        assert calculate_win_rate([]) == 0.0

    def test_should_calculate_roi(self) -> None:
        assert calculate_roi(10000.0, 95.0) == pytest.approx(0.95)
        assert calculate_roi(10000.0, -500.0) == pytest.approx(-5.0)

    def test_should_calculate_profit_factor(self, simulate) -> None:
        trades = [simulate(50.0), simulate(-30.0), simulate(25.0), simulate(-15.0)]
        assert calculate_profit_factor(trades) == pytest.approx(75.0 / 45.0)

    def test_should_return_infinite_profit_factor_without_losers(self, simulate) -> None:
        assert calculate_profit_factor([simulate(10.0)]) == math.inf
        assert calculate_profit_factor([]) == math.inf

    def test_should_not_count_break_even_trades_as_losses(self, simulate) -> None:
        """Test that zero-profit trades add to neither gross wins nor gross losses."""
        assert calculate_profit_factor([simulate(10.0), simulate(0.0)]) == math.inf
        assert calculate_profit_factor([simulate(0.0), simulate(0.0)]) == math.inf
        assert calculate_profit_factor([simulate(0.0), simulate(-20.0)]) == 0.0
        assert calculate_profit_factor([simulate(30.0), simulate(0.0), simulate(-10.0)]) == 3.0


class TestDailyReturns:
    """Tests for daily return bucketing and risk-adjusted ratios."""

    def test_should_bucket_profit_by_day_against_running_capital(self, simulate) -> None:
        trades = [
            simulate(100.0, timestamp=DAY_1),
            simulate(100.0, timestamp=DAY_1 + timedelta(hours=2)),
            simulate(-102.0, timestamp=DAY_2),
        ]

        returns = calculate_daily_returns(trades, 10000.0)

        assert returns == pytest.approx([2.0, -1.0])

    def test_should_return_no_daily_returns_without_trades(self) -> None:
        assert calculate_daily_returns([], 10000.0) == []

    def test_should_calculate_sharpe_with_population_std(self) -> None:
        expected = (0.5 - RISK_FREE_RATE_DAILY) / 1.5
        assert calculate_sharpe_ratio([2.0, -1.0]) == pytest.approx(expected)

    @pytest.mark.parametrize("returns", [[], [1.5], [1.0, 1.0, 1.0]])
    def test_should_return_zero_sharpe_for_degenerate_series(self, returns) -> None:
        assert calculate_sharpe_ratio(returns) == 0.0

    def test_should_calculate_sortino_from_downside_deviation(self) -> None:
        # downside deviation = sqrt(mean([1.0])) = 1.0
        expected = 0.5 - RISK_FREE_RATE_DAILY
        assert calculate_sortino_ratio([2.0, -1.0]) == pytest.approx(expected)

    def test_should_return_infinite_sortino_without_negative_days(self) -> None:
        assert calculate_sortino_ratio([1.0, 2.0]) == math.inf

    def test_should_return_zero_sortino_with_single_sample(self) -> None:
        assert calculate_sortino_ratio([-1.0]) == 0.0


class TestEquityCurve:
    """Tests for equity curve and drawdown analysis."""

    def test_should_start_at_initial_capital(self, simulate) -> None:
        trades = [simulate(100.0), simulate(-50.0), simulate(20.0)]

        curve = generate_equity_curve(trades, 1000.0, DAY_1)

        assert len(curve) == len(trades) + 1
        assert curve[0].equity == 1000.0
        assert curve[0].trades == 0
        assert curve[0].timestamp == trades[0].timestamp
        assert [p.equity for p in curve] == [1000.0, 1100.0, 1050.0, 1070.0]
        assert [p.trades for p in curve] == [0, 1, 2, 3]
        assert curve[2].drawdown == pytest.approx(50 / 1100 * 100)

    def test_should_use_start_timestamp_without_trades(self) -> None:
        curve = generate_equity_curve([], 1000.0, DAY_1)
        assert curve == [EquityPoint(timestamp=DAY_1, equity=1000.0, drawdown=0.0, trades=0)]

    def test_should_keep_drawdown_non_negative(self, simulate) -> None:
        trades = [simulate(p) for p in (10.0, -40.0, 70.0, -5.0, -5.0)]
        curve = generate_equity_curve(trades, 500.0, DAY_1)
        assert all(p.drawdown >= 0 for p in curve)

    def test_should_segment_drawdown_periods(self) -> None:
        """Test closed and still-open drawdown runs."""
        equities = [100.0, 110.0, 100.0, 105.0, 120.0, 115.0]
        peak = 0.0
        curve = []
        for i, equity in enumerate(equities):
            peak = max(peak, equity)
            curve.append(
                EquityPoint(
                    timestamp=DAY_1 + timedelta(hours=i),
                    equity=equity,
                    drawdown=(peak - equity) / peak * 100,
                    trades=i,
                )
            )

        max_drawdown, max_duration, periods = analyze_drawdowns(curve)

        assert max_drawdown == pytest.approx(10 / 110 * 100)
        assert max_duration == 2
        assert len(periods) == 2

        closed, still_open = periods
        assert closed.start_date == curve[2].timestamp
        assert closed.end_date == curve[4].timestamp
        assert closed.duration == 2
        assert closed.recovery == 2
        assert closed.max_drawdown == pytest.approx(10 / 110 * 100)
        assert still_open.start_date == curve[5].timestamp
        assert still_open.end_date == curve[5].timestamp
        assert still_open.duration == 1

    def test_should_find_no_periods_on_rising_curve(self, simulate) -> None:
        curve = generate_equity_curve([simulate(1.0), simulate(2.0)], 100.0, DAY_1)
        assert analyze_drawdowns(curve) == (0.0, 0, [])


class TestRollups:
    """Tests for per-strategy, per-network and monthly rollups."""

    def test_should_roll_up_by_strategy(self, simulate) -> None:
        trades = [
            simulate(40.0, strategy="CROSS_DEX", execution_time=1000.0),
            simulate(-10.0, strategy="DEX_TRIANGULAR", execution_time=3000.0),
            simulate(-20.0, strategy="CROSS_DEX", execution_time=2000.0),
        ]

        results = calculate_strategy_results(trades, 10000.0)

        assert list(results) == ["CROSS_DEX", "DEX_TRIANGULAR"]
        cross = results["CROSS_DEX"]
        assert cross.total_trades == 2
        assert cross.net_profit == 20.0
        assert cross.win_rate == 50.0
        assert cross.profit_factor == 2.0
        assert cross.best_trade == 40.0
        assert cross.worst_trade == -20.0
        assert cross.average_execution_time == 1500.0
        assert cross.max_drawdown == pytest.approx(20 / 10040 * 100)

        triangular = results["DEX_TRIANGULAR"]
        assert triangular.best_trade == 0.0
        assert triangular.worst_trade == -10.0
        assert triangular.profit_factor == 0.0

    def test_should_roll_up_by_network(self, simulate) -> None:
        trades = [
            simulate(30.0, network="bsc", execution_time=1000.0),
            simulate(-5.0, network="ethereum", execution_time=2000.0),
            simulate(10.0, network="bsc", execution_time=3000.0),
        ]

        results = calculate_network_results(trades)

        bsc = results["bsc"]
        assert bsc.total_trades == 2
        assert bsc.net_profit == 40.0
        assert bsc.win_rate == 100.0
        assert bsc.profit_factor == math.inf
        assert bsc.average_latency == 2000.0
        assert bsc.average_gas_cost == 0.0
        assert bsc.average_slippage == 0.0
        assert results["ethereum"].worst_trade == -5.0

    def test_should_conserve_trade_counts_and_profit(self, simulate) -> None:
        trades = [
            simulate(12.0, strategy="CROSS_DEX", network="bsc"),
            simulate(-3.0, strategy="DEX_TRIANGULAR", network="ethereum"),
            simulate(7.0, strategy="DEX_TRIANGULAR", network="bsc"),
        ]

        by_strategy = calculate_strategy_results(trades, 10000.0)
        by_network = calculate_network_results(trades)

        assert sum(s.total_trades for s in by_strategy.values()) == 3
        assert sum(n.total_trades for n in by_network.values()) == 3
        assert sum(s.net_profit for s in by_strategy.values()) == pytest.approx(16.0)
        assert sum(n.net_profit for n in by_network.values()) == pytest.approx(16.0)

    def test_should_calculate_monthly_returns_in_order(self, simulate) -> None:
        trades = [
            simulate(100.0, timestamp=datetime(2025, 1, 5, tzinfo=UTC)),
            simulate(-50.0, timestamp=datetime(2025, 1, 6, tzinfo=UTC)),
            simulate(30.0, timestamp=datetime(2025, 1, 6, 12, tzinfo=UTC)),
            simulate(200.0, timestamp=datetime(2025, 2, 1, tzinfo=UTC)),
        ]

        monthly = calculate_monthly_returns(trades, 10000.0)

        assert [(m.year, m.month) for m in monthly] == [(2025, 1), (2025, 2)]
        january = monthly[0]
        assert january.trades == 3
        assert january.return_pct == pytest.approx(0.8)
        assert january.best_day == pytest.approx(1.0)
        assert january.worst_day == pytest.approx(-0.2)
        assert monthly[1].return_pct == pytest.approx(2.0)

    def test_should_return_no_monthly_returns_without_trades(self) -> None:
        assert calculate_monthly_returns([], 10000.0) == []


class TestScores:
    """Tests for data quality and confidence scores."""

    @pytest.mark.parametrize(
        ("count", "score"),
        [(0, 50.0), (99, 50.0), (100, 70.0), (499, 70.0), (500, 85.0), (999, 85.0), (1000, 95.0)],
    )
    def test_should_step_data_quality(self, count, score) -> None:
        assert assess_data_quality(count) == score

    def test_should_score_confidence_from_span(self, make_config) -> None:
        """Test an 89 day window with two strategies and two networks."""
        assert calculate_confidence(0, make_config()) == 60.0

    def test_should_cap_confidence(self, make_config) -> None:
        config = make_config(
            end_date=datetime(2025, 6, 30, tzinfo=UTC),
            strategies={"A", "B", "C"},
            networks={"n1", "n2", "n3", "n4", "n5"},
        )
        assert calculate_confidence(1001, config) == 95.0

    def test_should_add_medium_trade_count_bonus(self, make_config) -> None:
        assert calculate_confidence(501, make_config()) == 70.0


class TestMetricsEngine:
    """Tests for MetricsEngine.compute."""

    def _simulation(self, trades, final_capital=0.0) -> SimulationResult:
        return SimulationResult(
            trades=tuple(trades),
            final_capital=final_capital,
            max_capital=final_capital,
            state=SimulationState.COMPLETED,
            trades_considered=len(trades),
        )

    def test_should_report_empty_run(self, make_config) -> None:
        config = make_config()

        results = MetricsEngine().compute(config, self._simulation([], 10000.0))

        assert results.total_trades == 0
        assert results.roi == 0.0
        assert results.win_rate == 0.0
        assert results.sharpe_ratio == 0.0
        assert results.sortino_ratio == 0.0
        assert results.profit_factor == math.inf
        assert results.max_drawdown == 0.0
        assert results.equity_curve[0].timestamp == config.start_date
        assert len(results.equity_curve) == 1
        assert results.strategy_results == {}
        assert results.monthly_returns == []
        assert results.data_quality == 50.0

    def test_should_aggregate_trade_stream(self, make_config, make_trade) -> None:
        trades = [
            SimulatedTrade.from_historical(
                make_trade(expected_profit=100.0, gas_cost=5.0, timestamp=DAY_1), 1.0, 3.0, 10000.0
            ),
            SimulatedTrade.from_historical(
                make_trade(expected_profit=-20.0, gas_cost=5.0, timestamp=DAY_2), 0.0, 0.0, 10091.0
            ),
        ]

        results = MetricsEngine().compute(make_config(), self._simulation(trades))

        assert results.total_trades == 2
        assert results.successful_trades == 1
        assert results.total_profit == pytest.approx(66.0)
        assert results.total_costs == pytest.approx(14.0)
        assert results.net_profit == pytest.approx(52.0)
        assert results.roi == pytest.approx(0.66)
        assert results.average_win == pytest.approx(91.0)
        assert results.average_loss == pytest.approx(25.0)
        assert results.largest_win == pytest.approx(91.0)
        assert results.largest_loss == pytest.approx(25.0)
        assert results.win_rate == 50.0
        assert len(results.daily_returns) == 2
        assert len(results.equity_curve) == 3
        assert results.equity_curve[-1].equity == pytest.approx(10066.0)
        assert results.simulated_trades == trades
