"""
Chronological execution simulator.

Replays historical trades in timestamp order under the configured cost models
and risk gate, tracking running capital and drawdown. All state is path
dependent, so the replay is strictly sequential.
"""

from collections.abc import Sequence

from loguru import logger

from arbitrage_backtest.core.constants import PROGRESS_INTERVAL_TRADES
from arbitrage_backtest.core.enums import SimulationState
from arbitrage_backtest.core.exceptions.backtest import CalculationError
from arbitrage_backtest.core.models.backtest import BacktestConfig, ProgressUpdate, SimulationResult
from arbitrage_backtest.core.models.trade import HistoricalTrade, SimulatedTrade
from arbitrage_backtest.core.protocols import ProgressCallback
from arbitrage_backtest.core.types.financial import as_percentage, drawdown_percentage
from arbitrage_backtest.core.utils.validation import validate_positive

from .cost_models import CostModels
from .risk_gate import RiskGate


class ExecutionSimulator:
    """Single-pass trade replay engine.

    An instance is good for exactly one run:
    IDLE -> RUNNING -> COMPLETED | EMERGENCY_STOPPED
    """

    def __init__(
        self,
        config: BacktestConfig,
        cost_models: CostModels,
        risk_gate: RiskGate | None = None,
        on_progress: ProgressCallback | None = None,
        progress_interval: int = PROGRESS_INTERVAL_TRADES,
    ):
        self.config = config
        self.cost_models = cost_models
        self.risk_gate = risk_gate or RiskGate()
        self.on_progress = on_progress
        self.progress_interval = int(validate_positive(progress_interval, "progress_interval"))

        self.state = SimulationState.IDLE
        self.capital = config.initial_capital
        self.max_capital = config.initial_capital
        self.drawdown = 0.0

    def _transition(self, target: SimulationState) -> None:
        if not self.state.can_transition_to(target):
            raise CalculationError(f"Invalid simulator transition {self.state} -> {target}")
        self.state = target

    def _notify_progress(self, processed: int, total: int) -> None:
        """Fire the advisory progress callback; its failures never reach the replay."""
        if self.on_progress is None:
            return
        update = ProgressUpdate(
            progress_pct=as_percentage(processed, total),
            trades_processed=processed,
            capital=self.capital,
        )
        logger.debug(f"Simulation progress: {update.progress_pct:.1f}% ({processed}/{total})")
        try:
            self.on_progress(update)
        except Exception as e:
            logger.error(f"Progress callback failed: {e}")

    def _process_trade(self, trade: HistoricalTrade) -> SimulatedTrade | None:
        """Run one trade through costs, execution and the risk gate."""
        if not self.config.accepts(trade.strategy, trade.network):
            return None

        costs = self.cost_models.evaluate(trade)
        if not costs.executed:
            logger.debug(f"Trade {trade.id} missed after {costs.latency_ms:.0f}ms latency")
            return None

        net_profit = trade.expected_profit - costs.slippage - costs.fees - trade.gas_cost

        risk_check = self.risk_gate.check(
            abs(net_profit), self.capital, self.drawdown, self.config.risk_parameters
        )
        if not risk_check.allowed:
            logger.debug(f"Trade {trade.id} rejected by risk gate: {risk_check.reason}")
            return None

        return SimulatedTrade.from_historical(trade, costs.slippage, costs.fees, self.capital)

    def _apply(self, simulated: SimulatedTrade) -> None:
        """Update capital, peak capital and drawdown after an admitted trade."""
        self.capital += simulated.actual_profit
        if self.capital > self.max_capital:
            self.max_capital = self.capital
            self.drawdown = 0.0
        else:
            self.drawdown = drawdown_percentage(self.max_capital, self.capital)

    def run(self, trades: Sequence[HistoricalTrade]) -> SimulationResult:
        """Replay trades and return the admitted, annotated trade stream.

        Args:
            trades: Historical trades in any order; the input is not modified

        Returns:
            SimulationResult with the simulated trades and capital trajectory
        """
        self._transition(SimulationState.RUNNING)

        ordered = sorted(trades, key=lambda t: t.timestamp)
        total = len(ordered)
        simulated_trades: list[SimulatedTrade] = []
        processed = 0

        logger.info(f"Simulating {total} historical trades")

        for trade in ordered:
            processed += 1
            simulated = self._process_trade(trade)

            if simulated is not None:
                simulated_trades.append(simulated)
                self._apply(simulated)

                if self.drawdown > self.config.max_drawdown:
                    logger.warning(
                        f"Emergency stop: drawdown {self.drawdown:.2f}% exceeds "
                        f"{self.config.max_drawdown:.2f}% after {len(simulated_trades)} trades"
                    )
                    self._transition(SimulationState.EMERGENCY_STOPPED)
                    break

            if processed % self.progress_interval == 0:
                self._notify_progress(processed, total)

        if self.state == SimulationState.RUNNING:
            self._transition(SimulationState.COMPLETED)

        logger.info(
            f"Simulation {self.state}: {len(simulated_trades)}/{total} trades admitted, "
            f"final capital {self.capital:.2f}"
        )

        return SimulationResult(
            trades=tuple(simulated_trades),
            final_capital=self.capital,
            max_capital=self.max_capital,
            state=self.state,
            trades_considered=processed,
        )
