"""
Per-trade risk gate.

Decides whether a candidate trade may be admitted to the simulated stream.
"""

from arbitrage_backtest.core.constants import MAX_SINGLE_TRADE_RISK_PERCENT
from arbitrage_backtest.core.models.risk import RiskCheckResult, RiskParameters

REASON_POSITION_SIZE = "position exceeds max size"
REASON_DRAWDOWN = "drawdown exceeds limit"
REASON_POSITION_RISK = "position risk too high"


class RiskGate:
    """Stateless risk admission check.

    Rules are evaluated in order and the first failing rule wins:
    1. position size above RiskParameters.max_position_size
    2. current drawdown above RiskParameters.max_drawdown
    3. position size above MAX_SINGLE_TRADE_RISK_PERCENT of current capital
    """

    @staticmethod
    def check(
        position_size: float,
        current_capital: float,
        current_drawdown_pct: float,
        risk_params: RiskParameters,
    ) -> RiskCheckResult:
        """Evaluate a candidate position against the risk limits.

        Args:
            position_size: Absolute size of the candidate position
            current_capital: Capital before the trade
            current_drawdown_pct: Drawdown from peak capital, in percent
            risk_params: Limits to enforce

        Returns:
            RiskCheckResult with the denial reason when not allowed
        """
        if position_size > risk_params.max_position_size:
            return RiskCheckResult.deny(REASON_POSITION_SIZE)

        if current_drawdown_pct > risk_params.max_drawdown:
            return RiskCheckResult.deny(REASON_DRAWDOWN)

        # Depleted capital cannot carry any position
        if current_capital <= 0:
            return RiskCheckResult.deny(REASON_POSITION_RISK)

        position_risk = position_size / current_capital * 100
        if position_risk > MAX_SINGLE_TRADE_RISK_PERCENT:
            return RiskCheckResult.deny(REASON_POSITION_RISK)

        return RiskCheckResult.allow()
