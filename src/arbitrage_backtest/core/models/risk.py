"""
Risk management parameters and risk gate decisions.
"""

from dataclasses import asdict, dataclass, fields


@dataclass(frozen=True)
class RiskParameters:
    """Risk limits applied while replaying trades.

    Only max_position_size and max_drawdown are enforced by the risk gate;
    the remaining limits travel with the configuration so reports and
    external layers see the full policy the run was evaluated under.
    """

    max_position_size: float
    max_daily_loss: float
    max_drawdown: float
    stop_loss_percentage: float
    emergency_stop_loss: float
    max_network_exposure: float
    max_strategy_exposure: float
    max_transactions_per_hour: float
    cooldown_after_loss: float
    max_volatility: float
    volatility_window: float

    def negative_fields(self) -> list[str]:
        """Return the names of limits that are below zero."""
        return [f.name for f in fields(self) if getattr(self, f.name) < 0]

    def is_valid(self) -> bool:
        """Validate all limits are non-negative."""
        return not self.negative_fields()

    def to_dict(self) -> dict:
        """Convert parameters to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class RiskCheckResult:
    """Outcome of a single risk gate evaluation."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "RiskCheckResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "RiskCheckResult":
        return cls(allowed=False, reason=reason)
