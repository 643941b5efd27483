"""
Synthetic historical trade generation for demos and tests.
"""

import random
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from arbitrage_backtest.core.models.trade import HistoricalTrade
from arbitrage_backtest.core.utils.validation import validate_non_negative

DEFAULT_STRATEGIES = ("DEX_TRIANGULAR", "CROSS_DEX", "FLASH_ARBITRAGE", "LIQUIDATION")
DEFAULT_NETWORKS = ("ethereum", "bsc", "polygon", "arbitrum", "optimism")


class SampleTradeGenerator:
    """Generates reproducible synthetic arbitrage trades.

    Value ranges per trade:
    - expected profit: -50 to +150
    - gas cost: 5 to 25
    - execution time: 1s to 6s
    - volatility: 10 to 60
    - liquidity: 100k to 1.1M
    - gas price: 20 to 120
    - raw success: ~70%
    """

    def __init__(
        self,
        seed: int | None = None,
        strategies: Iterable[str] = DEFAULT_STRATEGIES,
        end: datetime | None = None,
        span_days: int = 30,
    ) -> None:
        self.rng = random.Random(seed)
        self.strategies = tuple(strategies)
        self.end = end or datetime.now(UTC)
        self.span_days = span_days

    def generate(self, network: str, count: int) -> list[HistoricalTrade]:
        """Generate trades for one network spread over the last span_days.

        Returns:
            Trades sorted by timestamp
        """
        validate_non_negative(count, "count")
        rng = self.rng
        span = timedelta(days=self.span_days)
        trades = []

        for i in range(count):
            strategy = rng.choice(self.strategies)
            trades.append(
                HistoricalTrade(
                    id=f"{network}_{strategy}_{i}",
                    timestamp=self.end - span * rng.random(),
                    network=network,
                    strategy=strategy,
                    entry_price=100 + rng.random() * 900,
                    exit_price=100 + rng.random() * 900,
                    expected_profit=rng.random() * 200 - 50,
                    gas_cost=rng.random() * 20 + 5,
                    execution_time=rng.random() * 5000 + 1000,
                    success=rng.random() > 0.3,
                    volatility=rng.random() * 50 + 10,
                    liquidity=rng.random() * 1_000_000 + 100_000,
                    gas_price=rng.random() * 100 + 20,
                )
            )

        return sorted(trades, key=lambda t: t.timestamp)

    def generate_for_networks(
        self, networks: Iterable[str] = DEFAULT_NETWORKS, count: int = 1000
    ) -> list[HistoricalTrade]:
        """Generate count trades for each network."""
        trades: list[HistoricalTrade] = []
        for network in networks:
            trades.extend(self.generate(network, count))
        return trades
