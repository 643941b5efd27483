"""
In-memory historical trade store.

Reference implementation of the trade loading interface: trades are kept per
network and served filtered by date window and sorted by timestamp.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from threading import RLock

from loguru import logger

from arbitrage_backtest.core.interfaces.data import ITradeLoader
from arbitrage_backtest.core.models.trade import HistoricalTrade


class InMemoryTradeStore(ITradeLoader):
    """Thread-safe per-network trade collection."""

    def __init__(self, trades: Iterable[HistoricalTrade] = ()) -> None:
        self._trades: dict[str, list[HistoricalTrade]] = defaultdict(list)
        self._lock = RLock()
        self.add_trades(trades)

    def add_trades(self, trades: Iterable[HistoricalTrade]) -> int:
        """Add trades to the store.

        Returns:
            Number of trades added
        """
        added = 0
        with self._lock:
            for trade in trades:
                self._trades[trade.network].append(trade)
                added += 1
        if added:
            logger.debug(f"Stored {added} historical trades")
        return added

    def networks(self) -> list[str]:
        """Networks with at least one stored trade."""
        with self._lock:
            return sorted(n for n, trades in self._trades.items() if trades)

    def get_trades(self, network: str) -> list[HistoricalTrade]:
        """All stored trades for a network."""
        with self._lock:
            return list(self._trades.get(network, []))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(trades) for trades in self._trades.values())

    def load_trades(
        self, networks: Iterable[str], start_date: datetime, end_date: datetime
    ) -> list[HistoricalTrade]:
        """Trades of the given networks with start_date <= timestamp < end_date."""
        selected: list[HistoricalTrade] = []
        missing: list[str] = []

        with self._lock:
            for network in networks:
                network_trades = self._trades.get(network)
                if not network_trades:
                    missing.append(network)
                    continue
                selected.extend(
                    t for t in network_trades if start_date <= t.timestamp < end_date
                )

        if missing:
            logger.warning(f"No stored trades for networks: {', '.join(missing)}")

        selected.sort(key=lambda t: t.timestamp)
        logger.info(f"Loaded {len(selected)} trades from in-memory store")
        return selected
