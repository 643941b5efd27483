"""
Core type definitions and protocols.

This module defines the callable seams of the engine so collaborators can be
plain functions or objects without inheriting from the data interfaces.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Protocol

from arbitrage_backtest.core.models.backtest import ProgressUpdate
from arbitrage_backtest.core.models.trade import HistoricalTrade


class RandomSource(Protocol):
    """Protocol for the injectable random source used by stochastic cost models.

    random.Random satisfies this protocol; seeding it makes runs reproducible.
    """

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        ...

    def uniform(self, a: float, b: float) -> float:
        """Return a float between a and b."""
        ...


# Type aliases for commonly used callables
ProgressCallback = Callable[[ProgressUpdate], None]
TradeLoaderFn = Callable[[Iterable[str], datetime, datetime], list[HistoricalTrade]]
Clock = Callable[[], float]
