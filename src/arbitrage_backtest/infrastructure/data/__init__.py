"""
Historical trade data infrastructure.

This module provides in-memory trade storage, tabular trade ingestion,
synthetic trade generation and static benchmark supply.
"""

from .benchmark_provider import StaticBenchmarkProvider
from .sample_generator import SampleTradeGenerator
from .trade_frame import TradeFrameValidator, trades_from_frame, trades_to_frame
from .trade_store import InMemoryTradeStore

__all__ = [
    "InMemoryTradeStore",
    "SampleTradeGenerator",
    "StaticBenchmarkProvider",
    "TradeFrameValidator",
    "trades_from_frame",
    "trades_to_frame",
]
