"""
Backtest engine components.

This module provides the risk gate, cost models, execution simulator,
metrics engine, benchmark comparator and the orchestrator tying them together.
"""

from .benchmark import BenchmarkComparator
from .cost_models import CostModels
from .metrics import MetricsEngine
from .orchestrator import BacktestOrchestrator
from .risk_gate import RiskGate
from .simulator import ExecutionSimulator

__all__ = [
    "BacktestOrchestrator",
    "BenchmarkComparator",
    "CostModels",
    "ExecutionSimulator",
    "MetricsEngine",
    "RiskGate",
]
