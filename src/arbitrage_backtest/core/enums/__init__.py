"""
Core enumerations for the backtesting engine.

This module provides centralized enumerations for domain concepts
like cost model variants and the simulation lifecycle.
"""

from .cost_models import FeeModel, LatencyModel, SlippageModel
from .simulation_state import SimulationState

__all__ = ["SlippageModel", "FeeModel", "LatencyModel", "SimulationState"]
