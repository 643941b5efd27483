"""
Unit tests for cost model and simulation state enumerations.
"""

import pytest

from arbitrage_backtest.core.enums import FeeModel, LatencyModel, SimulationState, SlippageModel


class TestSlippageModel:
    """Test suite for SlippageModel enum."""

    def test_should_have_string_values(self) -> None:
        """Test enum values match configuration names."""
        assert SlippageModel.FIXED == "fixed"
        assert SlippageModel.DYNAMIC == "dynamic"
        assert SlippageModel.REALISTIC == "realistic"
        assert SlippageModel.ZERO == "zero"

    def test_should_flag_only_dynamic_as_stochastic(self) -> None:
        """Test is_stochastic property."""
        assert SlippageModel.DYNAMIC.is_stochastic
        assert not SlippageModel.FIXED.is_stochastic
        assert not SlippageModel.REALISTIC.is_stochastic
        assert not SlippageModel.ZERO.is_stochastic


class TestFeeModel:
    """Test suite for FeeModel enum."""

    @pytest.mark.parametrize(
        ("model", "rate"),
        [(FeeModel.ACTUAL, 0.003), (FeeModel.ESTIMATED, 0.0025), (FeeModel.ZERO, 0.0)],
    )
    def test_should_return_fee_rate(self, model: FeeModel, rate: float) -> None:
        """Test rate lookup per fee model."""
        assert FeeModel.rate(model) == rate

    def test_should_parse_from_string(self) -> None:
        """Test construction from configuration string."""
        assert FeeModel("estimated") is FeeModel.ESTIMATED


class TestLatencyModel:
    """Test suite for LatencyModel enum."""

    def test_should_return_latency_ranges(self) -> None:
        """Test latency ranges in milliseconds."""
        assert LatencyModel.latency_range_ms(LatencyModel.INSTANT) == (0.0, 0.0)
        assert LatencyModel.latency_range_ms(LatencyModel.REALISTIC) == (500.0, 2500.0)
        assert LatencyModel.latency_range_ms(LatencyModel.PESSIMISTIC) == (1000.0, 6000.0)

    def test_should_flag_instant_as_deterministic(self) -> None:
        """Test is_stochastic property."""
        assert not LatencyModel.INSTANT.is_stochastic
        assert LatencyModel.REALISTIC.is_stochastic
        assert LatencyModel.PESSIMISTIC.is_stochastic

    def test_should_reject_unknown_name(self) -> None:
        """Test invalid latency name."""
        with pytest.raises(ValueError):
            LatencyModel("warp")


class TestSimulationState:
    """Test suite for SimulationState enum."""

    def test_should_allow_forward_transitions(self) -> None:
        """Test legal lifecycle transitions."""
        assert SimulationState.IDLE.can_transition_to(SimulationState.RUNNING)
        assert SimulationState.RUNNING.can_transition_to(SimulationState.COMPLETED)
        assert SimulationState.RUNNING.can_transition_to(SimulationState.EMERGENCY_STOPPED)

    def test_should_reject_backward_and_skipping_transitions(self) -> None:
        """Test illegal lifecycle transitions."""
        assert not SimulationState.IDLE.can_transition_to(SimulationState.COMPLETED)
        assert not SimulationState.COMPLETED.can_transition_to(SimulationState.RUNNING)
        assert not SimulationState.EMERGENCY_STOPPED.can_transition_to(SimulationState.RUNNING)

    def test_should_identify_terminal_states(self) -> None:
        """Test is_terminal property."""
        assert SimulationState.COMPLETED.is_terminal
        assert SimulationState.EMERGENCY_STOPPED.is_terminal
        assert not SimulationState.IDLE.is_terminal
        assert not SimulationState.RUNNING.is_terminal
