"""
Simulation lifecycle enumeration.
"""

from enum import StrEnum


class SimulationState(StrEnum):
    """
    Execution simulator states.

    IDLE -> RUNNING -> COMPLETED | EMERGENCY_STOPPED
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    EMERGENCY_STOPPED = "emergency_stopped"

    @property
    def is_terminal(self) -> bool:
        """Check if the simulation has finished."""
        return self in [self.COMPLETED, self.EMERGENCY_STOPPED]

    def can_transition_to(self, target: "SimulationState") -> bool:
        """Check if moving to the target state is allowed."""
        transitions = {
            SimulationState.IDLE: {SimulationState.RUNNING},
            SimulationState.RUNNING: {
                SimulationState.COMPLETED,
                SimulationState.EMERGENCY_STOPPED,
            },
        }
        return target in transitions.get(self, set())
