"""Finite State Machine for simulation execution states."""

import logging
from enum import Enum, auto
from typing import Dict, Callable, Optional

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    """States for training and evaluation execution."""
    IDLE = auto()
    TRAINING = auto()
    READY = auto()
    RUNNING = auto()
    SUCCESS = auto()
    FAILED = auto()


class SimulationStateMachine:
    """State machine guaranteeing at most one active task."""

    def __init__(self):
        self.current_state = SimulationState.IDLE
        self._enter_callbacks: Dict[SimulationState, Callable[[Optional[Dict]], None]] = {}
        self._exit_callbacks: Dict[SimulationState, Callable[[Optional[Dict]], None]] = {}

        # Define valid state transitions
        self._valid_transitions = {
            SimulationState.IDLE: {SimulationState.TRAINING, SimulationState.RUNNING},
            SimulationState.TRAINING: {SimulationState.READY, SimulationState.IDLE},
            SimulationState.READY: {SimulationState.RUNNING, SimulationState.IDLE},
            SimulationState.RUNNING: {SimulationState.SUCCESS, SimulationState.FAILED,
                                      SimulationState.READY, SimulationState.IDLE},
            SimulationState.SUCCESS: {SimulationState.RUNNING, SimulationState.TRAINING,
                                      SimulationState.IDLE},
            SimulationState.FAILED: {SimulationState.RUNNING, SimulationState.TRAINING,
                                     SimulationState.IDLE},
        }

    def on_state_enter(self, state: SimulationState, callback: Callable[[Optional[Dict]], None]):
        """Register callback for state entry."""
        self._enter_callbacks[state] = callback

    def on_state_exit(self, state: SimulationState, callback: Callable[[Optional[Dict]], None]):
        """Register callback for state exit."""
        self._exit_callbacks[state] = callback

    def can_transition(self, to_state: SimulationState) -> bool:
        """Check if transition to target state is valid."""
        return to_state in self._valid_transitions.get(self.current_state, set())

    def transition(self, to_state: SimulationState, context: Optional[Dict] = None) -> bool:
        """Attempt to transition to target state."""
        if not self.can_transition(to_state):
            return False

        from_state = self.current_state

        if from_state in self._exit_callbacks:
            self._exit_callbacks[from_state](context)

        self.current_state = to_state
        logger.debug("State %s -> %s", from_state.name, to_state.name)

        if to_state in self._enter_callbacks:
            self._enter_callbacks[to_state](context)

        return True

    # Convenience methods for common transitions

    def start_training(self, context: Optional[Dict] = None) -> bool:
        return self.transition(SimulationState.TRAINING, context)

    def finish_training(self, context: Optional[Dict] = None) -> bool:
        return self.transition(SimulationState.READY, context)

    def start_running(self, context: Optional[Dict] = None) -> bool:
        return self.transition(SimulationState.RUNNING, context)

    def succeed(self, context: Optional[Dict] = None) -> bool:
        return self.transition(SimulationState.SUCCESS, context)

    def fail(self, context: Optional[Dict] = None) -> bool:
        return self.transition(SimulationState.FAILED, context)

    def reset_to_idle(self, context: Optional[Dict] = None) -> bool:
        """Reset to idle state; already idle counts as success."""
        if self.current_state == SimulationState.IDLE:
            return True
        return self.transition(SimulationState.IDLE, context)

    # State checking methods

    def is_idle(self) -> bool:
        return self.current_state == SimulationState.IDLE

    def is_training(self) -> bool:
        return self.current_state == SimulationState.TRAINING

    def is_running(self) -> bool:
        return self.current_state == SimulationState.RUNNING

    def is_active(self) -> bool:
        """Check if a task is actively running."""
        return self.current_state in {SimulationState.TRAINING, SimulationState.RUNNING}

    def get_state_description(self) -> str:
        """Get human-readable state description."""
        descriptions = {
            SimulationState.IDLE: "Ready - start training or a raw run",
            SimulationState.TRAINING: "Training agent with Q-Learning",
            SimulationState.READY: "Training complete - ready to test",
            SimulationState.RUNNING: "Running evaluation episode",
            SimulationState.SUCCESS: "Agent reached the goal",
            SimulationState.FAILED: "Agent failed to reach the goal",
        }
        return descriptions.get(self.current_state, "Unknown state")
