"""Main application controller connecting hosts to the simulation core."""

import logging
from typing import Optional, Tuple
from PySide6.QtCore import QObject, QTimer, Signal

from ..domain.types import (
    TrainingParameters, EvaluationSettings, BatchResult, EvaluationResult,
    SimulationSnapshot
)
from ..domain.world import GridWorld
from ..utils.world_factory import create_default_world
from ..utils.status_log import StatusLog
from .context import SimulationContext
from .fsm import SimulationStateMachine, SimulationState

logger = logging.getLogger(__name__)

READY_MESSAGE = "System ready. Choose a mode..."
RESET_MESSAGE = "Core cleared. Waiting..."

OUTCOME_MESSAGES = {
    "goal": "MISSION: SUCCESS.",
    "hazard": "AGENT DESTROYED: laser",
    "adversary": "AGENT DESTROYED: patrol",
    "timeout": "TIME EXPIRED",
}


class SimulationController(QObject):
    """
    Controller that owns the simulation context and schedules work on the
    Qt event loop.

    Training runs one batch per event-loop turn; evaluation advances one
    step per timer tick. Both drivers are public so hosts without an event
    loop can call them directly.

    Signals:
        state_changed: Emitted when the simulation state changes
        batch_completed: Emitted after each training batch
        training_completed: Emitted when the episode budget is spent
        evaluation_stepped: Emitted after each evaluation step
        evaluation_finished: Emitted when an evaluation run ends
        log_added: Emitted when a status message is added
        command_rejected: Emitted when a command's preconditions fail
    """

    # Qt Signals
    state_changed = Signal(object)  # SimulationState
    batch_completed = Signal(object)  # BatchResult
    training_completed = Signal(int, int)  # episodes, successes
    evaluation_stepped = Signal(object)  # SimulationSnapshot
    evaluation_finished = Signal(object)  # EvaluationResult
    log_added = Signal(str)
    command_rejected = Signal(str)

    def __init__(self, world: Optional[GridWorld] = None,
                 params: Optional[TrainingParameters] = None,
                 settings: Optional[EvaluationSettings] = None,
                 seed: Optional[int] = None,
                 log_capacity: int = 4):
        super().__init__()

        self._world = world or create_default_world()
        self._params = params or TrainingParameters()
        self._settings = settings or EvaluationSettings()
        self._seed = seed

        # Core components
        self._context = self._create_context()
        self._state_machine = SimulationStateMachine()
        self._log = StatusLog(log_capacity, READY_MESSAGE)

        # Training yields to the event loop between batches
        self._training_timer = QTimer(self)
        self._training_timer.setSingleShot(True)
        self._training_timer.timeout.connect(self._on_training_tick)

        # Evaluation is paced for human observation
        self._evaluation_timer = QTimer(self)
        self._evaluation_timer.timeout.connect(self._on_evaluation_tick)

        self._setup_state_callbacks()

    def _create_context(self) -> SimulationContext:
        return SimulationContext.create(self._world, self._params, self._settings, self._seed)

    def _setup_state_callbacks(self):
        """Setup callbacks for state machine transitions."""
        for state in SimulationState:
            self._state_machine.on_state_enter(state, self._make_enter_callback(state))

    def _make_enter_callback(self, state: SimulationState):
        def on_enter(context):
            self.state_changed.emit(state)
        return on_enter

    # Properties

    @property
    def context(self) -> SimulationContext:
        """Get the current simulation context."""
        return self._context

    @property
    def world(self) -> GridWorld:
        return self._world

    @property
    def params(self) -> TrainingParameters:
        return self._params

    @property
    def settings(self) -> EvaluationSettings:
        return self._settings

    @property
    def current_state(self) -> SimulationState:
        """Get the current simulation state."""
        return self._state_machine.current_state

    @property
    def logs(self) -> Tuple[str, ...]:
        """Recent status messages, most recent first."""
        return self._log.messages()

    def snapshot(self) -> SimulationSnapshot:
        """Read-only view of the observed episode and learning progress."""
        ctx = self._context
        state = ctx.evaluation.env.state
        return SimulationSnapshot(
            agent_position=state.agent_position,
            adversary_positions=state.adversary_positions,
            tick=state.tick,
            q_table_size=len(ctx.learner.table),
            epsilon=ctx.learner.epsilon,
            episodes=ctx.training.episodes_completed,
            successes=ctx.training.successes,
            status=self._state_machine.current_state.name,
            confidence=None if ctx.evaluation.raw else ctx.evaluation.confidence,
        )

    # Commands

    def start_training(self) -> bool:
        """Start batched training on the event loop."""
        if self._state_machine.is_active():
            return self._reject(
                f"Cannot start training while {self.current_state.name.lower()} is active"
            )
        if self._context.training.is_complete:
            return self._reject("Training budget already spent. Reset to train again.")
        if not self._state_machine.start_training():
            return self._reject(f"Cannot start training from {self.current_state.name}")

        self._add_log("Training started...")
        logger.info("Training started: %d episodes remaining",
                    self._context.training.remaining_episodes)
        self._training_timer.start(0)
        return True

    def run_training_batch(self) -> Optional[BatchResult]:
        """Run one training batch; returns None unless training is active."""
        if not self._state_machine.is_training():
            return None

        training = self._context.training
        batch = training.run_batch()
        self.batch_completed.emit(batch)

        if batch.successes > 0:
            self._add_log(f"Batch success: +{batch.successes}")

        if training.is_complete:
            self._training_timer.stop()
            self._state_machine.finish_training()
            self._add_log("Agent trained. Ready to test.")
            self.training_completed.emit(training.episodes_completed, training.successes)
        return batch

    def start_evaluation(self, raw: bool = False) -> bool:
        """Start an observed run with the learned policy or random actions."""
        if self._state_machine.is_active():
            return self._reject(
                f"Cannot start evaluation while {self.current_state.name.lower()} is active"
            )

        episodes = self._context.training.episodes_completed
        minimum = self._settings.min_training_episodes
        if not raw and episodes < minimum:
            return self._reject(
                f"Insufficient training. Completed {episodes} episodes, but need at least {minimum}."
            )
        if not self._state_machine.start_running():
            return self._reject(f"Cannot start evaluation from {self.current_state.name}")

        self._context.evaluation.start(raw)
        self._add_log("Launching without learned policy..." if raw else "Launching policy test...")
        self._evaluation_timer.start(self._settings.step_interval_ms)
        return True

    def step_evaluation(self) -> Optional[EvaluationResult]:
        """Advance the evaluation by one step; returns the result once it ends."""
        if not self._state_machine.is_running():
            return None

        result = self._context.evaluation.step()
        self.evaluation_stepped.emit(self.snapshot())

        if result is not None:
            self._evaluation_timer.stop()
            if result.success:
                self._state_machine.succeed()
            else:
                self._state_machine.fail()
            self._add_log(OUTCOME_MESSAGES[result.outcome])
            self.evaluation_finished.emit(result)
        return result

    def stop_evaluation(self) -> bool:
        """Cancel a running evaluation; learned values stay untouched."""
        if not self._state_machine.is_running():
            return self._reject("No evaluation is running")

        self._evaluation_timer.stop()
        self._context.evaluation.cancel()
        if self._context.training.is_complete:
            self._state_machine.finish_training()
        else:
            self._state_machine.reset_to_idle()
        self._add_log("Evaluation stopped.")
        return True

    def reset(self) -> bool:
        """Stop everything and rebuild the context from scratch."""
        self._training_timer.stop()
        self._evaluation_timer.stop()
        self._context.evaluation.cancel()

        self._context = self._create_context()
        self._state_machine.reset_to_idle()
        self._log.clear(RESET_MESSAGE)
        self.log_added.emit(RESET_MESSAGE)
        logger.info("Simulation reset")
        return True

    def cleanup(self):
        """Stop timers before the host shuts down."""
        self._training_timer.stop()
        self._evaluation_timer.stop()

    # Internals

    def _on_training_tick(self):
        self.run_training_batch()
        if self._state_machine.is_training():
            self._training_timer.start(0)

    def _on_evaluation_tick(self):
        self.step_evaluation()

    def _add_log(self, message: str):
        self._log.add(message)
        self.log_added.emit(message)

    def _reject(self, reason: str) -> bool:
        logger.warning("Command rejected: %s", reason)
        self.command_rejected.emit(reason)
        return False
