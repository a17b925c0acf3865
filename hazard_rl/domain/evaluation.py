"""Single observed episode using the learned policy or random actions."""

import logging
from typing import Optional
from .types import EvaluationResult, EvaluationSettings, NUM_ACTIONS, StepResult
from .environment import Environment
from .qlearning import QLearner
from ..utils.rng import SeededRNG

logger = logging.getLogger(__name__)


class EvaluationRunner:
    """
    Steps one episode at a time for observation.

    The runner only reads the value table. Pacing belongs to the caller:
    each ``step`` call is one logical tick regardless of wall-clock delay.
    """

    def __init__(self, env: Environment, learner: QLearner, rng: SeededRNG,
                 settings: EvaluationSettings):
        self.env = env
        self.learner = learner
        self.rng = rng
        self.settings = settings
        self.raw = False
        self.running = False
        self.steps = 0
        self.total_reward = 0.0
        self.confidence: Optional[float] = None
        self.last_step: Optional[StepResult] = None
        self.result: Optional[EvaluationResult] = None

    def start(self, raw: bool = False) -> None:
        """Begin a new run from the initial layout."""
        self.env.reset()
        self.raw = raw
        self.running = True
        self.steps = 0
        self.total_reward = 0.0
        self.confidence = None
        self.last_step = None
        self.result = None

    def cancel(self) -> None:
        """Stop the run early; learned values are never touched."""
        self.running = False

    def step(self) -> Optional[EvaluationResult]:
        """
        Execute one step of the run.

        Returns:
            The final result if the run ended on this step, otherwise None
        """
        if not self.running:
            return self.result

        if self.raw:
            action = self.rng.randint(0, NUM_ACTIONS - 1)
            self.confidence = None
        else:
            key = self.env.state_key()
            action = self.learner.select_action(key, explore=False)
            self.confidence = self.learner.confidence(key)

        result = self.env.step(action)
        self.last_step = result
        self.steps += 1
        self.total_reward += result.reward

        if result.done:
            return self._finish(result.cause)
        if self.env.state.tick > self.settings.max_steps:
            return self._finish("timeout")
        return None

    def _finish(self, outcome) -> EvaluationResult:
        self.running = False
        self.result = EvaluationResult(
            outcome=outcome,
            steps=self.steps,
            total_reward=self.total_reward,
            raw=self.raw,
        )
        logger.info("Evaluation finished (%s mode): %s after %d steps",
                    "raw" if self.raw else "policy", outcome, self.steps)
        return self.result
