"""Owned simulation context, rebuilt from scratch on every reset."""

from dataclasses import dataclass
from typing import Optional

from ..domain.types import TrainingParameters, EvaluationSettings
from ..domain.world import GridWorld
from ..domain.adversary import AdversaryPolicy
from ..domain.environment import Environment
from ..domain.qlearning import QLearner
from ..domain.training import TrainingLoop
from ..domain.evaluation import EvaluationRunner
from ..utils.rng import SeededRNG


@dataclass
class SimulationContext:
    """Everything one session mutates, owned by the controller."""
    world: GridWorld
    params: TrainingParameters
    settings: EvaluationSettings
    rng: SeededRNG
    learner: QLearner
    training: TrainingLoop
    evaluation: EvaluationRunner

    @classmethod
    def create(cls, world: GridWorld, params: TrainingParameters,
               settings: EvaluationSettings, seed: Optional[int] = None) -> "SimulationContext":
        """Wire up a fresh context around a fixed world."""
        rng = SeededRNG(seed)
        policy = AdversaryPolicy(world, rng)
        learner = QLearner(params, rng)

        # Separate environments so training never moves the observed agent
        training = TrainingLoop(Environment(world, policy), learner, params)
        evaluation = EvaluationRunner(Environment(world, policy), learner, rng, settings)

        return cls(
            world=world,
            params=params,
            settings=settings,
            rng=rng,
            learner=learner,
            training=training,
            evaluation=evaluation,
        )
