"""Core type definitions for the hazard grid Q-learning demo."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Literal, Dict, FrozenSet

# Grid positions are (row, col)
Position = Tuple[int, int]

# Actions the agent can take
Action = Literal["up", "down", "left", "right"]
ActionInt = Literal[0, 1, 2, 3]  # Numerical representation

NUM_ACTIONS = 4

# Hazards repeat on a fixed tick cycle
HAZARD_CYCLE = 4

# How an episode ended
Outcome = Literal["goal", "hazard", "adversary", "timeout"]

# Reduced state used to index the value table:
# (agent position, nearest adversary position or None, tick % HAZARD_CYCLE)
StateKey = Tuple[Position, Optional[Position], int]

# Reward model
PROGRESS_REWARD_SCALE = 1.5
HAZARD_REWARD = -50.0
ADVERSARY_REWARD = -100.0
GOAL_REWARD = 500.0


@dataclass(frozen=True)
class Hazard:
    """A periodic hazard, lethal only on its active phases of the cycle."""
    position: Position
    active_phases: FrozenSet[int]

    def is_active(self, tick: int) -> bool:
        """Check whether the hazard is lethal at the given tick."""
        return tick % HAZARD_CYCLE in self.active_phases


@dataclass(frozen=True)
class EpisodeState:
    """Snapshot of a single episode at one tick."""
    agent_position: Position
    adversary_positions: Tuple[Position, ...]
    tick: int = 0
    terminated: bool = False


@dataclass(frozen=True)
class StepResult:
    """Result of one environment transition."""
    state: EpisodeState
    reward: float
    done: bool
    cause: Optional[Outcome] = None


@dataclass(frozen=True)
class TrainingParameters:
    """Hyper-parameters for one training run."""
    learning_rate: float = 0.5
    discount_factor: float = 0.98
    epsilon: float = 1.0
    epsilon_min: float = 0.01
    epsilon_decay: float = 0.9995
    max_episodes: int = 8000
    max_steps_per_episode: int = 80
    batch_size: int = 300  # Episodes per scheduling quantum
    success_reward_threshold: float = 100.0  # Only the goal reward exceeds this

    def __post_init__(self):
        if not (0.0 <= self.learning_rate <= 1.0):
            raise ValueError(f"Learning rate must be between 0.0 and 1.0, got {self.learning_rate}")
        if not (0.0 <= self.discount_factor <= 1.0):
            raise ValueError(f"Discount factor must be between 0.0 and 1.0, got {self.discount_factor}")
        if not (0.0 <= self.epsilon_min <= self.epsilon <= 1.0):
            raise ValueError(
                f"Expected 0 <= epsilon_min <= epsilon <= 1, got {self.epsilon_min} and {self.epsilon}"
            )
        if not (0.0 < self.epsilon_decay <= 1.0):
            raise ValueError(f"Epsilon decay must be in (0, 1], got {self.epsilon_decay}")
        if self.max_episodes <= 0 or self.max_steps_per_episode <= 0 or self.batch_size <= 0:
            raise ValueError("Episode cap, step cap and batch size must be positive")


@dataclass(frozen=True)
class EvaluationSettings:
    """Configuration for observed evaluation runs."""
    step_interval_ms: int = 150  # Pacing for human observation only
    max_steps: int = 120
    min_training_episodes: int = 100

    def __post_init__(self):
        if self.step_interval_ms < 0:
            raise ValueError(f"Step interval must be non-negative, got {self.step_interval_ms}")
        if self.max_steps <= 0:
            raise ValueError(f"Evaluation step cap must be positive, got {self.max_steps}")


@dataclass
class EpisodeRecord:
    """Represents a single training episode."""
    number: int
    steps: int
    total_reward: float
    reached_goal: bool
    outcome: Outcome
    epsilon_used: float


@dataclass
class BatchResult:
    """Result of one training batch."""
    episodes: list[EpisodeRecord] = field(default_factory=list)
    successes: int = 0
    episodes_completed: int = 0
    epsilon: float = 0.0

    @property
    def success_rate(self) -> float:
        """Success rate within this batch."""
        return self.successes / len(self.episodes) if self.episodes else 0.0


@dataclass
class EvaluationResult:
    """Result of an evaluation run."""
    outcome: Outcome
    steps: int
    total_reward: float
    raw: bool

    @property
    def success(self) -> bool:
        """Whether the agent reached the goal."""
        return self.outcome == "goal"


# Action mappings
ACTION_TO_INT: Dict[Action, ActionInt] = {
    "up": 0,
    "down": 1,
    "left": 2,
    "right": 3
}

ACTION_DELTAS: Dict[ActionInt, Position] = {
    0: (-1, 0),  # up
    1: (1, 0),   # down
    2: (0, -1),  # left
    3: (0, 1)    # right
}


# Status names exposed to presentation layers
Status = Literal["IDLE", "TRAINING", "READY", "RUNNING", "SUCCESS", "FAILED"]


@dataclass(frozen=True)
class SimulationSnapshot:
    """Read-only view of the simulation for presentation layers."""
    agent_position: Position
    adversary_positions: Tuple[Position, ...]
    tick: int
    q_table_size: int
    epsilon: float
    episodes: int
    successes: int
    status: Status
    confidence: Optional[float] = None  # None in raw mode or before a run
