"""Tabular Q-learning: value table, update rule and epsilon-greedy policy."""

import numpy as np
from typing import Dict, Iterator, Tuple
from .types import ActionInt, StateKey, TrainingParameters, NUM_ACTIONS
from ..utils.rng import SeededRNG


class QTable:
    """
    Sparse value table keyed by reduced state.

    Rows are created lazily as zero vectors by ``row``; ``peek`` reads a row
    without inserting it.
    """

    def __init__(self):
        self._rows: Dict[StateKey, np.ndarray] = {}

    def row(self, key: StateKey) -> np.ndarray:
        """Get the row for a state, creating a zero row on first access."""
        values = self._rows.get(key)
        if values is None:
            values = np.zeros(NUM_ACTIONS, dtype=np.float64)
            self._rows[key] = values
        return values

    def peek(self, key: StateKey) -> np.ndarray:
        """Get a copy of the row for a state without inserting it."""
        values = self._rows.get(key)
        if values is None:
            return np.zeros(NUM_ACTIONS, dtype=np.float64)
        return values.copy()

    def clear(self) -> None:
        self._rows.clear()

    def __contains__(self, key: StateKey) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[StateKey]:
        return iter(self._rows)


class QLearner:
    """Q-learning agent over a discrete state key."""

    def __init__(self, params: TrainingParameters, rng: SeededRNG):
        self.params = params
        self.rng = rng
        self.table = QTable()
        self.epsilon = params.epsilon

    def reset(self):
        """Clear the table and restore the initial exploration rate."""
        self.table.clear()
        self.epsilon = self.params.epsilon

    def best_action(self, key: StateKey) -> Tuple[ActionInt, float]:
        """Best action and its value; the lowest action index wins ties."""
        values = self.table.peek(key)
        action = int(np.argmax(values))
        return action, float(values[action])

    def confidence(self, key: StateKey) -> float:
        """Maximum Q-value for a state."""
        return float(np.max(self.table.peek(key)))

    def select_action(self, key: StateKey, explore: bool) -> ActionInt:
        """Select action using epsilon-greedy policy."""
        if explore and self.rng.random() < self.epsilon:
            return self.rng.randint(0, NUM_ACTIONS - 1)
        return self.best_action(key)[0]

    def update(self, key: StateKey, action: ActionInt, reward: float, next_key: StateKey):
        """Update Q-value using Q-learning update rule."""
        values = self.table.row(key)
        next_max = float(np.max(self.table.row(next_key)))

        target = reward + self.params.discount_factor * next_max
        values[action] += self.params.learning_rate * (target - values[action])

    def decay_exploration(self):
        """Decay epsilon for less exploration over time."""
        self.epsilon = max(self.params.epsilon_min,
                           self.epsilon * self.params.epsilon_decay)
