"""Random patrol movement for the non-learning adversaries."""

from typing import Sequence, Tuple
from .types import Position
from .world import GridWorld
from ..utils.rng import SeededRNG

# Order matters for reproducibility: right, left, down, up
PATROL_MOVES: Tuple[Position, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class AdversaryPolicy:
    """Stochastic movement rule shared by every adversary."""

    def __init__(self, world: GridWorld, rng: SeededRNG, stay_probability: float = 0.6):
        if not (0.0 <= stay_probability <= 1.0):
            raise ValueError(f"Stay probability must be between 0.0 and 1.0, got {stay_probability}")
        self.world = world
        self.rng = rng
        self.stay_probability = stay_probability

    def step(self, position: Position) -> Position:
        """
        Move one adversary for one tick.

        Stays put with probability ``stay_probability``; otherwise tries a
        random unit move and stays put if the destination is blocked.
        """
        if self.rng.random() < self.stay_probability:
            return position

        dr, dc = self.rng.choice(PATROL_MOVES)
        candidate = (position[0] + dr, position[1] + dc)
        if self.world.is_blocked(candidate):
            return position
        return candidate

    def step_all(self, positions: Sequence[Position]) -> Tuple[Position, ...]:
        """Move every adversary independently, preserving order."""
        return tuple(self.step(pos) for pos in positions)
