"""Static grid world: map layout and geometric queries."""

from typing import Iterable, Optional, Tuple, FrozenSet
from .types import Position, Hazard, HAZARD_CYCLE


def manhattan_distance(a: Position, b: Position) -> int:
    """Manhattan (L1) distance between two positions."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class GridWorld:
    """
    Immutable N x N map with walls, periodic hazards and a goal.

    The initial agent and adversary positions are part of the map so that
    every episode starts from the same layout.
    """

    def __init__(self, size: int, walls: Iterable[Position], hazards: Iterable[Hazard],
                 goal: Position, agent_start: Position,
                 adversary_starts: Iterable[Position] = ()):
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")

        self._size = size
        self._walls: FrozenSet[Position] = frozenset(tuple(w) for w in walls)
        self._hazards: Tuple[Hazard, ...] = tuple(hazards)
        self._goal: Position = tuple(goal)
        self._agent_start: Position = tuple(agent_start)
        self._adversary_starts: Tuple[Position, ...] = tuple(tuple(p) for p in adversary_starts)

        self._validate()

    def _validate(self) -> None:
        for wall in self._walls:
            if not self.in_bounds(wall):
                raise ValueError(f"Wall {wall} is out of bounds")

        for name, pos in (("Goal", self._goal), ("Agent start", self._agent_start)):
            if not self.in_bounds(pos):
                raise ValueError(f"{name} position {pos} is out of bounds")
            if pos in self._walls:
                raise ValueError(f"{name} position {pos} is a wall")

        for hazard in self._hazards:
            if not self.in_bounds(hazard.position):
                raise ValueError(f"Hazard {hazard.position} is out of bounds")
            if hazard.position in self._walls:
                raise ValueError(f"Hazard {hazard.position} is placed on a wall")
            bad_phases = [p for p in hazard.active_phases if not 0 <= p < HAZARD_CYCLE]
            if bad_phases:
                raise ValueError(f"Hazard {hazard.position} has phases outside the cycle: {bad_phases}")

        for pos in self._adversary_starts:
            if self.is_blocked(pos):
                raise ValueError(f"Adversary start {pos} is blocked")

    # Properties

    @property
    def size(self) -> int:
        return self._size

    @property
    def walls(self) -> FrozenSet[Position]:
        return self._walls

    @property
    def hazards(self) -> Tuple[Hazard, ...]:
        return self._hazards

    @property
    def goal(self) -> Position:
        return self._goal

    @property
    def agent_start(self) -> Position:
        return self._agent_start

    @property
    def adversary_starts(self) -> Tuple[Position, ...]:
        return self._adversary_starts

    # Queries

    def in_bounds(self, pos: Position) -> bool:
        """Check if position is within grid bounds."""
        row, col = pos
        return 0 <= row < self._size and 0 <= col < self._size

    def is_wall(self, pos: Position) -> bool:
        return pos in self._walls

    def is_blocked(self, pos: Position) -> bool:
        """True iff the position is a wall or out of bounds."""
        return not self.in_bounds(pos) or pos in self._walls

    def hazard_at(self, pos: Position) -> Optional[Hazard]:
        """Get the hazard at a position, if any."""
        for hazard in self._hazards:
            if hazard.position == pos:
                return hazard
        return None

    def is_hazard_active_at(self, pos: Position, tick: int) -> bool:
        """Check if a lethal hazard occupies the position at the given tick."""
        hazard = self.hazard_at(pos)
        return hazard is not None and hazard.is_active(tick)

    def manhattan_distance(self, a: Position, b: Position) -> int:
        return manhattan_distance(a, b)

    def distance_to_goal(self, pos: Position) -> int:
        return manhattan_distance(pos, self._goal)

    def __repr__(self) -> str:
        return (f"GridWorld(size={self._size}, walls={len(self._walls)}, "
                f"hazards={len(self._hazards)}, goal={self._goal})")
