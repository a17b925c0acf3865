"""World factory for the built-in map and simple test layouts."""

from typing import Iterable, Optional, Sequence
from ..domain.types import Position, Hazard
from ..domain.world import GridWorld

DEFAULT_SIZE = 8

DEFAULT_WALLS: Sequence[Position] = (
    (0, 3), (1, 1), (1, 5), (1, 6), (2, 1), (2, 6),
    (3, 3), (4, 1), (4, 2), (4, 6), (5, 5),
    (6, 1), (6, 3), (7, 5),
)

# Lasers: on for half of every four-tick cycle
DEFAULT_HAZARDS: Sequence[Hazard] = (
    Hazard(position=(2, 3), active_phases=frozenset({0, 1})),
    Hazard(position=(5, 2), active_phases=frozenset({2, 3})),
)

DEFAULT_AGENT_START: Position = (0, 0)
DEFAULT_GOAL: Position = (7, 7)
DEFAULT_ADVERSARY_STARTS: Sequence[Position] = ((3, 5), (5, 3))


def create_default_world() -> GridWorld:
    """
    Create the built-in 8x8 map.

    Returns:
        GridWorld with fourteen walls, two lasers and two patrols
    """
    return GridWorld(
        size=DEFAULT_SIZE,
        walls=DEFAULT_WALLS,
        hazards=DEFAULT_HAZARDS,
        goal=DEFAULT_GOAL,
        agent_start=DEFAULT_AGENT_START,
        adversary_starts=DEFAULT_ADVERSARY_STARTS,
    )


def create_open_world(size: int = DEFAULT_SIZE,
                      agent_start: Position = (0, 0),
                      goal: Optional[Position] = None,
                      walls: Iterable[Position] = (),
                      hazards: Iterable[Hazard] = (),
                      adversary_starts: Iterable[Position] = ()) -> GridWorld:
    """
    Create a world with nothing in it unless asked.

    Args:
        size: Grid dimension (must be > 0)
        agent_start: Initial agent position
        goal: Goal position (bottom-right corner if None)
        walls: Optional wall positions
        hazards: Optional hazards
        adversary_starts: Optional initial adversary positions

    Raises:
        ValueError: If the layout violates the world invariants
    """
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")
    if goal is None:
        goal = (size - 1, size - 1)
    return GridWorld(
        size=size,
        walls=walls,
        hazards=hazards,
        goal=goal,
        agent_start=agent_start,
        adversary_starts=adversary_starts,
    )
