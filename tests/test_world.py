"""Tests for hazard_rl.domain.world and the world factory."""

import pytest

from hazard_rl.domain.types import Hazard
from hazard_rl.domain.world import GridWorld, manhattan_distance
from hazard_rl.utils.world_factory import (
    create_default_world, create_open_world, DEFAULT_WALLS
)


class TestDefaultWorld:
    def test_layout(self):
        world = create_default_world()
        assert world.size == 8
        assert world.goal == (7, 7)
        assert world.agent_start == (0, 0)
        assert world.adversary_starts == ((3, 5), (5, 3))
        assert len(world.walls) == 14
        assert len(world.hazards) == 2

    def test_is_blocked_matches_walls_for_every_cell(self):
        world = create_default_world()
        walls = set(DEFAULT_WALLS)
        for row in range(world.size):
            for col in range(world.size):
                assert world.is_blocked((row, col)) == ((row, col) in walls)

    @pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8)])
    def test_out_of_bounds_is_blocked(self, pos):
        assert create_default_world().is_blocked(pos)

    def test_laser_phases(self):
        world = create_default_world()
        active = [t for t in range(8) if world.is_hazard_active_at((2, 3), t)]
        assert active == [0, 1, 4, 5]
        active = [t for t in range(8) if world.is_hazard_active_at((5, 2), t)]
        assert active == [2, 3, 6, 7]

    def test_no_hazard_elsewhere(self):
        world = create_default_world()
        assert world.hazard_at((0, 0)) is None
        assert not any(world.is_hazard_active_at((0, 0), t) for t in range(4))


class TestDistance:
    def test_manhattan(self):
        assert manhattan_distance((0, 0), (7, 7)) == 14
        assert manhattan_distance((3, 5), (5, 3)) == 4
        assert manhattan_distance((2, 2), (2, 2)) == 0

    def test_distance_to_goal(self):
        world = create_open_world(size=8)
        assert world.distance_to_goal((0, 0)) == 14
        assert world.manhattan_distance((1, 2), (3, 1)) == 3


class TestValidation:
    def test_goal_on_wall(self):
        with pytest.raises(ValueError, match="Goal"):
            create_open_world(size=4, goal=(1, 1), walls=[(1, 1)])

    def test_start_on_wall(self):
        with pytest.raises(ValueError, match="Agent start"):
            create_open_world(size=4, walls=[(0, 0)])

    def test_hazard_on_wall(self):
        with pytest.raises(ValueError, match="wall"):
            create_open_world(size=4, walls=[(1, 1)],
                              hazards=[Hazard((1, 1), frozenset({0}))])

    def test_hazard_phase_outside_cycle(self):
        with pytest.raises(ValueError, match="phases"):
            create_open_world(size=4, hazards=[Hazard((1, 1), frozenset({4}))])

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            GridWorld(size=0, walls=(), hazards=(), goal=(0, 0), agent_start=(0, 0))

    def test_adversary_start_blocked(self):
        with pytest.raises(ValueError, match="Adversary"):
            create_open_world(size=4, walls=[(2, 2)], adversary_starts=[(2, 2)])
