"""Tests for hazard_rl.domain.adversary."""

import pytest

from hazard_rl.domain.adversary import AdversaryPolicy, PATROL_MOVES
from hazard_rl.utils.rng import SeededRNG
from hazard_rl.utils.world_factory import create_open_world


class TestAdversaryPolicy:
    def test_stays_on_low_draw(self, scripted_rng):
        policy = AdversaryPolicy(create_open_world(), scripted_rng(floats=[0.3]))
        assert policy.step((3, 3)) == (3, 3)

    def test_moves_on_high_draw(self, scripted_rng):
        policy = AdversaryPolicy(create_open_world(), scripted_rng(floats=[0.9], ints=[0]))
        assert policy.step((3, 3)) == (3, 4)

    @pytest.mark.parametrize("index, expected", [(0, (3, 4)), (1, (3, 2)), (2, (4, 3)), (3, (2, 3))])
    def test_each_direction(self, scripted_rng, index, expected):
        policy = AdversaryPolicy(create_open_world(), scripted_rng(floats=[0.9], ints=[index]))
        assert policy.step((3, 3)) == expected

    def test_edge_rejects_move(self, scripted_rng):
        policy = AdversaryPolicy(create_open_world(), scripted_rng(floats=[0.9], ints=[3]))
        assert policy.step((0, 0)) == (0, 0)

    def test_wall_rejects_move(self, scripted_rng):
        world = create_open_world(walls=[(3, 4)])
        policy = AdversaryPolicy(world, scripted_rng(floats=[0.9], ints=[0]))
        assert policy.step((3, 3)) == (3, 3)

    def test_step_all_preserves_order(self, scripted_rng):
        rng = scripted_rng(floats=[0.1, 0.9, 0.1], ints=[2])
        policy = AdversaryPolicy(create_open_world(), rng)
        assert policy.step_all([(1, 1), (2, 2), (5, 5)]) == ((1, 1), (3, 2), (5, 5))

    def test_stay_rate_is_about_sixty_percent(self):
        policy = AdversaryPolicy(create_open_world(), SeededRNG(0))
        trials = 10000
        stays = sum(1 for _ in range(trials) if policy.step((4, 4)) == (4, 4))
        assert 0.57 < stays / trials < 0.63

    def test_never_enters_walls(self):
        world = create_open_world(walls=[(3, 4), (4, 3), (2, 3), (3, 2)])
        policy = AdversaryPolicy(world, SeededRNG(1))
        for _ in range(200):
            assert policy.step((3, 3)) == (3, 3)

    def test_rejects_bad_probability(self):
        with pytest.raises(ValueError):
            AdversaryPolicy(create_open_world(), SeededRNG(0), stay_probability=1.5)

    def test_moves_are_unit_axis_moves(self):
        assert sorted(PATROL_MOVES) == [(-1, 0), (0, -1), (0, 1), (1, 0)]
