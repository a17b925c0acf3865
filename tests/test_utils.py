"""Tests for hazard_rl.utils."""

import pytest

from hazard_rl.utils.rng import SeededRNG
from hazard_rl.utils.status_log import StatusLog


class TestStatusLog:
    def test_most_recent_first_and_bounded(self):
        log = StatusLog(capacity=3, initial_message="ready")
        for message in ["a", "b", "c"]:
            log.add(message)
        assert log.messages() == ("c", "b", "a")
        assert log.latest == "c"
        assert len(log) == 3

    def test_clear_with_message(self):
        log = StatusLog(capacity=2, initial_message="ready")
        log.add("x")
        log.clear("cleared")
        assert list(log) == ["cleared"]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            StatusLog(capacity=0)


class TestSeededRNG:
    def test_same_seed_same_sequence(self):
        a, b = SeededRNG(42), SeededRNG(42)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
        assert [a.randint(0, 3) for _ in range(20)] == [b.randint(0, 3) for _ in range(20)]

    def test_randint_is_inclusive(self):
        rng = SeededRNG(0)
        values = {rng.randint(0, 3) for _ in range(500)}
        assert values == {0, 1, 2, 3}

    def test_choice(self):
        rng = SeededRNG(0)
        assert rng.choice(["only"]) == "only"

