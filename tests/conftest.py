"""Shared fixtures for the hazard_rl test suite."""

import pytest
from PySide6.QtCore import QCoreApplication

from hazard_rl.domain.types import TrainingParameters
from hazard_rl.utils.world_factory import create_open_world


class ScriptedRNG:
    """Random source that replays scripted draws."""

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self) -> float:
        return self.floats.pop(0)

    def randint(self, a: int, b: int) -> int:
        value = self.ints.pop(0)
        assert a <= value <= b
        return value

    def choice(self, seq):
        return seq[self.randint(0, len(seq) - 1)]


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


@pytest.fixture
def corridor_world():
    """2x2 world whose bottom row is walled: only 'right' reaches the goal."""
    return create_open_world(size=2, agent_start=(0, 0), goal=(0, 1), walls=[(1, 0), (1, 1)])


@pytest.fixture
def sealed_world():
    """3x3 world whose goal is walled off."""
    return create_open_world(size=3, agent_start=(0, 0), goal=(2, 2), walls=[(1, 2), (2, 1)])


@pytest.fixture
def small_params():
    return TrainingParameters(max_episodes=7, batch_size=3)
