"""
Shared fixtures for the Laser Battle tests.
"""
import random

import pytest

from laser_battle.arena import Arena
from tests.helpers import FakeTerminal


@pytest.fixture
def arena():
    """40x16 arena at the origin: inner cells x 1..39, y 1..15."""
    return Arena(0, 0, 40, 16)


@pytest.fixture
def rng():
    return random.Random(1330)


@pytest.fixture
def fake_term():
    return FakeTerminal()
