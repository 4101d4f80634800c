import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib
matplotlib.use("Agg")

import pytest

import constants as C
import logger
from world import World


class FlatTerrain:
    """Plain dirt below the planting row, air above. Keeps plant tests independent of noise."""

    def __init__(self, ground_level, moisture=60.0, nutrients=60.0):
        self.ground_level = ground_level
        self.moisture = moisture
        self.nutrients = nutrients

    def generate(self, grid):
        grid.types[:] = C.TILE_AIR
        grid.types[self.ground_level - 1:, :] = C.TILE_DIRT
        grid.moisture[self.ground_level - 1:, :] = self.moisture
        grid.nutrients[self.ground_level - 1:, :] = self.nutrients


@pytest.fixture(autouse=True)
def seeded_random():
    random.seed(1234)
    yield
    logger.set_time_manager(None)


@pytest.fixture
def make_world():
    def _make(width=40, height=30, ground_level=15, moisture=60.0, nutrients=60.0):
        return World(width=width, height=height, ground_level=ground_level,
                     generator=FlatTerrain(ground_level, moisture, nutrients))
    return _make


@pytest.fixture
def world(make_world):
    return make_world()
