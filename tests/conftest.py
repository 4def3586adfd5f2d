from __future__ import annotations

import random

import pytest

from grid import build_initial_grid
from maze_state import EngineState


@pytest.fixture
def blank_state():
    """A 5-wide all-wall grid with no paths, for driving the generator by hand."""

    def _make(width: int = 5, seed: int = 0) -> EngineState:
        return EngineState(grid=build_initial_grid(width, tile_size=10), rng=random.Random(seed))

    return _make
