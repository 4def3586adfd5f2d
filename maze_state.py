from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from game_types import Handle
from grid import Grid
from models import Path


@dataclass
class Character:
    cell: Handle


@dataclass
class EngineState:
    """Everything the engine mutates: grid, paths, seed queues and character."""

    grid: Grid
    rng: random.Random
    main_path: Optional[Path] = None
    branches: List[Path] = field(default_factory=list)
    first_seeds: List[Handle] = field(default_factory=list)
    second_seeds: List[Handle] = field(default_factory=list)
    character: Optional[Character] = None
    strict: bool = False
    rebase_count: int = 0

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def rebase_threshold(self) -> float:
        """Upward moves landing on a row index below this shift the maze.

        Sits halfway up the visible window (the bottom third of the grid).
        """
        return self.height * 5 / 6 - 1

    def paths(self) -> Iterator[Path]:
        if self.main_path is not None:
            yield self.main_path
        yield from self.branches

    def clear_seeds(self) -> None:
        self.first_seeds.clear()
        self.second_seeds.clear()
