from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import pygame

from game_types import Color, Handle


class ConfigurationError(ValueError):
    """Raised for invalid maze settings (e.g. fewer than 3 blocks per side)."""


class InvariantViolation(RuntimeError):
    """Raised when grid/path bookkeeping is inconsistent. Always a defect."""


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def translated(self, dx: float = 0.0, dy: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass
class Cell:
    """One block of the maze, wall or floor."""

    row_index: int
    col_index: int
    corners: Tuple[Point, Point, Point, Point]  # tl, tr, br, bl
    is_wall: bool = True
    adjacent_wall_count: int = 0
    neighbors: Tuple[Handle, ...] = ()

    @property
    def handle(self) -> Handle:
        return (self.row_index, self.col_index)

    @property
    def center(self) -> Point:
        tl, _, br, _ = self.corners
        return Point((tl.x + br.x) / 2, (tl.y + br.y) / 2)

    @property
    def rect(self) -> pygame.Rect:
        tl, _, br, _ = self.corners
        return pygame.Rect(
            int(tl.x), int(tl.y), int(br.x - tl.x), int(br.y - tl.y)
        )

    def shift_down(self, length: float) -> None:
        self.row_index += 1
        self.corners = tuple(p.translated(dy=length) for p in self.corners)  # type: ignore[assignment]


class PathKind(str, Enum):
    MAIN = "main"
    BRANCH = "branch"


class SeedQueue(str, Enum):
    FIRST = "first"
    SECOND = "second"


class StopReason(str, Enum):
    REACHED_EDGE = "reached_edge"
    EXHAUSTED = "exhausted"
    CAPPED = "capped"


@dataclass
class Path:
    kind: PathKind
    target_length: int
    cells: List[Handle] = field(default_factory=list)
    marked_for_removal: bool = False

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def tip(self) -> Handle:
        return self.cells[-1]

    @property
    def is_main(self) -> bool:
        return self.kind is PathKind.MAIN


@dataclass(frozen=True)
class PathRules:
    """Parameters for one flavour of the extend-one-step walk.

    climb_only: candidates may not sit below the tip (main path).
    min_wall_count: candidate needs adjacent_wall_count > this.
    edge_wall_count: a row-1 candidate is also eligible if its
        adjacent_wall_count > this (None disables the clause).
    weighted: duplicate candidates deep in wall territory.
    seed_odds: (k, n) -> enqueue the new tip when randrange(n) < k.
    """

    name: str
    climb_only: bool
    min_wall_count: int
    edge_wall_count: Optional[int]
    weighted: bool
    seed_odds: Tuple[int, int]
    seed_queue: SeedQueue
    length_cap: bool
    force_climb: bool
    trim_head: bool


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    rebased: bool = False


@dataclass(frozen=True)
class RebaseReport:
    detached_row: int
    shifted_cells: int
    truncated_paths: int
    spawned_branches: int
    pruned_branches: int


@dataclass(frozen=True)
class CellView:
    row: int
    col: int
    x: float
    y: float
    is_wall: bool


@dataclass(frozen=True)
class Snapshot:
    width: int
    height: int
    tile_size: int
    rows: Tuple[Tuple[CellView, ...], ...]
    character_cell: Handle
    main_path: Tuple[Handle, ...]
    active_paths: Tuple[Tuple[Handle, ...], ...]

    def cell(self, handle: Handle) -> CellView:
        row, col = handle
        return self.rows[row][col]


@dataclass(frozen=True)
class MazeConfig:
    blocks_per_side: int
    tile_size: int
    seed: Optional[int]
    check_invariants: bool


@dataclass(frozen=True)
class ViewConfig:
    title: str
    bg: Color
    wall_color: Color
    floor_color: Color
    character_color: Color
    path_color: Color
    show_paths: bool
