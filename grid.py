"""
grid.py

The maze is a changeable lattice of Cell objects laid over a permanent
lattice of points.

- The point lattice never moves. It is (height + 1) x (width + 1) points and
  extends above the visible window: only the bottom `width` rows of cells are
  on screen, the rest is generated ahead of the character.
- Cells are owned by the Grid and addressed by (row, col) handles. Handles are
  reassigned on every rebase, so nothing outside this module holds a Cell.
- The outer ring is a sealed "bucket": columns 0 and width-1 are never
  carved, the bottom rows have no down neighbours, and only row 0 (the open
  edge) is continuously regenerated.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from game_types import Handle
from models import Cell, ConfigurationError, Point

logger = logging.getLogger(__name__)

MIN_WIDTH = 3
HEIGHT_MULTIPLIER = 3


class CoordinateLattice:
    """Static grid of corner points. Point (i, k) is the top-left of cell (i, k)."""

    def __init__(self, width: int, height: int, tile_size: int) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        # the bottom `width` rows of cells map to y in [0, width * tile_size)
        top = -(height - width) * tile_size
        self.points: List[List[Point]] = [
            [Point(k * tile_size, top + i * tile_size) for k in range(width + 1)]
            for i in range(height + 1)
        ]

    def corners(self, row: int, col: int) -> Tuple[Point, Point, Point, Point]:
        return (
            self.points[row][col],
            self.points[row][col + 1],
            self.points[row + 1][col + 1],
            self.points[row + 1][col],
        )


class Grid:
    def __init__(self, width: int, height: int, tile_size: int) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.lattice = CoordinateLattice(width, height, tile_size)
        self.rows: List[List[Cell]] = [self._new_row(i) for i in range(height)]
        self.rebuild_adjacency()

    # ----------------------------
    # Construction
    # ----------------------------

    def _new_row(self, row: int) -> List[Cell]:
        return [
            Cell(row_index=row, col_index=col, corners=self.lattice.corners(row, col))
            for col in range(self.width)
        ]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    # ----------------------------
    # Lookup
    # ----------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, handle: Handle) -> Cell:
        row, col = handle
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell {handle} is outside the {self.height}x{self.width} grid")
        return self.rows[row][col]

    def is_wall(self, handle: Handle) -> bool:
        """Out-of-bounds handles count as walls."""
        row, col = handle
        if not self.in_bounds(row, col):
            return True
        return self.rows[row][col].is_wall

    def is_interior_column(self, col: int) -> bool:
        return 0 < col < self.width - 1

    def carve(self, handle: Handle) -> None:
        self.cell(handle).is_wall = False

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.rows:
            yield from row

    # ----------------------------
    # Adjacency
    # ----------------------------

    def neighbor_handles(self, row: int, col: int) -> Tuple[Handle, ...]:
        """Neighbours in up, right, down, left order.

        The -2/-3 offsets keep the sealed border out of every neighbour list.
        """
        found: List[Handle] = []
        if row > 0:
            found.append((row - 1, col))
        if col < self.width - 2:
            found.append((row, col + 1))
        if row < self.height - 3:
            found.append((row + 1, col))
        if col > 0:
            found.append((row, col - 1))
        return tuple(found)

    def rebuild_adjacency(self) -> None:
        for cell in self.iter_cells():
            cell.neighbors = self.neighbor_handles(cell.row_index, cell.col_index)

    def count_adjacent_walls(self, handle: Handle) -> int:
        """Recompute and cache the number of wall neighbours of a cell."""
        cell = self.cell(handle)
        cell.adjacent_wall_count = sum(
            1 for n in cell.neighbors if self.rows[n[0]][n[1]].is_wall
        )
        return cell.adjacent_wall_count

    # ----------------------------
    # Rebase
    # ----------------------------

    def shift_rows_down(self) -> int:
        """Drop the bottom row, move every other row down one, add a wall row on top.

        Adjacency is left stale; callers rebuild it once paths are re-pointed.

        Returns:
            The index the detached row had before the shift.
        """
        detached = self.rows.pop()
        for cell in detached:
            cell.neighbors = ()

        for row in self.rows:
            for cell in row:
                cell.shift_down(self.tile_size)

        self.rows.insert(0, self._new_row(0))
        logger.debug("shifted %d rows, detached row %d", self.height - 1, self.height - 1)
        return self.height - 1


def build_initial_grid(
    width: int, height_multiplier: int = HEIGHT_MULTIPLIER, tile_size: int = 20
) -> Grid:
    """Build an all-wall grid of height_multiplier * width rows.

    Raises:
        ConfigurationError: If width < 3, or the multiplier/tile size are < 1.
    """
    if isinstance(width, bool) or not isinstance(width, int):
        raise ConfigurationError(f"width must be an integer, got {width!r}")
    if width < MIN_WIDTH:
        raise ConfigurationError(
            f"width must be >= {MIN_WIDTH} to leave room for an interior, got {width}"
        )
    if height_multiplier < 1:
        raise ConfigurationError(f"height_multiplier must be >= 1, got {height_multiplier}")
    if tile_size < 1:
        raise ConfigurationError(f"tile_size must be >= 1, got {tile_size}")
    return Grid(width, height_multiplier * width, tile_size)
