"""
engine.py

The only surface front ends call:

- initialize(width)              -> EngineState
- attempt_move(state, direction) -> MoveResult(accepted, rebased)
- snapshot(state)                -> Snapshot (frozen, safe to hold on to)

All grid, path and seed state lives in the EngineState passed around; the
renderer and input handler never touch it directly.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Union

from grid import build_initial_grid
from invariants import check_invariants
from maze_state import Character, EngineState
from models import CellView, MazeConfig, MoveResult, Snapshot
from navigation import Direction
from navigation import attempt_move as _attempt_move
from path_generator import generate_initial_paths

logger = logging.getLogger(__name__)

RECOMMENDED_MAX_WIDTH = 50
SLOW_WIDTH = 70


def initialize(
    width: int,
    *,
    tile_size: int = 20,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    strict: bool = False,
) -> EngineState:
    """Build the grid, carve the initial paths and place the character.

    Args:
        width: Blocks per side of the visible square (>= 3).
        tile_size: Pixel length of one block.
        seed: Seed for a fresh random generator (ignored if rng is given).
        rng: Random generator to draw from.
        strict: Check every invariant after initialization and each rebase.

    Raises:
        ConfigurationError: If width or tile_size is invalid.
    """
    grid = build_initial_grid(width, tile_size=tile_size)
    if width > SLOW_WIDTH:
        logger.warning("%d blocks per side: generation will be slow", width)
    elif width > RECOMMENDED_MAX_WIDTH:
        logger.warning(
            "%d blocks per side is above the recommended %d", width, RECOMMENDED_MAX_WIDTH
        )

    state = EngineState(grid=grid, rng=rng if rng is not None else random.Random(seed), strict=strict)
    main = generate_initial_paths(state)
    state.character = Character(cell=main.cells[0])

    if strict:
        check_invariants(state)
    logger.info(
        "maze ready: %dx%d blocks, main path %d cells, %d branches",
        grid.width,
        grid.height,
        len(main),
        len(state.branches),
    )
    return state


def initialize_from_config(cfg: MazeConfig) -> EngineState:
    return initialize(
        cfg.blocks_per_side,
        tile_size=cfg.tile_size,
        seed=cfg.seed,
        strict=cfg.check_invariants,
    )


def attempt_move(state: EngineState, direction: Union[Direction, str]) -> MoveResult:
    if isinstance(direction, str):
        direction = Direction.from_name(direction)
    return _attempt_move(state, direction)


def snapshot(state: EngineState) -> Snapshot:
    """Copy the current grid and path state into frozen views."""
    grid = state.grid
    rows = tuple(
        tuple(
            CellView(
                row=cell.row_index,
                col=cell.col_index,
                x=cell.corners[0].x,
                y=cell.corners[0].y,
                is_wall=cell.is_wall,
            )
            for cell in row
        )
        for row in grid.rows
    )
    main = tuple(state.main_path.cells) if state.main_path is not None else ()
    if state.character is None:
        raise RuntimeError("snapshot taken before the character was placed")
    return Snapshot(
        width=grid.width,
        height=grid.height,
        tile_size=grid.tile_size,
        rows=rows,
        character_cell=state.character.cell,
        main_path=main,
        active_paths=(main,) + tuple(tuple(p.cells) for p in state.branches),
    )
