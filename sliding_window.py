"""
sliding_window.py

Moves the maze down one row under the character: the bottom row is
discarded, a fresh wall row appears at the top, and every path is extended
so the corridors keep running into the new terrain.
"""

from __future__ import annotations

import logging
from typing import Tuple

from invariants import check_invariants
from maze_state import EngineState
from models import InvariantViolation, Path, RebaseReport
from path_generator import (
    extend_branch,
    extend_main_path,
    prune_empty,
    prune_marked,
    spawn_seed_generations,
)

logger = logging.getLogger(__name__)


def reindex_path(path: Path, height: int) -> bool:
    """Shift every handle down one row and drop the ones that fell off the grid.

    Only the part after the last dropped cell is kept, so consecutive cells
    stay adjacent.

    Returns:
        True if the path lost any cells.
    """
    shifted = [(row + 1, col) for row, col in path.cells]
    last_dropped = -1
    for i, (row, _) in enumerate(shifted):
        if row >= height:
            last_dropped = i
    path.cells = shifted[last_dropped + 1 :]
    return last_dropped >= 0


def _ensure_character_survives(state: EngineState) -> None:
    if state.character is None:
        return
    if state.character.cell[0] + 1 >= state.height:
        raise InvariantViolation(
            f"character at {state.character.cell} would be dropped with the bottom row"
        )


def _reindex_character(state: EngineState) -> None:
    if state.character is None:
        return
    row, col = state.character.cell
    state.character.cell = (row + 1, col)


def _repair_paths(state: EngineState) -> Tuple[int, int]:
    """Extend every live path into the new row and grow branches from the seeds."""
    pruned = prune_marked(state)

    if state.main_path is None or len(state.main_path) == 0:
        raise InvariantViolation("main path lost every cell during rebase")
    extend_main_path(state)

    for branch in list(state.branches):
        if len(branch) > 0:
            extend_branch(state, branch)

    spawned = spawn_seed_generations(state)
    pruned += prune_empty(state)
    state.clear_seeds()
    return spawned, pruned


def rebase(state: EngineState) -> RebaseReport:
    """Slide the window one row toward the open edge.

    Steps: detach the bottom row, shift the rest down, add a wall row on
    top, re-point every handle, rebuild adjacency, then repair paths.
    """
    grid = state.grid
    _ensure_character_survives(state)
    detached_row = grid.shift_rows_down()

    truncated = 0
    for path in state.paths():
        if reindex_path(path, grid.height):
            truncated += 1
    _reindex_character(state)

    grid.rebuild_adjacency()
    spawned, pruned = _repair_paths(state)
    state.rebase_count += 1

    report = RebaseReport(
        detached_row=detached_row,
        shifted_cells=(grid.height - 1) * grid.width,
        truncated_paths=truncated,
        spawned_branches=spawned,
        pruned_branches=pruned,
    )
    logger.debug("rebase %d: %s", state.rebase_count, report)

    if state.strict:
        check_invariants(state)
    return report
