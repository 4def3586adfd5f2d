"""
path_generator.py

Carves corridors out of the all-wall grid.

There is one "main" path which never travels downward and always reaches
the open edge (row 1). Branch paths may go in any direction but stay inside
the interior band and prefer cells deep in wall territory, so they rarely
merge into an existing corridor.

Every variant (growing or extending the main path, growing or extending a
branch) runs the same extend-one-step walk; a PathRules value carries the
thresholds that make them differ.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from game_types import Handle
from maze_state import EngineState
from models import Path, PathKind, PathRules, SeedQueue, StopReason
from utils import roll_odds

logger = logging.getLogger(__name__)

OPEN_EDGE_ROW = 1
MAIN_LENGTH_FACTOR = 20
BRANCH_LENGTH_FACTOR = 2

MAIN_GROWTH = PathRules(
    name="main_growth",
    climb_only=True,
    min_wall_count=-1,
    edge_wall_count=None,
    weighted=True,
    seed_odds=(4, 21),
    seed_queue=SeedQueue.FIRST,
    length_cap=False,
    force_climb=True,
    trim_head=True,
)

MAIN_EXTENSION = PathRules(
    name="main_extension",
    climb_only=True,
    min_wall_count=1,
    edge_wall_count=2,
    weighted=False,
    seed_odds=(1, 7),
    seed_queue=SeedQueue.FIRST,
    length_cap=False,
    force_climb=True,
    trim_head=True,
)

BRANCH_GROWTH = PathRules(
    name="branch_growth",
    climb_only=False,
    min_wall_count=2,
    edge_wall_count=1,
    weighted=False,
    seed_odds=(3, 20),
    seed_queue=SeedQueue.SECOND,
    length_cap=True,
    force_climb=False,
    trim_head=False,
)

BRANCH_EXTENSION = PathRules(
    name="branch_extension",
    climb_only=False,
    min_wall_count=2,
    edge_wall_count=None,
    weighted=False,
    seed_odds=(1, 9),
    seed_queue=SeedQueue.SECOND,
    length_cap=True,
    force_climb=False,
    trim_head=False,
)


# ----------------------------
# Candidates
# ----------------------------


def candidate_weight(state: EngineState, tip: Handle, neighbor: Handle, rules: PathRules) -> int:
    """How many times `neighbor` enters the candidate pool (0 = not eligible)."""
    grid = state.grid
    walls = grid.count_adjacent_walls(neighbor)
    row, col = neighbor

    if not grid.is_interior_column(col) or not grid.is_wall(neighbor):
        return 0

    if rules.climb_only:
        in_band = 0 < row <= tip[0]
    else:
        in_band = 0 < row <= grid.height - 3

    eligible = in_band and walls > rules.min_wall_count
    if not eligible and rules.edge_wall_count is not None:
        eligible = row == OPEN_EDGE_ROW and walls > rules.edge_wall_count
    if not eligible:
        return 0

    if not rules.weighted:
        return 1
    return 1 + int(walls > 1) + int(walls > 2)


def candidate_pool(state: EngineState, tip: Handle, rules: PathRules) -> List[Handle]:
    pool: List[Handle] = []
    for neighbor in state.grid.cell(tip).neighbors:
        pool.extend([neighbor] * candidate_weight(state, tip, neighbor, rules))
    return pool


# ----------------------------
# Extend-one-step
# ----------------------------


def extend_one_step(state: EngineState, path: Path, rules: PathRules) -> StopReason:
    """Grow `path` from its tip until it reaches the open edge, runs out of
    candidates or hits its length cap.

    Each carved cell may be enqueued as a branch seed with the rule's odds.
    """
    grid = state.grid
    queue = state.first_seeds if rules.seed_queue is SeedQueue.FIRST else state.second_seeds

    while True:
        if rules.length_cap and len(path) >= path.target_length:
            return StopReason.CAPPED

        tip = path.tip
        if tip[0] <= OPEN_EDGE_ROW:
            return StopReason.REACHED_EDGE

        pool = candidate_pool(state, tip, rules)
        if pool:
            nxt = state.rng.choice(pool)
        elif rules.force_climb:
            # the tip is the highest cell of a climb-only path, so the cell
            # above is never already part of it
            nxt = (tip[0] - 1, tip[1])
        else:
            return StopReason.EXHAUSTED

        grid.carve(nxt)
        path.cells.append(nxt)
        if rules.trim_head:
            while len(path) > path.target_length:
                del path.cells[0]

        if roll_odds(state.rng, rules.seed_odds):
            queue.append(nxt)


# ----------------------------
# Main path
# ----------------------------


def generate_main_path(state: EngineState) -> Path:
    """Carve two cells straight up from a random bottom cell, then climb to the edge."""
    grid = state.grid
    col = state.rng.randint(1, grid.width - 2)
    path = Path(kind=PathKind.MAIN, target_length=MAIN_LENGTH_FACTOR * grid.width)

    for row in (grid.height - 1, grid.height - 2):
        grid.carve((row, col))
        path.cells.append((row, col))

    extend_one_step(state, path, MAIN_GROWTH)
    state.main_path = path
    logger.debug("main path carved with %d cells from column %d", len(path), col)
    return path


def extend_main_path(state: EngineState) -> StopReason:
    if state.main_path is None:
        raise RuntimeError("extend_main_path called before generate_main_path")
    return extend_one_step(state, state.main_path, MAIN_EXTENSION)


# ----------------------------
# Branches
# ----------------------------


def _branch_target_length(state: EngineState) -> int:
    upper = max(2, BRANCH_LENGTH_FACTOR * state.width - 1)
    return state.rng.randint(2, upper)


def _settle_branch(path: Path, reason: StopReason) -> None:
    # only branches parked at the open edge survive to the next rebase
    if reason is not StopReason.REACHED_EDGE:
        path.marked_for_removal = True


def spawn_branch(state: EngineState, seed: Handle, rules: PathRules = BRANCH_GROWTH) -> Path:
    path = Path(
        kind=PathKind.BRANCH,
        target_length=_branch_target_length(state),
        cells=[seed],
    )
    reason = extend_one_step(state, path, rules)
    _settle_branch(path, reason)
    state.branches.append(path)
    logger.debug(
        "branch from %s: %d cells, %s (target %d)",
        seed,
        len(path),
        reason.value,
        path.target_length,
    )
    return path


def extend_branch(state: EngineState, path: Path) -> StopReason:
    reason = extend_one_step(state, path, BRANCH_EXTENSION)
    _settle_branch(path, reason)
    return reason


def spawn_branches(state: EngineState, seeds: Iterable[Handle]) -> int:
    count = 0
    for seed in seeds:
        spawn_branch(state, seed)
        count += 1
    return count


def spawn_seed_generations(state: EngineState) -> int:
    """Turn queued seeds into branches: first generation, then one more.

    Seeds produced by the second generation are dropped; both queues are
    empty on return.
    """
    first = list(state.first_seeds)
    state.first_seeds.clear()
    spawned = spawn_branches(state, first)

    second = list(state.second_seeds)
    state.second_seeds.clear()
    spawned += spawn_branches(state, second)

    state.clear_seeds()
    return spawned


def prune_marked(state: EngineState) -> int:
    before = len(state.branches)
    state.branches = [p for p in state.branches if not p.marked_for_removal]
    return before - len(state.branches)


def prune_empty(state: EngineState) -> int:
    before = len(state.branches)
    state.branches = [p for p in state.branches if len(p) > 0]
    return before - len(state.branches)


def generate_initial_paths(state: EngineState) -> Path:
    main = generate_main_path(state)
    spawned = spawn_seed_generations(state)
    pruned = prune_marked(state)
    state.clear_seeds()
    logger.debug("initial generation: %d branches spawned, %d pruned", spawned, pruned)
    return main
