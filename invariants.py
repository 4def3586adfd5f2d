from __future__ import annotations

from typing import List

from game_types import Handle
from maze_state import EngineState
from models import InvariantViolation, Path


def _adjacent(a: Handle, b: Handle) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def _path_problems(state: EngineState, path: Path, label: str) -> List[str]:
    grid = state.grid
    problems: List[str] = []
    if len(path) > path.target_length:
        problems.append(f"{label} has {len(path)} cells, over its target {path.target_length}")
    for i, handle in enumerate(path.cells):
        if not grid.in_bounds(*handle):
            problems.append(f"{label} references {handle} outside the grid")
            continue
        if grid.is_wall(handle):
            problems.append(f"{label} runs through wall {handle}")
        if i > 0 and not _adjacent(path.cells[i - 1], handle):
            problems.append(f"{label} jumps from {path.cells[i - 1]} to {handle}")
    return problems


def collect_problems(state: EngineState) -> List[str]:
    """Return a description of every broken engine invariant (empty = healthy)."""
    grid = state.grid
    problems: List[str] = []

    if grid.row_count != grid.height:
        problems.append(f"grid has {grid.row_count} rows, expected {grid.height}")
    for r, row in enumerate(grid.rows):
        if len(row) != grid.width:
            problems.append(f"row {r} has {len(row)} cells, expected {grid.width}")
        for c, cell in enumerate(row):
            if cell.handle != (r, c):
                problems.append(f"cell at ({r}, {c}) thinks it is at {cell.handle}")
            if cell.neighbors != grid.neighbor_handles(r, c):
                problems.append(f"stale neighbours at ({r}, {c})")
        if row and (not row[0].is_wall or not row[-1].is_wall):
            problems.append(f"sealed border carved in row {r}")

    if state.main_path is None:
        problems.append("no main path")
    else:
        if len(state.main_path) < 2:
            problems.append(f"main path shrank to {len(state.main_path)} cells")
        problems.extend(_path_problems(state, state.main_path, "main path"))
    for i, branch in enumerate(state.branches):
        if len(branch) == 0:
            problems.append(f"branch {i} is empty")
        problems.extend(_path_problems(state, branch, f"branch {i}"))

    if state.first_seeds or state.second_seeds:
        problems.append(
            f"stale seeds: {len(state.first_seeds)} first, {len(state.second_seeds)} second"
        )

    if state.character is not None:
        cell = state.character.cell
        if not grid.in_bounds(*cell):
            problems.append(f"character at {cell} outside the grid")
        elif grid.is_wall(cell):
            problems.append(f"character inside wall {cell}")

    return problems


def check_invariants(state: EngineState) -> None:
    """Raise InvariantViolation listing every broken invariant."""
    problems = collect_problems(state)
    if problems:
        raise InvariantViolation("; ".join(problems))
