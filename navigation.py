from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

from game_types import Handle
from maze_state import EngineState
from models import MoveResult, Path
from sliding_window import rebase

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Parse "up"/"right"/"down"/"left" or the W/A/S/D keys."""
        key = name.strip().lower()
        aliases = {"w": "up", "d": "right", "s": "down", "a": "left"}
        key = aliases.get(key, key)
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}") from None


def target_of(handle: Handle, direction: Direction) -> Handle:
    d_row, d_col = direction.offset
    return (handle[0] + d_row, handle[1] + d_col)


def direction_between(a: Handle, b: Handle) -> Direction:
    delta = (b[0] - a[0], b[1] - a[1])
    for direction in Direction:
        if direction.offset == delta:
            return direction
    raise ValueError(f"{a} and {b} are not adjacent")


def next_step_along(path: Path, handle: Handle) -> Optional[Direction]:
    """Direction to follow `path` one cell toward its tip from `handle`.

    Returns None if `handle` is not on the path or is already its tip.
    """
    try:
        idx = path.cells.index(handle)
    except ValueError:
        return None
    if idx + 1 >= len(path.cells):
        return None
    return direction_between(handle, path.cells[idx + 1])


def attempt_move(state: EngineState, direction: Direction) -> MoveResult:
    """Move the character one cell if the target is an in-bounds floor cell.

    Uses index arithmetic rather than the cached neighbour lists, which are
    trimmed along the sealed border. An accepted upward move past the rebase
    threshold slides the window before returning.
    """
    if state.character is None:
        raise RuntimeError("attempt_move called before the character was placed")

    grid = state.grid
    current = state.character.cell
    target = target_of(current, direction)

    if not grid.in_bounds(*target) or grid.is_wall(target):
        logger.debug("move %s from %s rejected", direction.name, current)
        return MoveResult(accepted=False)

    state.character.cell = target
    if direction is Direction.UP and target[0] < state.rebase_threshold:
        rebase(state)
        return MoveResult(accepted=True, rebased=True)
    return MoveResult(accepted=True)
