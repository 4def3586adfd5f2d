import dataclasses

import pytest

from engine import attempt_move, initialize, snapshot
from models import ConfigurationError, MoveResult, Path, PathKind
from navigation import Direction, direction_between, next_step_along


@pytest.mark.parametrize("seed", range(10))
def test_minimal_maze_starts_on_the_bottom_floor_cell(seed):
    state = initialize(4, seed=seed, strict=True)
    row, col = state.character.cell
    assert row == state.height - 1 == 11
    assert not state.grid.is_wall((row, col))
    main = state.main_path.cells
    assert len(main) >= 2
    assert main[0] == (row, col)
    assert main[1] == (row - 1, col)


@pytest.mark.parametrize("width", [2, 0, -3])
def test_initialize_rejects_narrow_mazes(width):
    with pytest.raises(ConfigurationError):
        initialize(width)


def test_border_columns_can_never_be_entered():
    state = initialize(3, seed=0)
    assert state.character.cell == (8, 1)
    assert not attempt_move(state, Direction.LEFT).accepted
    assert not attempt_move(state, Direction.RIGHT).accepted
    assert state.character.cell == (8, 1)


def test_moving_off_the_bottom_is_rejected():
    state = initialize(5, seed=2)
    assert not attempt_move(state, Direction.DOWN).accepted


def test_rejected_move_changes_nothing():
    state = initialize(6, seed=13)
    row, col = state.character.cell
    # only the start cell is carved in the bottom row
    assert state.grid.is_wall((row, col - 1))
    before = snapshot(state)
    branch_count = len(state.branches)
    rng_state = state.rng.getstate()

    result = attempt_move(state, Direction.LEFT)

    assert result == MoveResult(accepted=False)
    assert snapshot(state) == before
    assert len(state.branches) == branch_count
    assert state.rng.getstate() == rng_state


def test_climbing_past_the_threshold_slides_the_window():
    state = initialize(3, seed=0, strict=True)  # 9 rows, threshold 6.5

    first = attempt_move(state, Direction.UP)
    assert first.accepted and not first.rebased
    assert state.character.cell == (7, 1)

    second = attempt_move(state, Direction.UP)
    assert second.accepted and second.rebased
    # same cell, one row further from the open edge
    assert state.character.cell == (7, 1)
    assert state.rebase_count == 1
    assert state.grid.row_count == 9


def test_every_climb_past_the_threshold_rebases():
    state = initialize(3, seed=1, strict=True)
    attempt_move(state, Direction.UP)
    for i in range(25):
        result = attempt_move(state, Direction.UP)
        assert result.accepted and result.rebased
        assert len(state.main_path) >= 2
        assert all(0 <= r < 9 for r, _ in state.main_path.cells)
    assert state.rebase_count == 25


def test_down_moves_never_rebase():
    state = initialize(3, seed=0)
    attempt_move(state, Direction.UP)
    result = attempt_move(state, Direction.DOWN)
    assert result.accepted and not result.rebased
    assert state.character.cell == (8, 1)


def test_attempt_move_accepts_direction_names():
    state = initialize(3, seed=0)
    assert attempt_move(state, "w").accepted
    assert attempt_move(state, "down").accepted
    with pytest.raises(ValueError):
        attempt_move(state, "jump")


@pytest.mark.parametrize(
    "name, expected",
    [("up", Direction.UP), ("W", Direction.UP), ("a", Direction.LEFT), (" Right ", Direction.RIGHT)],
)
def test_direction_from_name(name, expected):
    assert Direction.from_name(name) is expected


def test_direction_between_and_path_following():
    assert direction_between((5, 5), (4, 5)) is Direction.UP
    assert direction_between((5, 5), (5, 4)) is Direction.LEFT
    with pytest.raises(ValueError):
        direction_between((5, 5), (3, 5))

    path = Path(kind=PathKind.MAIN, target_length=10, cells=[(9, 2), (8, 2), (8, 3)])
    assert next_step_along(path, (9, 2)) is Direction.UP
    assert next_step_along(path, (8, 2)) is Direction.RIGHT
    assert next_step_along(path, (8, 3)) is None
    assert next_step_along(path, (1, 1)) is None


def test_snapshot_is_frozen_and_detached_from_the_engine():
    state = initialize(5, seed=6)
    snap = snapshot(state)

    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.rows[0][0].is_wall = False  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.character_cell = (0, 0)  # type: ignore[misc]

    state.grid.carve((3, 0))
    assert snap.cell((3, 0)).is_wall
    assert snap.main_path == tuple(state.main_path.cells)
    assert snap.active_paths[0] == snap.main_path
    assert len(snap.rows) == 15 and all(len(row) == 5 for row in snap.rows)
