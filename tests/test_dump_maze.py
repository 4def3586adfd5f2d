from dump_maze import main, snapshot_to_lines, walk_main_path
from engine import initialize, snapshot
from invariants import collect_problems


def test_three_wide_maze_renders_as_a_shaft():
    snap = snapshot(initialize(3, seed=0))
    assert snapshot_to_lines(snap) == ["#+#", "#+#", "#@#"]
    assert snapshot_to_lines(snap, full=True) == ["###"] + ["#+#"] * 7 + ["#@#"]
    assert snapshot_to_lines(snap, show_main=False) == ["#.#", "#.#", "#@#"]


def test_walking_the_main_path_keeps_the_maze_consistent():
    state = initialize(10, seed=17, strict=True)
    report = walk_main_path(state, 200)

    assert report.moves == 200
    assert report.rebases > 0
    assert report.rebases == state.rebase_count
    assert state.character.cell in state.main_path.cells
    assert collect_problems(state) == []


def test_cli_writes_a_map_file(tmp_path, capsys):
    out = tmp_path / "maps" / "maze.map"
    main(["--blocks", "5", "--seed", "1", "--steps", "30", "--strict", "--out", str(out)])

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 5
    assert all(len(line) == 5 for line in lines)
    assert sum(line.count("@") for line in lines) == 1
    assert "Wrote" in capsys.readouterr().out


def test_cli_prints_the_full_grid(capsys):
    main(["--blocks", "4", "--seed", "2", "--full"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 12
    assert lines[-1].count("@") == 1
