import json
import logging
import random

import pytest

from config_io import load_json_config
from config_parsing import parse_log_level, parse_maze_config, parse_view_config
from engine import initialize_from_config
from game import apply_overrides
from models import ConfigurationError
from utils import roll_odds


def test_maze_config_defaults():
    cfg = parse_maze_config({})
    assert cfg.blocks_per_side == 30
    assert cfg.tile_size == 20
    assert cfg.seed is None
    assert cfg.check_invariants is False


@pytest.mark.parametrize("blocks", [2, 0, "abc", True, 4.5, None])
def test_invalid_blocks_per_side_is_a_configuration_error(blocks):
    with pytest.raises(ConfigurationError):
        parse_maze_config({"maze": {"blocks_per_side": blocks}})


def test_whole_float_and_numeric_string_blocks_are_accepted():
    assert parse_maze_config({"maze": {"blocks_per_side": 12.0}}).blocks_per_side == 12
    assert parse_maze_config({"maze": {"blocks_per_side": "7"}}).blocks_per_side == 7


def test_tile_size_is_clamped_and_seed_parsed():
    cfg = parse_maze_config({"maze": {"tile_size": 1000, "seed": 42, "check_invariants": True}})
    assert cfg.tile_size == 200
    assert cfg.seed == 42
    assert cfg.check_invariants is True


def test_view_config_colors_fall_back_on_bad_values():
    view = parse_view_config(
        {"window": {"title": "Maze"}, "render": {"wall_color": "red", "floor_color": [300, -5, 10]}}
    )
    assert view.title == "Maze"
    assert view.wall_color == (0, 0, 0)
    assert view.floor_color == (255, 0, 10)
    assert view.show_paths is False


@pytest.mark.parametrize(
    "raw, expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("nonsense", logging.INFO), (10, 10)],
)
def test_log_level(raw, expected):
    assert parse_log_level({"log_level": raw}) == expected


def test_load_json_config_reads_objects(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"maze": {"blocks_per_side": 9}}), encoding="utf-8")
    assert load_json_config(path) == {"maze": {"blocks_per_side": 9}}


def test_load_json_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_load_json_config_invalid_json_exits(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"maze": {', encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_overrides_only_replace_given_values():
    merged = apply_overrides(
        {"maze": {"blocks_per_side": 30, "tile_size": 12}}, {"seed": 5, "blocks_per_side": None}
    )
    assert merged["maze"] == {"blocks_per_side": 30, "tile_size": 12, "seed": 5}


def test_engine_from_config():
    state = initialize_from_config(
        parse_maze_config({"maze": {"blocks_per_side": 7, "seed": 3, "check_invariants": True}})
    )
    assert state.width == 7
    assert state.height == 21
    assert state.strict


def test_load_json_config_rejects_a_non_object_root(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_roll_odds_bounds():
    rng = random.Random(0)
    assert not any(roll_odds(rng, (0, 7)) for _ in range(200))
    assert all(roll_odds(rng, (7, 7)) for _ in range(200))
