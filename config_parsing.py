from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from models import ConfigurationError, MazeConfig, ViewConfig
from utils import as_color, clamp_int, deep_get

MIN_BLOCKS_PER_SIDE = 3
DEFAULT_BLOCKS_PER_SIDE = 30
DEFAULT_TILE_SIZE = 20


def _parse_int(raw: Any, key: str) -> int:
    """Parse a strict integer (bools and floats with a fraction are rejected)."""
    if isinstance(raw, bool):
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def parse_blocks_per_side(raw: Any) -> int:
    """Validate the blocks-per-side setting.

    Raises:
        ConfigurationError: If the value is not an integer >= 3.
    """
    blocks = _parse_int(raw, "maze.blocks_per_side")
    if blocks < MIN_BLOCKS_PER_SIDE:
        raise ConfigurationError(
            f"maze.blocks_per_side must be >= {MIN_BLOCKS_PER_SIDE}, got {blocks}"
        )
    return blocks


def _parse_seed(raw: Any) -> Optional[int]:
    if raw is None:
        return None
    return _parse_int(raw, "maze.seed")


def parse_maze_config(cfg: Dict[str, Any]) -> MazeConfig:
    """Parse engine settings from config data.

    Args:
        cfg: Full config dictionary (the "maze" section is read).

    Returns:
        MazeConfig with defaults applied.

    Raises:
        ConfigurationError: On invalid blocks_per_side, tile_size or seed.
    """
    blocks = parse_blocks_per_side(
        deep_get(cfg, "maze.blocks_per_side", DEFAULT_BLOCKS_PER_SIDE)
    )
    tile_size = clamp_int(
        _parse_int(deep_get(cfg, "maze.tile_size", DEFAULT_TILE_SIZE), "maze.tile_size"),
        2,
        200,
    )
    return MazeConfig(
        blocks_per_side=blocks,
        tile_size=tile_size,
        seed=_parse_seed(deep_get(cfg, "maze.seed", None)),
        check_invariants=bool(deep_get(cfg, "maze.check_invariants", False)),
    )


def parse_view_config(cfg: Dict[str, Any]) -> ViewConfig:
    """Parse window/render settings for the pygame viewer."""
    return ViewConfig(
        title=str(deep_get(cfg, "window.title", "Infinite Maze")),
        bg=as_color(deep_get(cfg, "window.bg", [0, 0, 0]), (0, 0, 0)),
        wall_color=as_color(deep_get(cfg, "render.wall_color", [0, 0, 0]), (0, 0, 0)),
        floor_color=as_color(
            deep_get(cfg, "render.floor_color", [255, 255, 255]), (255, 255, 255)
        ),
        character_color=as_color(
            deep_get(cfg, "render.character_color", [255, 0, 0]), (255, 0, 0)
        ),
        path_color=as_color(
            deep_get(cfg, "render.path_color", [46, 100, 254]), (46, 100, 254)
        ),
        show_paths=bool(deep_get(cfg, "render.show_paths", False)),
    )


def parse_log_level(cfg: Dict[str, Any]) -> int:
    """Return a logging level from the "log_level" key (defaults to INFO)."""
    raw = cfg.get("log_level", "INFO")
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    level = logging.getLevelName(str(raw).strip().upper())
    return level if isinstance(level, int) else logging.INFO
