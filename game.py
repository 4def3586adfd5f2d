from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pygame

from config_io import load_json_config
from config_parsing import parse_maze_config, parse_view_config
from engine import attempt_move, initialize_from_config, snapshot
from navigation import Direction
from rendering import MazeRenderer, window_size

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
}


def apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a copy of cfg with non-None "maze" overrides applied."""
    merged = dict(cfg)
    maze = dict(merged.get("maze", {})) if isinstance(merged.get("maze"), dict) else {}
    for key, value in (overrides or {}).items():
        if value is not None:
            maze[key] = value
    merged["maze"] = maze
    return merged


class Game:
    """Thin pygame front end: keys in, snapshots out."""

    def __init__(self, cfg_path: Path, overrides: Optional[Dict[str, Any]] = None) -> None:
        self.cfg = apply_overrides(load_json_config(cfg_path), overrides)
        self.maze_cfg = parse_maze_config(self.cfg)
        self.view_cfg = parse_view_config(self.cfg)
        self.state = initialize_from_config(self.maze_cfg)
        self.renderer = MazeRenderer(self.view_cfg)
        self._init_pygame()

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self.screen = pygame.display.set_mode(window_size(snapshot(self.state)))
        pygame.display.set_caption(self.view_cfg.title)
        self.clock = pygame.time.Clock()

    def restart(self) -> None:
        """Throw the current maze away and generate a new one."""
        self.state = initialize_from_config(self.maze_cfg)
        logger.info("maze regenerated")

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_r:
            self.restart()
        elif key == pygame.K_p:
            self.renderer.toggle_paths()
        elif key in KEY_DIRECTIONS:
            result = attempt_move(self.state, KEY_DIRECTIONS[key])
            if result.rebased:
                logger.debug("window slid (%d rebases so far)", self.state.rebase_count)
        return True

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN and not self._handle_keydown(e.key):
                return False
        return True

    def run(self) -> None:
        """Run the main loop until the window is closed."""
        running = True
        while running:
            self.clock.tick(60)
            running = self._handle_events()
            self.renderer.render_frame(self.screen, snapshot(self.state))
        pygame.quit()
