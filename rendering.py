from __future__ import annotations

from typing import Iterable

import pygame

from game_types import Handle
from models import CellView, Snapshot, ViewConfig


def visible_rows(snap: Snapshot) -> range:
    """Row indices of the on-screen window (the bottom `width` rows)."""
    return range(snap.height - snap.width, snap.height)


def window_size(snap: Snapshot) -> tuple[int, int]:
    side = snap.width * snap.tile_size
    return (side, side)


def cell_rect(cell: CellView, tile_size: int) -> pygame.Rect:
    # +1 hides the seams between neighbouring blocks
    return pygame.Rect(int(cell.x), int(cell.y), tile_size + 1, tile_size + 1)


class MazeRenderer:
    """Draws the visible third of a snapshot. Reads only; never touches the engine."""

    def __init__(self, view: ViewConfig) -> None:
        self.view = view
        self.show_paths = view.show_paths

    def toggle_paths(self) -> None:
        self.show_paths = not self.show_paths

    def render_frame(self, screen: pygame.Surface, snap: Snapshot) -> None:
        screen.fill(self.view.bg)
        ts = snap.tile_size

        for r in visible_rows(snap):
            for cell in snap.rows[r]:
                color = self.view.wall_color if cell.is_wall else self.view.floor_color
                pygame.draw.rect(screen, color, cell_rect(cell, ts))

        if self.show_paths:
            for path in snap.active_paths:
                self._draw_path(screen, snap, path)

        self._draw_character(screen, snap)
        pygame.display.flip()

    def _draw_path(self, screen: pygame.Surface, snap: Snapshot, path: Iterable[Handle]) -> None:
        ts = snap.tile_size
        radius = max(1, ts // 6)
        first_visible = snap.height - snap.width
        for handle in path:
            if handle[0] < first_visible:
                continue
            cell = snap.cell(handle)
            center = (int(cell.x + ts / 2), int(cell.y + ts / 2))
            pygame.draw.circle(screen, self.view.path_color, center, radius)

    def _draw_character(self, screen: pygame.Surface, snap: Snapshot) -> None:
        ts = snap.tile_size
        cell = snap.cell(snap.character_cell)
        center = (int(cell.x + ts / 2), int(cell.y + ts / 2))
        radius = max(1, ts // 2)
        pygame.draw.circle(screen, self.view.character_color, center, radius)
        pygame.draw.circle(screen, (0, 0, 0), center, radius, 1)
