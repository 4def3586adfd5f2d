#!/usr/bin/env python3
"""
dump_maze.py

Headless preview of the endless maze as ASCII.

- Builds an engine (blocks per side and seed from the config or flags)
- Optionally walks the character N steps along the main path, which slides
  the window every time it climbs past the rebase threshold
- Prints the visible window (or the whole grid with --full), or writes it
  to a .map file

Legend:
    #  wall
    .  floor
    +  main path
    @  character
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from config_io import load_json_config
from config_parsing import parse_log_level, parse_maze_config
from engine import attempt_move, initialize, snapshot
from maze_state import EngineState
from models import InvariantViolation, Snapshot
from navigation import next_step_along

logger = logging.getLogger(__name__)

WALL_TILE = "#"
FLOOR_TILE = "."
MAIN_PATH_TILE = "+"
CHARACTER_TILE = "@"


@dataclass(frozen=True)
class WalkReport:
    moves: int
    rebases: int


def walk_main_path(state: EngineState, steps: int) -> WalkReport:
    """Move the character up to `steps` cells along the main path.

    Stops early if the character is not on the main path or reaches its tip.
    """
    moves = 0
    rebases = 0
    for _ in range(steps):
        if state.main_path is None or state.character is None:
            break
        direction = next_step_along(state.main_path, state.character.cell)
        if direction is None:
            break
        result = attempt_move(state, direction)
        if not result.accepted:
            raise InvariantViolation(
                f"main path step {direction.name} from {state.character.cell} was rejected"
            )
        moves += 1
        rebases += int(result.rebased)
    return WalkReport(moves=moves, rebases=rebases)


def snapshot_to_lines(snap: Snapshot, full: bool = False, show_main: bool = True) -> List[str]:
    """Render a snapshot as one string per grid row."""
    first = 0 if full else snap.height - snap.width
    main = set(snap.main_path) if show_main else set()
    lines: List[str] = []
    for r in range(first, snap.height):
        chars = []
        for cell in snap.rows[r]:
            handle = (cell.row, cell.col)
            if handle == snap.character_cell:
                chars.append(CHARACTER_TILE)
            elif cell.is_wall:
                chars.append(WALL_TILE)
            elif handle in main:
                chars.append(MAIN_PATH_TILE)
            else:
                chars.append(FLOOR_TILE)
        lines.append("".join(chars))
    return lines


def write_map(path: Path, lines: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print an ASCII view of the endless maze.")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON config (maze.* and log_level are read).",
    )
    p.add_argument("--blocks", type=int, default=None, help="Blocks per side.")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible output.")
    p.add_argument(
        "--steps",
        type=int,
        default=0,
        help="Walk the character this many steps along the main path first.",
    )
    p.add_argument("--full", action="store_true", help="Show the off-screen rows too.")
    p.add_argument("--out", type=str, default=None, help="Write the map to this file.")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Check engine invariants after every rebase.",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.steps < 0:
        raise SystemExit("steps must be >= 0")

    cfg = load_json_config(Path(args.config)) if args.config else {}
    logging.basicConfig(level=parse_log_level(cfg))
    maze_cfg = parse_maze_config(cfg)

    state = initialize(
        args.blocks if args.blocks is not None else maze_cfg.blocks_per_side,
        tile_size=maze_cfg.tile_size,
        seed=args.seed if args.seed is not None else maze_cfg.seed,
        strict=args.strict or maze_cfg.check_invariants,
    )
    report = walk_main_path(state, args.steps)
    lines = snapshot_to_lines(snapshot(state), full=args.full)

    if args.out:
        write_map(Path(args.out), lines)
        print(f"Wrote {args.out}: {len(lines)} rows | {report.moves} moves, {report.rebases} rebases")
    else:
        print("\n".join(lines))
        logger.info("%d moves, %d rebases", report.moves, report.rebases)


if __name__ == "__main__":
    main()
