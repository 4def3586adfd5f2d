from __future__ import annotations

import argparse
import logging
from pathlib import Path

from config_io import load_json_config
from config_parsing import parse_log_level


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Walk an endless, randomly generated maze.")
    p.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Path to the JSON config (default: config.json)",
    )
    p.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible maze.")
    p.add_argument(
        "--blocks",
        type=int,
        default=None,
        help="Blocks per side (overrides maze.blocks_per_side).",
    )
    return p.parse_args()


def main() -> None:
    """Entrypoint for running the maze from the command line."""
    args = parse_args()
    cfg_path = Path(args.config)
    logging.basicConfig(
        level=parse_log_level(load_json_config(cfg_path)),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from game import Game  # local import keeps pygame init out of --help

    Game(cfg_path, {"seed": args.seed, "blocks_per_side": args.blocks}).run()


if __name__ == "__main__":
    main()
