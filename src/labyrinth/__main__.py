from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .app import run_auto, run_gui, run_headless
from .errors import LabyrinthError
from .logging_config import configure_logging
from .rng import resolve_seed
from .settings import LabyrinthSettings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dark-labyrinth",
        description="Explore a procedurally generated labyrinth in the dark",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--seed", type=str, default=None, help="Level seed (int or any string)")
    parser.add_argument("--preset", choices=("easy", "normal", "hard"), default=None, help="Difficulty preset")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file to overlay")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N frames (headless)")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Target tick rate (Hz)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        settings = LabyrinthSettings.load(user_path=args.config, preset=args.preset)
    except (LabyrinthError, ValueError) as exc:
        logger.error("Invalid settings: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    seed = resolve_seed(args.seed)
    if args.gui:
        return run_gui(settings, seed=seed, tick_rate=args.tick_rate)
    if args.headless:
        return run_headless(settings, seed=seed, max_steps=args.max_steps, tick_rate=args.tick_rate)
    return run_auto(settings, seed=seed, max_steps=args.max_steps, tick_rate=args.tick_rate)


if __name__ == "__main__":
    sys.exit(main())
