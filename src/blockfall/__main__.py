"""Command line entry point.

Run with: `python -m blockfall`

Without options a pygame window opens.  ``--headless STEPS`` instead runs the
given number of simulation ticks without a display and prints the final
frame, which is handy as a smoke test.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import GameConfig
from .game import Game, Mode
from .utils import format_grid, render_grid


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--width", type=int, default=None, help="Grid width in cells.")
    parser.add_argument("--height", type=int, default=None, help="Grid height in cells.")
    parser.add_argument("--tick-ms", type=float, default=None, help="Milliseconds per fall step.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shape sequence.")
    parser.add_argument(
        "--headless",
        type=int,
        default=None,
        metavar="STEPS",
        help="Run STEPS ticks without a window and print the final grid.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def run_headless(config: GameConfig, steps: int, seed: Optional[int] = None) -> Game:
    """Run ``steps`` ticks with no input and return the finished game."""

    game = Game(config, seed=seed)
    for _ in range(steps):
        game.advance(game.tick_interval_ms)
        if game.mode is Mode.GAME_OVER:
            break
    return game


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    config = GameConfig.from_mapping(
        {"width": args.width, "height": args.height, "tick_ms": args.tick_ms}
    )

    if args.headless is not None:
        game = run_headless(config, args.headless, seed=args.seed)
        print(format_grid(render_grid(game.grid, game.figure)))
        print(f"Score: {game.score}  Mode: {game.mode.value}")
        return

    from .run_pygame import main as run_window

    run_window(config, seed=args.seed)


if __name__ == "__main__":
    main()
