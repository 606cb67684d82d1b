"""Play termtris in the terminal.

Run with: `python -m termtris`

Controls: left/right arrows move, up rotates, down drops, ``p`` pauses and
``q`` quits.  ``--snapshot`` prints a single ASCII frame instead of starting
curses, which is handy as a smoke test.
"""

from __future__ import annotations

from typing import List, Optional, Sequence
import argparse
import logging
import sys
import time

from .config import GameConfig
from .game_state import GameState
from .utils import render_grid


LOGGER = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--fall-interval",
        type=_positive_float,
        default=GameConfig.initial_fall_interval,
        help="Seconds between automatic falls at the first level.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log messages to this file (the terminal is busy drawing the game).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Print the opening frame as ASCII and exit.",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level: str) -> None:
    threshold = getattr(logging, level.upper(), logging.INFO)
    if log_file is None:
        root = logging.getLogger()
        root.addHandler(logging.NullHandler())
        root.setLevel(threshold)
        return
    logging.basicConfig(
        filename=log_file,
        level=threshold,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        force=True,
    )


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def play(stdscr, config: GameConfig) -> None:
    """Run a game on the curses screen handed over by :func:`curses.wrapper`.

    The renderer checks the terminal before any game state is created.
    """

    from .render import CursesInput, CursesRenderer
    from .runner import GameRunner

    renderer = CursesRenderer(stdscr)
    state = GameState(config=config)
    state.reset_game()
    GameRunner(state, renderer, CursesInput(stdscr)).run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    seed = args.seed if args.seed is not None else time.time_ns() // 1000
    config = GameConfig(initial_fall_interval=args.fall_interval, seed=seed)
    LOGGER.info("Starting termtris with seed %d", seed)

    if args.snapshot:
        state = GameState(config=config)
        state.reset_game()
        print(format_grid(render_grid(state.board, state.active)))
        return 0

    # Imported lazily so snapshots work where curses is unavailable.
    import curses

    from .render import TerminalError

    try:
        curses.wrapper(play, config)
    except (TerminalError, curses.error) as exc:
        print(f"termtris: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
