"""Command-line entry point for playing in the terminal."""

from __future__ import annotations

import argparse
import curses
import logging
import sys

from term_snake import render
from term_snake.config import MAX_SIZE, GameConfig
from term_snake.game import MAX_DIFFICULTY, MIN_DIFFICULTY, Game
from term_snake.grid import MIN_SIZE
from term_snake.loop import GameLoop, LoopSignal

logger = logging.getLogger(__name__)


def _bounded_int(low: int, high: int):
    """argparse type accepting integers in ``[low, high]``."""

    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(
                f"{number} is not in {low}..{high}"
            )
        return number

    return parse


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description="Play snake on a wraparound board in the terminal.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument(
        "-d", "--difficulty", default=None,
        type=_bounded_int(MIN_DIFFICULTY, MAX_DIFFICULTY),
        help="Game speed, 1 (slow) to 9 (fast). Default: 5.",
    )
    parser.add_argument(
        "--width", default=None, type=_bounded_int(MIN_SIZE, MAX_SIZE - 1),
        help="Board width. Default: 16.",
    )
    parser.add_argument(
        "--height", default=None, type=_bounded_int(MIN_SIZE, MAX_SIZE - 1),
        help="Board height. Default: 8.",
    )
    parser.add_argument(
        "--show-fps", action="store_true", default=None,
        help="Show an FPS counter.",
    )
    parser.add_argument(
        "--fps-limit", default=None, type=_bounded_int(1, 10_000),
        help="Maximum frames drawn per second. Default: 300.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for food and fruit placement.",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs to this file instead of stderr.",
    )
    parser.add_argument(
        "--log-level", type=str, default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging threshold. Default: WARNING.",
    )
    return parser


def build_config(args: argparse.Namespace) -> GameConfig:
    """Merge the JSON config (if any) with command-line overrides."""
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    for name in ("width", "height", "difficulty", "show_fps", "fps_limit", "seed"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val

    if overrides:
        config = config.replace(**overrides)
    return config


def _play(screen, game: Game, config: GameConfig) -> LoopSignal:
    curses.curs_set(0)
    render.init_colors()
    return GameLoop(game, config, screen).run()


def final_message(signal: LoopSignal, score: int) -> str:
    if signal is LoopSignal.GAME_OVER:
        return f"Game over! You scored {score} points!"
    return f"Thanks for playing! You scored {score} points!"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``term-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        filename=args.log_file,
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = build_config(args)
    except (OSError, ValueError, TypeError) as exc:
        parser.error(f"invalid config: {exc}")

    game = Game(config.dimensions, config.difficulty, seed=config.seed)
    logger.info(
        "Starting %dx%d game at difficulty %d.",
        config.height, config.width, config.difficulty,
    )

    try:
        signal = curses.wrapper(_play, game, config)
    except KeyboardInterrupt:
        signal = LoopSignal.EXIT
    except curses.error:
        logger.exception("Terminal error.")
        print("Unexpected error")  # noqa: T201
        return 1

    print(final_message(signal, game.score))  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
