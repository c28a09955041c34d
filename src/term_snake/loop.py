"""Frame-limited main loop driving a :class:`Game` on a curses screen."""

from __future__ import annotations

import curses
import enum
import logging
import time
from collections.abc import Callable

from term_snake import render
from term_snake.config import GameConfig
from term_snake.game import Game, GameMode
from term_snake.snake import Direction

logger = logging.getLogger(__name__)

KEY_ESCAPE = 27
NO_KEY = -1

KEY_DIRECTIONS: dict[int, Direction] = {
    curses.KEY_UP: Direction.UP,
    ord("k"): Direction.UP,
    ord("w"): Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    ord("j"): Direction.DOWN,
    ord("s"): Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    ord("h"): Direction.LEFT,
    ord("a"): Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord("l"): Direction.RIGHT,
    ord("d"): Direction.RIGHT,
}

QUIT_KEYS = frozenset({ord("q"), ord("x")})


class LoopSignal(enum.Enum):
    """Why the loop stopped."""

    EXIT = "exit"
    GAME_OVER = "game_over"


def key_to_direction(key: int) -> Direction | None:
    return KEY_DIRECTIONS.get(key)


class GameLoop:
    """Owns the per-frame cycle: measure time, tick, draw, read input.

    Frames are capped at ``config.fps_limit``; the time actually elapsed
    between frames is handed to :meth:`Game.tick`.
    """

    def __init__(
        self,
        game: Game,
        config: GameConfig,
        screen,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.game = game
        self.config = config
        self.screen = screen
        self.clock = clock
        self.sleep = sleep

    def run(self) -> LoopSignal:
        """Run frames until the player quits or the game ends."""
        self.screen.nodelay(True)
        self.screen.clear()

        frame_time = self.config.frame_time
        last_frame = self.clock()
        while True:
            now = self.clock()
            delta = now - last_frame
            if delta < frame_time:
                self.sleep(frame_time - delta)
                continue
            last_frame = now

            signal = self.frame(delta)
            if signal is not None:
                return signal

    def frame(self, delta: float) -> LoopSignal | None:
        """Run one frame; return a signal when the loop should stop."""
        if self.game.mode is GameMode.PAUSED:
            return self._pause_frame()
        return self._game_frame(delta)

    def _window(self) -> tuple[int, int]:
        rows, cols = self.screen.getmaxyx()
        return rows, cols

    def _game_frame(self, delta: float) -> LoopSignal | None:
        outcome = self.game.tick(delta)
        if outcome.is_over:
            logger.info(
                "Run ended (%s) after %d steps with score %d.",
                outcome.value, self.game.steps, self.game.score,
            )
            return LoopSignal.GAME_OVER

        window = self._window()
        if not render.is_window_big_enough(self.game.dimensions, window):
            logger.debug("Window %s too small, pausing.", window)
            self.game.pause()
            self.screen.clear()
            return None

        render.draw_game_frame(
            self.screen, self.game, window, delta,
            show_fps=self.config.show_fps,
        )

        key = self.screen.getch()
        if key == NO_KEY:
            return None
        direction = key_to_direction(key)
        if direction is not None:
            self.game.change_direction(direction)
        elif key == KEY_ESCAPE:
            self.screen.clear()
            self.game.pause()
        elif key == curses.KEY_RESIZE:
            self.screen.clear()
        return None

    def _pause_frame(self) -> LoopSignal | None:
        window = self._window()
        if render.is_window_big_enough(self.game.dimensions, window):
            render.draw_pause_screen(self.screen, window)
        else:
            render.draw_too_small(self.screen, self.game.dimensions)

        key = self.screen.getch()
        if key in QUIT_KEYS:
            return LoopSignal.EXIT
        if key == KEY_ESCAPE:
            self.screen.clear()
            self.game.unpause()
        elif key == curses.KEY_RESIZE:
            self.screen.clear()
        return None
