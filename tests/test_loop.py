"""Tests for the frame loop."""

import curses
from unittest.mock import MagicMock

from term_snake.config import GameConfig
from term_snake.game import Game, GameMode
from term_snake.loop import (
    KEY_ESCAPE,
    NO_KEY,
    GameLoop,
    LoopSignal,
    key_to_direction,
)
from term_snake.snake import Direction, Snake


def make_screen(keys=(), size=(24, 80)):
    screen = MagicMock()
    screen.getmaxyx.return_value = size
    screen.getch.side_effect = [*keys, *([NO_KEY] * 50)]
    return screen


def make_loop(keys=(), size=(24, 80), difficulty=5, **config):
    game = Game((8, 16), difficulty, seed=0)
    game.food = (5, 10)
    screen = make_screen(keys, size)
    return GameLoop(game, GameConfig(difficulty=difficulty, **config), screen)


def make_colliding(game):
    game.snake = Snake(
        [(2, 2), (2, 3), (3, 3), (3, 2), (3, 1), (2, 1)], Direction.DOWN,
    )


class TestKeyMapping:
    def test_arrows(self):
        assert key_to_direction(curses.KEY_UP) is Direction.UP
        assert key_to_direction(curses.KEY_DOWN) is Direction.DOWN
        assert key_to_direction(curses.KEY_LEFT) is Direction.LEFT
        assert key_to_direction(curses.KEY_RIGHT) is Direction.RIGHT

    def test_vim_and_wasd(self):
        assert key_to_direction(ord("k")) is Direction.UP
        assert key_to_direction(ord("j")) is Direction.DOWN
        assert key_to_direction(ord("a")) is Direction.LEFT
        assert key_to_direction(ord("d")) is Direction.RIGHT

    def test_unmapped(self):
        assert key_to_direction(ord("z")) is None


class TestGameFrame:
    def test_direction_key_buffers_turn(self):
        loop = make_loop(keys=[curses.KEY_RIGHT])
        assert loop.frame(0.01) is None
        assert loop.game.snake.pending_direction is Direction.RIGHT

    def test_escape_pauses(self):
        loop = make_loop(keys=[KEY_ESCAPE])
        loop.frame(0.01)
        assert loop.game.mode is GameMode.PAUSED

    def test_small_window_pauses(self):
        loop = make_loop(size=(10, 10))
        loop.frame(0.01)
        assert loop.game.mode is GameMode.PAUSED

    def test_step_taken_after_speed(self):
        loop = make_loop()
        loop.frame(0.2)
        assert loop.game.steps == 1

    def test_collision_ends_loop(self):
        loop = make_loop()
        make_colliding(loop.game)
        assert loop.frame(0.2) is LoopSignal.GAME_OVER


class TestPauseFrame:
    def test_quit(self):
        loop = make_loop(keys=[ord("q")])
        loop.game.pause()
        assert loop.frame(0.01) is LoopSignal.EXIT

    def test_escape_resumes(self):
        loop = make_loop(keys=[KEY_ESCAPE])
        loop.game.pause()
        assert loop.frame(0.01) is None
        assert loop.game.mode is GameMode.PLAYING

    def test_no_tick_while_paused(self):
        loop = make_loop()
        loop.game.pause()
        loop.frame(5.0)
        assert loop.game.steps == 0


class TestRun:
    def test_frame_limiter_and_game_over(self):
        loop = make_loop(difficulty=9, fps_limit=10)
        make_colliding(loop.game)
        times = iter([0.0, 0.05, 0.1])
        sleeps = []
        loop.clock = lambda: next(times)
        loop.sleep = sleeps.append

        assert loop.run() is LoopSignal.GAME_OVER
        assert len(sleeps) == 1
        assert abs(sleeps[0] - 0.05) < 1e-9
        loop.screen.nodelay.assert_called_once_with(True)

    def test_quit_from_pause(self):
        loop = make_loop(keys=[KEY_ESCAPE, ord("q")], fps_limit=10)
        times = iter([0.0, 0.1, 0.2])
        loop.clock = lambda: next(times)
        loop.sleep = lambda _: None
        assert loop.run() is LoopSignal.EXIT
