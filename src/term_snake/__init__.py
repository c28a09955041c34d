"""term-snake: wraparound snake game for the terminal."""

from term_snake.config import GameConfig
from term_snake.game import Fruit, Game, GameMode, TickOutcome, speed_for
from term_snake.grid import BoardPiece, Grid, manhattan_distance
from term_snake.snake import Direction, Snake
from term_snake.spawner import spawn_candidate

__all__ = [
    "BoardPiece",
    "Direction",
    "Fruit",
    "Game",
    "GameConfig",
    "GameMode",
    "Grid",
    "Snake",
    "TickOutcome",
    "manhattan_distance",
    "spawn_candidate",
    "speed_for",
]
