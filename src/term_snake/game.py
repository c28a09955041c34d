"""Time-driven game state composing grid, snake, and spawner logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from term_snake.grid import BoardPiece, Cell, Grid
from term_snake.snake import Direction, Snake
from term_snake.spawner import fruit_cooldown, fruit_lifetime, spawn_candidate

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 9

# Steps before the first fruit of a run.
INITIAL_FRUIT_COOLDOWN = 120

_NS_PER_MS = 1_000_000
_NS_PER_SECOND = 1_000_000_000


class GameMode(enum.Enum):
    """Coarse run state; only PLAYING advances the simulation."""

    PLAYING = "playing"
    PAUSED = "paused"


class TickOutcome(enum.Enum):
    """Result of :meth:`Game.tick`."""

    CONTINUE = "continue"
    COLLISION = "collision"
    BOARD_FULL = "board_full"

    @property
    def is_over(self) -> bool:
        return self is not TickOutcome.CONTINUE


@dataclass(frozen=True)
class Fruit:
    """A bonus item worth ``remaining_steps × difficulty`` while it lasts."""

    cell: Cell
    remaining_steps: int


def clamp_difficulty(difficulty: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, difficulty))


def speed_for(difficulty: int) -> float:
    """Seconds per simulation step: 350 ms minus 30 ms per difficulty level."""
    return _speed_ns(difficulty) / _NS_PER_SECOND


def _speed_ns(difficulty: int) -> int:
    return (350 - clamp_difficulty(difficulty) * 30) * _NS_PER_MS


class Game:
    """Single-snake game on a wraparound board.

    The caller drives the game with :meth:`tick`, passing the real time
    elapsed since the previous call. Simulation steps happen at a fixed
    rate set by the difficulty, independent of how often ``tick`` is
    called. A step that kills the snake or fills the board is reported
    through the returned :class:`TickOutcome`; ending the run is up to the
    caller.
    """

    def __init__(
        self,
        dimensions: tuple[int, int] = (8, 16),
        difficulty: int = 5,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        rows, cols = dimensions
        self.grid = Grid(rows, cols)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.difficulty = clamp_difficulty(difficulty)

        self.mode = GameMode.PLAYING
        self.snake = Snake()
        self.score = 0
        self.steps = 0
        self.fruit: Fruit | None = None
        self.just_ate = False
        self.moves_until_next_fruit = INITIAL_FRUIT_COOLDOWN
        self._next_tick_in_ns = _speed_ns(self.difficulty)

        food = spawn_candidate(self.grid, self.snake.body, self.rng)
        if food is None:
            raise ValueError("Board is too small to place the initial food.")
        self.food: Cell = food

    # --- queries ---

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.grid.dimensions

    @property
    def speed(self) -> float:
        """Seconds between simulation steps."""
        return speed_for(self.difficulty)

    @property
    def next_tick_in(self) -> float:
        """Seconds left before the next simulation step."""
        return self._next_tick_in_ns / _NS_PER_SECOND

    @property
    def snake_body(self) -> list[Cell]:
        return list(self.snake.body)

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    @property
    def fruit_active(self) -> bool:
        return self.fruit is not None

    @property
    def fruit_remaining(self) -> int | None:
        """Steps left on the current fruit, or ``None`` when there is none."""
        return self.fruit.remaining_steps if self.fruit is not None else None

    def board_array(self) -> np.ndarray:
        """Return the board as an int8 array of :class:`BoardPiece` codes."""
        return self.grid.paint(
            self.snake.body,
            food=self.food,
            fruit=self.fruit.cell if self.fruit is not None else None,
        )

    def board_pieces(self) -> list[list[BoardPiece]]:
        """Return the board contents row by row."""
        return [
            [BoardPiece(code) for code in row]
            for row in self.board_array().tolist()
        ]

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "mode": self.mode.value,
            "steps": self.steps,
            "score": self.score,
            "difficulty": self.difficulty,
            "speed_ms": round(self.speed * 1000),
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": list(self.food),
            "fruit": (
                {
                    "cell": list(self.fruit.cell),
                    "remaining_steps": self.fruit.remaining_steps,
                }
                if self.fruit is not None else None
            ),
            "moves_until_next_fruit": self.moves_until_next_fruit,
        }

    # --- mutation ---

    def pause(self) -> None:
        self.mode = GameMode.PAUSED

    def unpause(self) -> None:
        self.mode = GameMode.PLAYING

    def change_direction(self, direction: Direction) -> None:
        """Buffer a turn for the next step. Ignored while paused."""
        if self.mode is GameMode.PLAYING:
            self.snake.change_direction(direction)

    def tick(self, delta: float) -> TickOutcome:
        """Account for *delta* seconds of real time.

        Takes at most one simulation step, once the accumulated time reaches
        :attr:`speed`. Non-positive deltas (a clock that did not advance)
        are treated as no time passing.
        """
        if self.mode is not GameMode.PLAYING or delta <= 0:
            return TickOutcome.CONTINUE

        remaining_ns = self._next_tick_in_ns - round(delta * _NS_PER_SECOND)
        if remaining_ns > 0:
            self._next_tick_in_ns = remaining_ns
            return TickOutcome.CONTINUE

        outcome = self.step()
        if outcome is not TickOutcome.COLLISION:
            self._next_tick_in_ns = _speed_ns(self.difficulty)
        return outcome

    def step(self) -> TickOutcome:
        """Advance the simulation by exactly one step, ignoring pacing.

        A colliding step changes nothing, not even the buffered turn.
        """
        direction = self.snake.peek_direction()
        new_head = self.grid.neighbour(self.snake.head, direction.value)
        new_body = self.snake.moved_body(new_head, grow=self.just_ate)

        if new_head in new_body[1:]:
            return TickOutcome.COLLISION

        self.snake.resolve_direction()
        self.snake.body = new_body
        self.just_ate = False
        self.steps += 1

        if new_head == self.food:
            self.score += self.difficulty
            self.just_ate = True
            food = spawn_candidate(
                self.grid, self.snake.body, self.rng,
                fruit=self.fruit.cell if self.fruit is not None else None,
            )
            if food is None:
                return TickOutcome.BOARD_FULL
            self.food = food

        self._update_fruit(new_head)
        return TickOutcome.CONTINUE

    def _update_fruit(self, head: Cell) -> None:
        if self.fruit is None:
            if self.moves_until_next_fruit == 0:
                self._spawn_fruit()
            else:
                self.moves_until_next_fruit -= 1
            return

        if self.fruit.remaining_steps == 0:
            self.fruit = None
            self.moves_until_next_fruit = fruit_cooldown(self.rng)
        elif head == self.fruit.cell:
            self.score += self.fruit.remaining_steps * self.difficulty
            self.just_ate = True
            self.fruit = None
            self.moves_until_next_fruit = fruit_cooldown(self.rng)
        else:
            self.fruit = Fruit(self.fruit.cell, self.fruit.remaining_steps - 1)

    def _spawn_fruit(self) -> None:
        cell = spawn_candidate(
            self.grid, self.snake.body, self.rng, food=self.food,
        )
        if cell is not None:
            self.fruit = Fruit(cell, fruit_lifetime(cell, self.snake.head))
