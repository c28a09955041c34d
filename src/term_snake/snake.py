"""Snake body and direction buffering."""

from __future__ import annotations

import enum

from term_snake.grid import Cell

INITIAL_BODY: tuple[Cell, ...] = ((0, 0), (0, 1), (0, 2))


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    def is_orthogonal_to(self, other: Direction) -> bool:
        """True when one direction is vertical and the other horizontal."""
        return self.is_vertical != other.is_vertical


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered list of (row, col) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Turns are buffered
    in :attr:`pending_direction` and only committed by
    :meth:`resolve_direction`, once per simulation step, so two quick key
    presses between steps can never fold the snake back onto itself.
    """

    def __init__(
        self,
        body: list[Cell] | None = None,
        direction: Direction = Direction.DOWN,
    ) -> None:
        self.body: list[Cell] = list(body if body is not None else INITIAL_BODY)
        if not self.body:
            raise ValueError("Snake body must have at least 1 segment.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake body segments must be distinct.")
        self.direction = direction
        self.pending_direction: Direction | None = None

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def change_direction(self, requested: Direction) -> None:
        """Buffer a turn, ignoring requests along the current axis."""
        if requested.is_orthogonal_to(self.direction):
            self.pending_direction = requested

    def peek_direction(self) -> Direction:
        """Return the direction the next step will take, committing nothing."""
        if self.pending_direction is not None:
            return self.pending_direction
        return self.direction

    def resolve_direction(self) -> Direction:
        """Commit the buffered turn, if any, and return the direction."""
        if self.pending_direction is not None:
            self.direction = self.pending_direction
            self.pending_direction = None
        return self.direction

    def moved_body(self, new_head: Cell, grow: bool = False) -> list[Cell]:
        """Return the body after moving the head to *new_head*.

        With *grow* the whole previous body is kept behind the new head;
        otherwise every segment takes its predecessor's place and the tail
        cell is released. The snake itself is not modified.
        """
        if grow:
            return [new_head, *self.body]
        return [new_head, *self.body[:-1]]

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "pending_direction": (
                self.pending_direction.name.lower()
                if self.pending_direction is not None else None
            ),
        }
