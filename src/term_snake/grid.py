"""Board geometry and the per-cell view of a game."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

MIN_SIZE = 3

Cell = tuple[int, int]


class BoardPiece(enum.IntEnum):
    """Integer codes stored in the board array."""

    EMPTY = 0
    SNAKE_BODY = 1
    SNAKE_HEAD = 2
    FOOD = 3
    FRUIT = 4


def manhattan_distance(a: Cell, b: Cell) -> int:
    """Return the taxicab distance between two cells.

    Distance is measured on the flat board, not around the wrap.
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class Grid:
    """Fixed ``(rows, cols)`` toroidal board.

    Coordinates use (row, col) ordering consistent with NumPy indexing.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < MIN_SIZE or cols < MIN_SIZE:
            raise ValueError(
                f"Board dimensions must be at least {MIN_SIZE}×{MIN_SIZE}."
            )
        self.rows = rows
        self.cols = cols

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.rows, self.cols

    def wrap(self, row: int, col: int) -> Cell:
        """Wrap coordinates around the board edges."""
        return row % self.rows, col % self.cols

    def neighbour(self, cell: Cell, delta: tuple[int, int]) -> Cell:
        """Return the cell one step from *cell*, re-entering at the far edge."""
        return self.wrap(cell[0] + delta[0], cell[1] + delta[1])

    def occupancy(self, cells: Iterable[Cell]) -> np.ndarray:
        """Return a boolean mask with ``True`` at every cell in *cells*."""
        mask = np.zeros((self.rows, self.cols), dtype=bool)
        for r, c in cells:
            mask[r, c] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return every cell not in *occupied*, in row-major order."""
        rows, cols = np.nonzero(~self.occupancy(occupied))
        return list(zip(rows.tolist(), cols.tolist(), strict=True))

    def paint(
        self,
        snake: Iterable[Cell],
        food: Cell | None = None,
        fruit: Cell | None = None,
    ) -> np.ndarray:
        """Render the board contents into an int8 array of :class:`BoardPiece`.

        Snake segments are painted last so they win over any item drawn
        on the same cell; the first segment is the head.
        """
        cells = np.full(
            (self.rows, self.cols), BoardPiece.EMPTY, dtype=np.int8,
        )
        if food is not None:
            cells[food] = BoardPiece.FOOD
        if fruit is not None:
            cells[fruit] = BoardPiece.FRUIT
        for i, (r, c) in enumerate(snake):
            cells[r, c] = BoardPiece.SNAKE_HEAD if i == 0 else BoardPiece.SNAKE_BODY
        return cells

    def to_dict(self) -> dict:
        """Serialize board geometry to a dictionary."""
        return {"rows": self.rows, "cols": self.cols}
