"""Food and fruit placement."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from term_snake.grid import Cell, Grid, manhattan_distance

# Free cells considered per placement.
CANDIDATE_SAMPLE = 3

# Steps between a fruit disappearing and the next one appearing: [low, high).
FRUIT_COOLDOWN_RANGE: tuple[int, int] = (30, 180)


def sample_candidates(
    free: Sequence[Cell],
    rng: np.random.Generator,
    size: int = CANDIDATE_SAMPLE,
) -> list[Cell]:
    """Draw up to *size* distinct cells from *free* in random order."""
    needed = min(size, len(free))
    if needed == 0:
        return []
    indices = rng.choice(len(free), size=needed, replace=False)
    return [free[idx] for idx in indices.tolist()]


def spawn_candidate(
    grid: Grid,
    snake: Sequence[Cell],
    rng: np.random.Generator,
    food: Cell | None = None,
    fruit: Cell | None = None,
) -> Cell | None:
    """Pick a free cell for a new collectible, or ``None`` if the board is full.

    A handful of free cells is sampled and the one furthest (Manhattan) from
    the snake head wins, so items rarely appear right in front of the snake.
    Ties go to the cell sampled first.
    """
    occupied: list[Cell] = list(snake)
    if food is not None:
        occupied.append(food)
    if fruit is not None:
        occupied.append(fruit)

    candidates = sample_candidates(grid.free_cells(occupied), rng)
    if not candidates:
        return None

    head = snake[0]
    return max(candidates, key=lambda cell: manhattan_distance(cell, head))


def fruit_cooldown(rng: np.random.Generator) -> int:
    """Draw the number of steps until the next fruit."""
    low, high = FRUIT_COOLDOWN_RANGE
    return int(rng.integers(low, high))


def fruit_lifetime(cell: Cell, head: Cell) -> int:
    """Steps a fruit at *cell* stays on the board: twice its distance to *head*."""
    return 2 * manhattan_distance(cell, head)
