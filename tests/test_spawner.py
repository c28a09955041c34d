"""Tests for the spawner module."""

import numpy as np

from term_snake.grid import Grid, manhattan_distance
from term_snake.spawner import (
    FRUIT_COOLDOWN_RANGE,
    fruit_cooldown,
    fruit_lifetime,
    sample_candidates,
    spawn_candidate,
)


class FixedChoiceRng:
    """Stands in for a Generator whose ``choice`` returns preset indices."""

    def __init__(self, indices):
        self.indices = indices
        self.calls = []

    def choice(self, n, size, replace):
        self.calls.append((n, size, replace))
        return np.array(self.indices[:size])


class TestSampleCandidates:
    def test_at_most_three(self):
        rng = np.random.default_rng(0)
        free = [(r, c) for r in range(5) for c in range(5)]
        sample = sample_candidates(free, rng)
        assert len(sample) == 3
        assert len(set(sample)) == 3
        assert all(cell in free for cell in sample)

    def test_fewer_free_than_sample(self):
        rng = np.random.default_rng(0)
        assert sorted(sample_candidates([(0, 0), (1, 1)], rng)) == [(0, 0), (1, 1)]

    def test_empty(self):
        assert sample_candidates([], np.random.default_rng(0)) == []

    def test_draws_without_replacement(self):
        rng = FixedChoiceRng([0, 1, 2])
        sample_candidates([(0, 0), (0, 1), (0, 2), (1, 0)], rng)
        assert rng.calls == [(4, 3, False)]


class TestSpawnCandidate:
    def test_never_on_occupied_cells(self):
        grid = Grid(4, 4)
        snake = [(0, 0), (0, 1), (0, 2)]
        for seed in range(50):
            cell = spawn_candidate(
                grid, snake, np.random.default_rng(seed),
                food=(3, 3), fruit=(2, 2),
            )
            assert cell is not None
            assert cell not in snake
            assert cell not in ((3, 3), (2, 2))

    def test_picks_furthest_sampled_cell(self):
        grid = Grid(5, 5)
        snake = [(0, 0), (0, 1), (0, 2)]
        # Free cells in row-major order start at (0, 3); index 21 is (4, 4).
        rng = FixedChoiceRng([0, 21, 2])
        assert spawn_candidate(grid, snake, rng) == (4, 4)

    def test_tie_goes_to_first_sampled(self):
        grid = Grid(5, 5)
        snake = [(0, 0), (0, 1), (0, 2)]
        # (1, 2) and (0, 3) are both 3 steps from the head.
        rng = FixedChoiceRng([4, 0])
        assert spawn_candidate(grid, snake, rng) == (1, 2)

    def test_single_free_cell(self):
        grid = Grid(3, 3)
        snake = [(r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1)]
        assert spawn_candidate(grid, snake, np.random.default_rng(0)) == (1, 1)

    def test_full_board_returns_none(self):
        grid = Grid(3, 3)
        snake = [(r, c) for r in range(3) for c in range(3) if (r, c) != (2, 2)]
        cell = spawn_candidate(
            grid, snake, np.random.default_rng(0), food=(2, 2),
        )
        assert cell is None

    def test_deterministic_with_seed(self):
        grid = Grid(10, 10)
        snake = [(0, 0), (0, 1), (0, 2)]
        a = spawn_candidate(grid, snake, np.random.default_rng(42))
        b = spawn_candidate(grid, snake, np.random.default_rng(42))
        assert a == b

    def test_biased_away_from_head(self):
        grid = Grid(10, 10)
        snake = [(0, 0), (0, 1), (0, 2)]
        rng = np.random.default_rng(7)
        chosen = [spawn_candidate(grid, snake, rng) for _ in range(300)]
        uniform = grid.free_cells(snake)
        mean_chosen = np.mean([manhattan_distance(c, (0, 0)) for c in chosen])
        mean_uniform = np.mean([manhattan_distance(c, (0, 0)) for c in uniform])
        assert mean_chosen > mean_uniform


class TestFruitTiming:
    def test_cooldown_in_range(self):
        rng = np.random.default_rng(3)
        low, high = FRUIT_COOLDOWN_RANGE
        draws = [fruit_cooldown(rng) for _ in range(500)]
        assert all(low <= d < high for d in draws)
        assert all(isinstance(d, int) for d in draws)

    def test_lifetime_is_twice_distance(self):
        assert fruit_lifetime((4, 4), (0, 0)) == 16
        assert fruit_lifetime((0, 1), (0, 0)) == 2
