"""Tests for the FoodSpawner module."""

import numpy as np
import pytest

from snake_leaderboard.food import FoodSpawner
from snake_leaderboard.grid import CellType, Grid


class TestFoodPlacement:
    def test_place_fixed_cell(self):
        grid = Grid(size=5)
        spawner = FoodSpawner(grid)
        spawner.place((3, 2))
        assert spawner.position == (3, 2)
        assert grid.get((3, 2)) == CellType.FOOD

    def test_place_on_snake_rejected(self):
        grid = Grid(size=5)
        grid.set((1, 1), CellType.SNAKE)
        spawner = FoodSpawner(grid)
        with pytest.raises(ValueError, match="occupied"):
            spawner.place((1, 1))

    def test_place_moves_existing_food(self):
        grid = Grid(size=5)
        spawner = FoodSpawner(grid)
        spawner.place((0, 0))
        spawner.place((4, 4))
        assert grid.get((0, 0)) == CellType.EMPTY
        assert grid.get((4, 4)) == CellType.FOOD


class TestFoodResample:
    def test_resample_lands_on_empty_cell(self):
        grid = Grid(size=5)
        for col in range(5):
            grid.set((col, 0), CellType.SNAKE)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(3))
        for _ in range(50):
            pos = spawner.resample()
            assert pos is not None
            assert pos[1] != 0
            assert grid.get(pos) == CellType.FOOD
            assert int(np.sum(grid.cells == CellType.FOOD)) == 1

    def test_resample_deterministic(self):
        assert self._resample_with_seed(42) == self._resample_with_seed(42)

    def test_resample_different_seeds(self):
        # Very unlikely to match across ten draws.
        assert self._resample_with_seed(1) != self._resample_with_seed(2)

    def test_resample_on_full_grid(self):
        grid = Grid(size=4)
        grid.cells[:] = CellType.SNAKE
        spawner = FoodSpawner(grid)
        assert spawner.resample() is None
        assert spawner.position is None

    @pytest.mark.parametrize("free", [(c, r) for r in range(4) for c in range(4)])
    def test_resample_finds_last_free_cell(self, free):
        grid = Grid(size=4)
        grid.cells[:] = CellType.SNAKE
        grid.set(free, CellType.EMPTY)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(0))
        assert spawner.resample() == free

    @staticmethod
    def _resample_with_seed(seed: int) -> list:
        grid = Grid(size=10)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(seed))
        return [spawner.resample() for _ in range(10)]
