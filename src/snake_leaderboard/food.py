"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_leaderboard.grid import Cell, Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places the single food cell on the grid.

    Samples uniformly from the complement of the occupied cells, so the
    food can never land underneath the snake. Uses a seeded NumPy RNG for
    reproducible placement.
    """

    def __init__(self, grid: Grid, rng: np.random.Generator | None = None) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: Cell | None = None

    def place(self, cell: Cell) -> None:
        """Put the food at a fixed cell, which must be empty."""
        from snake_leaderboard.grid import CellType

        if self.grid.get(cell) != CellType.EMPTY:
            raise ValueError(f"Cannot place food on occupied cell {cell}.")
        self.clear()
        self.grid.set(cell, CellType.FOOD)
        self.position = cell

    def resample(self) -> Cell | None:
        """Move the food to a uniformly random empty cell.

        Returns the new position, or ``None`` when the grid has no empty
        cell left.
        """
        from snake_leaderboard.grid import CellType

        self.clear()
        empty = self.grid.empty_cells()
        if not empty:
            logger.warning("No empty cells available for food placement.")
            return None

        idx = int(self.rng.integers(len(empty)))
        self.position = empty[idx]
        self.grid.set(self.position, CellType.FOOD)
        return self.position

    def clear(self) -> None:
        """Remove the food from the grid if it is still marked there."""
        from snake_leaderboard.grid import CellType

        if self.position is not None and self.grid.get(self.position) == CellType.FOOD:
            self.grid.set(self.position, CellType.EMPTY)
        self.position = None
