"""Grid representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np

GRID_SIZE = 20

# A grid cell as (column, row).
Cell = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed square occupancy grid.

    Cells are addressed as ``(column, row)``; the backing array is indexed
    ``[row, column]`` so it prints the way the board looks on screen.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        col, row = cell
        return 0 <= col < self.size and 0 <= row < self.size

    def get(self, cell: Cell) -> CellType:
        col, row = cell
        return CellType(self.cells[row, col])

    def set(self, cell: Cell, cell_type: CellType) -> None:
        col, row = cell
        self.cells[row, col] = cell_type

    def empty_cells(self) -> list[Cell]:
        """Return all empty cells as ``(column, row)`` pairs."""
        rows, cols = np.where(self.cells == CellType.EMPTY)
        return list(zip(cols.tolist(), rows.tolist(), strict=True))
