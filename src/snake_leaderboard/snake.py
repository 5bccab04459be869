"""Snake representation and direction handling."""

from __future__ import annotations

import enum
from collections import deque

from snake_leaderboard.grid import Cell


class Axis(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Direction(enum.Enum):
    """Cardinal movement directions with (column_delta, row_delta) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def axis(self) -> Axis:
        dx, _ = self.value
        return Axis.HORIZONTAL if dx else Axis.VERTICAL

    @property
    def label(self) -> str:
        return self.name.lower()


class Snake:
    """A snake stored as a deque of cells.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, start: Cell, direction: Direction = Direction.RIGHT) -> None:
        self.body: deque[Cell] = deque([start])
        self.direction = direction

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction) -> Cell:
        """Compute where the head lands when moving one step in *direction*."""
        dx, dy = direction.value
        col, row = self.head
        return col + dx, row + dy

    def hits_body(self, cell: Cell) -> bool:
        """Check *cell* against every segment except the current tail.

        The tail vacates its cell on the same tick the head moves, so a
        length-1 snake can never collide with itself.
        """
        return any(seg == cell for seg in list(self.body)[:-1])
