"""Tick-based game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from snake_leaderboard.food import FoodSpawner
from snake_leaderboard.grid import GRID_SIZE, Cell, CellType, Grid
from snake_leaderboard.snake import Direction, Snake

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    """Lifecycle of a game session."""

    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the engine after a tick or lifecycle change."""

    snake: tuple[Cell, ...]
    food: Cell | None
    direction: Direction
    score: int
    phase: Phase
    tick: int
    grid_size: int

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction.label,
            "score": self.score,
            "phase": self.phase.value,
            "tick": self.tick,
            "grid_size": self.grid_size,
        }


class GameEngine:
    """Single-snake, tick-based game engine.

    The engine owns the grid, snake, and food spawner. Direction intents
    are buffered by :meth:`submit_direction` and consumed by the next call
    to :meth:`tick`, which advances the game by one step.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        seed: int | None = None,
        start: Cell | None = None,
        initial_food: Cell | None = None,
        initial_direction: Direction = Direction.RIGHT,
    ) -> None:
        self.grid = Grid(grid_size)
        self.rng = np.random.default_rng(seed)
        self.start = start if start is not None else (grid_size // 2, grid_size // 2)
        self.initial_food = (
            initial_food if initial_food is not None
            else (3 * grid_size // 4, 3 * grid_size // 4)
        )
        self.initial_direction = initial_direction
        if not self.grid.in_bounds(self.start):
            raise ValueError(f"Start cell {self.start} is outside the grid.")
        if not self.grid.in_bounds(self.initial_food):
            raise ValueError(f"Food cell {self.initial_food} is outside the grid.")

        self.food = FoodSpawner(self.grid, rng=self.rng)
        self.reset()

    def reset(self) -> GameState:
        """Start a fresh game: length-1 snake, score 0, phase Running."""
        self.grid.clear()
        self.snake = Snake(self.start, self.initial_direction)
        self.grid.set(self.start, CellType.SNAKE)

        self.food.position = None
        if self.initial_food != self.start:
            self.food.place(self.initial_food)
        else:
            self.food.resample()

        self.score = 0
        self.ticks = 0
        self.phase = Phase.RUNNING
        self._pending_direction = self.initial_direction
        return self.get_state()

    @property
    def direction(self) -> Direction:
        """The committed direction of travel."""
        return self.snake.direction

    @property
    def pending_direction(self) -> Direction:
        return self._pending_direction

    def submit_direction(self, direction: Direction) -> bool:
        """Record a direction intent for the next tick.

        Ignored unless the game is running and *direction* turns off the
        current axis of travel. Returns whether the intent was accepted.
        """
        if self.phase != Phase.RUNNING:
            return False
        if direction.axis == self.snake.direction.axis:
            return False
        self._pending_direction = direction
        return True

    def tick(self) -> GameState:
        """Advance the game by one step and return the new state."""
        if self.phase != Phase.RUNNING:
            return self.get_state()

        new_head = self.snake.next_head(self._pending_direction)

        # --- boundary check ---
        if not self.grid.in_bounds(new_head):
            self._end_game("wall")
            return self.get_state()

        # --- self-collision check ---
        # Uses the pre-tick body minus its tail, before deciding whether
        # the tail moves away this tick.
        if self.snake.hits_body(new_head):
            self._end_game("self")
            return self.get_state()

        # --- move ---
        ate = new_head == self.food.position
        if not ate:
            # Clear the tail first: the head may be moving into its cell.
            vacated = self.snake.body.pop()
            self.grid.set(vacated, CellType.EMPTY)
        self.snake.body.appendleft(new_head)
        self.grid.set(new_head, CellType.SNAKE)

        if ate:
            self.score += 1
            self.food.resample()

        self.snake.direction = self._pending_direction
        self.ticks += 1

        if self.food.position is None:
            self._end_game("board full")
        return self.get_state()

    def pause(self) -> bool:
        """Suspend a running game. Returns whether the phase changed."""
        if self.phase != Phase.RUNNING:
            return False
        self.phase = Phase.PAUSED
        return True

    def resume(self) -> bool:
        """Resume a paused game. Returns whether the phase changed."""
        if self.phase != Phase.PAUSED:
            return False
        self.phase = Phase.RUNNING
        return True

    def toggle_pause(self) -> bool:
        """Flip between Running and Paused; no-op once the game is over."""
        if self.phase == Phase.RUNNING:
            return self.pause()
        return self.resume()

    def get_state(self) -> GameState:
        """Return an immutable snapshot of the current game."""
        return GameState(
            snake=tuple(self.snake.body),
            food=self.food.position,
            direction=self.snake.direction,
            score=self.score,
            phase=self.phase,
            tick=self.ticks,
            grid_size=self.grid.size,
        )

    def _end_game(self, cause: str) -> None:
        self.phase = Phase.OVER
        logger.info(
            "Game over (%s) at tick %d with score %d.",
            cause, self.ticks, self.score,
        )
