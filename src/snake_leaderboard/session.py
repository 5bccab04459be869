"""Fixed-interval async tick loop driving a single game engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from snake_leaderboard.client import ScoreClient
from snake_leaderboard.engine import GameEngine, GameState, Phase
from snake_leaderboard.snake import Direction

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class GameSession:
    """Runs one :class:`GameEngine` under an asyncio timer.

    The timer only exists while the game is running; pausing, game over,
    and :meth:`close` all cancel it. When the game ends, the final score
    is handed to the score client in its own task so a slow or failing
    submission never holds up :meth:`reset`. Each game gets at most one
    submission; games are numbered by :attr:`game_id`, which
    :meth:`reset` advances.
    """

    def __init__(
        self,
        engine: GameEngine | None = None,
        tick_ms: int = 300,
        score_client: ScoreClient | None = None,
        player_name: str = "",
        close_grace: float = 2.0,
    ) -> None:
        if tick_ms < 1:
            raise ValueError("tick_ms must be at least 1.")
        self.engine = engine if engine is not None else GameEngine()
        self.tick_interval = tick_ms / 1000.0
        self.score_client = score_client
        self.player_name = player_name
        self.close_grace = close_grace
        self.game_id = 0
        self._listeners: list[StateListener] = []
        self._task: asyncio.Task | None = None
        self._submissions: dict[int, asyncio.Task] = {}

    @property
    def state(self) -> GameState:
        return self.engine.get_state()

    @property
    def ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def submission(self) -> asyncio.Task | None:
        """The score submission of the current game, if any."""
        return self._submissions.get(self.game_id)

    def subscribe(self, listener: StateListener) -> None:
        """Call *listener* with the new state after every change."""
        self._listeners.append(listener)

    def start(self) -> None:
        """Start the timer if the game is running and it is not already."""
        if self.engine.phase == Phase.RUNNING and not self.ticking:
            self._task = asyncio.create_task(self._tick_loop())

    def submit_direction(self, direction: Direction) -> bool:
        return self.engine.submit_direction(direction)

    def pause(self) -> None:
        if self.engine.pause():
            self._stop_timer()
            self._notify()

    def resume(self) -> None:
        if self.engine.resume():
            self.start()
            self._notify()

    def toggle_pause(self) -> None:
        if self.engine.phase == Phase.RUNNING:
            self.pause()
        else:
            self.resume()

    def reset(self) -> None:
        """Begin a new game immediately, leaving any submission running."""
        self._stop_timer()
        self.game_id += 1
        self.engine.reset()
        self._notify()
        self.start()

    async def close(self) -> None:
        """Cancel the timer, then give pending submissions a short grace period.

        Submissions still running after :attr:`close_grace` seconds are
        cancelled.
        """
        self._stop_timer()
        pending = [t for t in self._submissions.values() if not t.done()]
        if pending:
            _, late = await asyncio.wait(pending, timeout=self.close_grace)
            for task in late:
                task.cancel()
            if late:
                logger.warning("Cancelled %d unfinished score submission(s).", len(late))
                await asyncio.gather(*late, return_exceptions=True)
        self._submissions.clear()
        logger.info("Game session closed.")

    async def _tick_loop(self) -> None:
        try:
            while self.engine.phase == Phase.RUNNING:
                await asyncio.sleep(self.tick_interval)
                if self.engine.phase != Phase.RUNNING:
                    break
                state = self.engine.tick()
                self._notify(state)
                if state.phase == Phase.OVER:
                    self._on_game_over(state)
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
            raise

    def _on_game_over(self, state: GameState) -> None:
        if self.score_client is None:
            return
        if self.game_id in self._submissions:
            logger.warning("Game %d already submitted its score; skipping.", self.game_id)
            return
        self._submissions = {
            key: task for key, task in self._submissions.items() if not task.done()
        }
        self._submissions[self.game_id] = asyncio.create_task(
            self.score_client.submit_score(
                self.player_name, state.score, game_key=(id(self), self.game_id),
            ),
        )

    def _stop_timer(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _notify(self, state: GameState | None = None) -> None:
        state = state if state is not None else self.engine.get_state()
        for listener in self._listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed.")
