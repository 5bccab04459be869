"""Async HTTP client that submits scores and keeps a leaderboard view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx
from pydantic import TypeAdapter

from snake_leaderboard.config import DEFAULT_API_URL
from snake_leaderboard.server.models import ScoreCreated, ScoreRecord

logger = logging.getLogger(__name__)

SUBMIT_ERROR = "Could not save your score."
FETCH_ERROR = "Could not load the leaderboard."

_RECORDS = TypeAdapter(list[ScoreRecord])


@dataclass
class LeaderboardView:
    """What the player sees: the last good list plus an optional warning."""

    entries: list[ScoreRecord] = field(default_factory=list)
    error: str | None = None


class ScoreClient:
    """Client for the ``/high-scores`` endpoints.

    Failures never raise; they are logged and reported through
    :attr:`view`'s ``error`` so an active game is never interrupted.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        http_client: httpx.AsyncClient | None = None,
        limit: int = 10,
        timeout: float = 5.0,
    ) -> None:
        self._owns_client = http_client is None
        self._http = (
            http_client if http_client is not None
            else httpx.AsyncClient(base_url=base_url, timeout=timeout)
        )
        self.limit = limit
        self.view = LeaderboardView()
        self._in_flight: set[object] = set()

    @property
    def submitting(self) -> bool:
        return bool(self._in_flight)

    async def submit_score(
        self, player_name: str, score: int, game_key: object = None,
    ) -> bool:
        """Store a final score, then refresh the leaderboard.

        Zero scores, blank names and a second submission for a *game_key*
        that is still in flight are skipped without a request. Different
        keys may submit concurrently. Returns whether the score was stored.
        """
        if score <= 0:
            logger.debug("Not submitting non-positive score %d.", score)
            return False
        name = player_name.strip()
        if not name:
            logger.debug("Not submitting score without a player name.")
            return False
        if game_key in self._in_flight:
            logger.warning(
                "Score submission for game %r already in flight; skipping.", game_key,
            )
            return False

        self._in_flight.add(game_key)
        try:
            resp = await self._http.post(
                "/high-scores", json={"player_name": name, "score": score},
            )
            resp.raise_for_status()
            created = ScoreCreated.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as exc:
            # pydantic's ValidationError and JSON decode errors are ValueErrors.
            logger.warning("Score submission failed: %s", exc)
            self.view.error = SUBMIT_ERROR
            return False
        finally:
            self._in_flight.discard(game_key)

        logger.info("Submitted score %d for '%s' (id=%d).", score, name, created.id)
        await self.fetch_leaderboard()
        return True

    async def fetch_leaderboard(self) -> list[ScoreRecord]:
        """Refresh the leaderboard; keep the previous list on failure."""
        try:
            resp = await self._http.get("/high-scores")
            resp.raise_for_status()
            entries = _RECORDS.validate_python(resp.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Leaderboard fetch failed: %s", exc)
            self.view.error = FETCH_ERROR
            return self.view.entries

        self.view.entries = entries[: self.limit]
        self.view.error = None
        return self.view.entries

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> ScoreClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
