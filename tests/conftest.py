"""Shared fixtures: an in-memory score store and an HTTP client for the app."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_leaderboard.config import Settings
from snake_leaderboard.server.app import create_app
from snake_leaderboard.server.models import ScoreRecord
from snake_leaderboard.server.store import StoreError

BASE = "http://test"


class FakeScoreStore:
    """List-backed stand-in for the PostgreSQL store."""

    def __init__(self) -> None:
        self.rows: list[tuple[int, str, int]] = []
        self.fail = False
        self.closed = False

    def top_scores(self, limit: int = 10) -> list[ScoreRecord]:
        if self.fail:
            raise StoreError("connection refused")
        ordered = sorted(self.rows, key=lambda row: (-row[2], row[0]))
        return [
            ScoreRecord(player_name=name, score=score)
            for _, name, score in ordered[:limit]
        ]

    def add_score(self, player_name: str, score: int) -> int:
        if self.fail:
            raise StoreError("connection refused")
        row_id = len(self.rows) + 1
        self.rows.append((row_id, player_name, score))
        return row_id

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def store():
    return FakeScoreStore()


@pytest.fixture()
def app(store):
    return create_app(store=store, settings=Settings())


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
