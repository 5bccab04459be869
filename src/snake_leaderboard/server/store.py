"""PostgreSQL-backed score storage."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from snake_leaderboard.server.models import ScoreRecord

logger = logging.getLogger(__name__)

TABLE_NAME = "snake_scores"

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id SERIAL PRIMARY KEY,
    player_name VARCHAR(50) NOT NULL,
    score INTEGER NOT NULL CHECK (score >= 0),
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS {TABLE_NAME}_score_idx ON {TABLE_NAME} (score DESC);
"""


class StoreError(Exception):
    """Raised when the score store cannot complete a query."""


class ScoreStore(Protocol):
    """Operations the HTTP layer needs from a score store."""

    def top_scores(self, limit: int) -> list[ScoreRecord]: ...

    def add_score(self, player_name: str, score: int) -> int: ...

    def close(self) -> None: ...


def _preview(sql: str) -> str:
    text = " ".join(sql.split())
    return text[:100] + ("..." if len(text) > 100 else "")


class PostgresScoreStore:
    """Score store over a psycopg2 connection pool.

    The pool is created once and shared by every request; :meth:`close`
    disposes it on shutdown.
    """

    def __init__(self, pool: ThreadedConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def connect(
        cls, dsn: str, min_connections: int = 1, max_connections: int = 5,
    ) -> PostgresScoreStore:
        """Open a connection pool for *dsn*."""
        try:
            pool = ThreadedConnectionPool(
                min_connections, max_connections,
                dsn=dsn, cursor_factory=RealDictCursor,
            )
        except psycopg2.Error as exc:
            logger.error("Failed to connect to PostgreSQL: %s", exc)
            raise StoreError("Could not connect to the score database.") from exc
        logger.info(
            "Opened PostgreSQL pool (min=%d, max=%d).",
            min_connections, max_connections,
        )
        return cls(pool)

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        """Borrow a pooled connection; commit on success, roll back on error."""
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cursor:
                yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    def _execute(self, sql: str, params: tuple = ()) -> list[dict]:
        start = time.perf_counter()
        try:
            with self._cursor() as cursor:
                cursor.execute(sql, params)
                rows = cursor.fetchall() if cursor.description else []
                rowcount = cursor.rowcount
        except psycopg2.Error as exc:
            logger.error("Error executing query %r: %s", _preview(sql), exc)
            raise StoreError("Score database query failed.") from exc
        logger.debug(
            "Executed query %r in %.1fms (rows=%d).",
            _preview(sql), (time.perf_counter() - start) * 1000, rowcount,
        )
        return rows

    def create_schema(self) -> None:
        """Create the scores table and index if they do not exist."""
        self._execute(_SCHEMA)
        logger.info("Ensured table %s exists.", TABLE_NAME)

    def top_scores(self, limit: int = 10) -> list[ScoreRecord]:
        """Return the best *limit* scores, ties in insertion order."""
        rows = self._execute(
            f"SELECT player_name, score FROM {TABLE_NAME} "
            "ORDER BY score DESC, id ASC LIMIT %s",
            (limit,),
        )
        return [ScoreRecord(**row) for row in rows]

    def add_score(self, player_name: str, score: int) -> int:
        """Insert a score and return its generated id."""
        rows = self._execute(
            f"INSERT INTO {TABLE_NAME} (player_name, score) "
            "VALUES (%s, %s) RETURNING id",
            (player_name, score),
        )
        if len(rows) != 1:
            logger.error("Insert into %s returned %d rows.", TABLE_NAME, len(rows))
            raise StoreError("Score insert did not return an id.")
        return int(rows[0]["id"])

    def close(self) -> None:
        if not self._pool.closed:
            self._pool.closeall()
            logger.info("Closed PostgreSQL pool.")
