"""Tests for the PostgreSQL score store (pool mocked)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from snake_leaderboard.server.models import ScoreRecord
from snake_leaderboard.server.store import PostgresScoreStore, StoreError


@pytest.fixture()
def pool():
    pool = MagicMock()
    pool.closed = False
    return pool


def _cursor(pool):
    conn = pool.getconn.return_value
    return conn, conn.cursor.return_value.__enter__.return_value


class TestQueries:
    def test_top_scores(self, pool):
        _, cursor = _cursor(pool)
        cursor.description = [("player_name",), ("score",)]
        cursor.fetchall.return_value = [
            {"player_name": "Ann", "score": 9},
            {"player_name": "Bob", "score": 4},
        ]
        store = PostgresScoreStore(pool)
        assert store.top_scores(10) == [
            ScoreRecord(player_name="Ann", score=9),
            ScoreRecord(player_name="Bob", score=4),
        ]
        sql, params = cursor.execute.call_args.args
        assert "ORDER BY score DESC, id ASC" in sql
        assert params == (10,)

    def test_add_score_returns_id(self, pool):
        conn, cursor = _cursor(pool)
        cursor.description = [("id",)]
        cursor.fetchall.return_value = [{"id": 7}]
        cursor.rowcount = 1
        store = PostgresScoreStore(pool)
        assert store.add_score("Ann", 5) == 7
        sql, params = cursor.execute.call_args.args
        assert sql.startswith("INSERT INTO snake_scores")
        assert params == ("Ann", 5)
        conn.commit.assert_called_once()
        pool.putconn.assert_called_once_with(conn)

    def test_add_score_without_row_fails(self, pool):
        _, cursor = _cursor(pool)
        cursor.description = [("id",)]
        cursor.fetchall.return_value = []
        store = PostgresScoreStore(pool)
        with pytest.raises(StoreError, match="did not return"):
            store.add_score("Ann", 5)

    def test_create_schema(self, pool):
        _, cursor = _cursor(pool)
        cursor.description = None
        store = PostgresScoreStore(pool)
        store.create_schema()
        sql = cursor.execute.call_args.args[0]
        assert "CREATE TABLE IF NOT EXISTS snake_scores" in sql
        cursor.fetchall.assert_not_called()


class TestFailures:
    def test_query_error_rolls_back_and_releases(self, pool):
        conn, cursor = _cursor(pool)
        cursor.execute.side_effect = psycopg2.OperationalError("server closed")
        store = PostgresScoreStore(pool)
        with pytest.raises(StoreError):
            store.top_scores(10)
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(conn)

    def test_connect_failure(self):
        with patch(
            "snake_leaderboard.server.store.ThreadedConnectionPool",
            side_effect=psycopg2.OperationalError("no route to host"),
        ):
            with pytest.raises(StoreError, match="connect"):
                PostgresScoreStore.connect("postgresql://u:p@nowhere/db")

    def test_connect_builds_pool(self):
        with patch(
            "snake_leaderboard.server.store.ThreadedConnectionPool",
        ) as pool_cls:
            store = PostgresScoreStore.connect("postgresql://db", 2, 4)
        assert isinstance(store, PostgresScoreStore)
        args, kwargs = pool_cls.call_args
        assert args == (2, 4)
        assert kwargs["dsn"] == "postgresql://db"


class TestClose:
    def test_close_disposes_pool(self, pool):
        PostgresScoreStore(pool).close()
        pool.closeall.assert_called_once()

    def test_close_twice_is_safe(self, pool):
        store = PostgresScoreStore(pool)
        store.close()
        pool.closed = True
        store.close()
        pool.closeall.assert_called_once()
