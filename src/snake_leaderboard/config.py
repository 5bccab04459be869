"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://127.0.0.1:8000"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}.")
    return value


@dataclass(frozen=True)
class Settings:
    """Server and client settings.

    ``database_url`` is only needed by the server; the terminal client
    runs without it.
    """

    database_url: str | None = None
    pool_min: int = 1
    pool_max: int = 5
    leaderboard_limit: int = 10
    api_url: str = DEFAULT_API_URL
    tick_ms: int = 300

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Settings:
        """Build settings from environment variables (and ``.env``)."""
        if dotenv:
            load_dotenv()
        settings = cls(
            database_url=os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL"),
            pool_min=_int_env("SNAKE_DB_POOL_MIN", 1, minimum=1),
            pool_max=_int_env("SNAKE_DB_POOL_MAX", 5, minimum=1),
            leaderboard_limit=_int_env("SNAKE_LEADERBOARD_LIMIT", 10, minimum=1),
            api_url=os.getenv("SNAKE_API_URL") or DEFAULT_API_URL,
            tick_ms=_int_env("SNAKE_TICK_MS", 300, minimum=1),
        )
        if settings.pool_max < settings.pool_min:
            raise ValueError("SNAKE_DB_POOL_MAX must be >= SNAKE_DB_POOL_MIN.")
        return settings

    def require_database_url(self) -> str:
        """Return the connection string or fail fast when it is missing."""
        if not self.database_url:
            raise ValueError(
                "Missing POSTGRES_URL environment variable "
                "(DATABASE_URL is accepted as a fallback).",
            )
        return self.database_url
