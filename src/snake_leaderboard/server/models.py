"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_NAME_LENGTH = 50
# Upper bound of the PostgreSQL INTEGER column.
MAX_SCORE = 2_147_483_647


class ScoreSubmission(BaseModel):
    """Request body for POST /high-scores.

    Validation is strict, except that a float with no fractional part
    (``5.0``) is taken as the integer score it spells.
    """

    model_config = ConfigDict(strict=True)

    player_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    score: int = Field(ge=0, le=MAX_SCORE)

    @field_validator("player_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("player_name must not contain NUL characters.")
        value = value.strip()
        if not value:
            raise ValueError("player_name must not be blank.")
        return value

    @field_validator("score", mode="before")
    @classmethod
    def _integral_float(cls, value: Any) -> Any:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class ScoreRecord(BaseModel):
    """One leaderboard row."""

    player_name: str
    score: int = Field(ge=0)


class ScoreCreated(BaseModel):
    """Response for a stored score."""

    message: str
    id: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
