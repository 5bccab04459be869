"""REST API route handlers for the high-score leaderboard."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from snake_leaderboard.server.models import (
    ErrorResponse,
    ScoreCreated,
    ScoreRecord,
    ScoreSubmission,
)
from snake_leaderboard.server.store import ScoreStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/high-scores",
    tags=["high-scores"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _get_store(request: Request) -> ScoreStore:
    return request.app.state.store


def _get_limit(request: Request) -> int:
    return getattr(request.app.state, "leaderboard_limit", 10)


def _validation_message(exc: ValidationError) -> str:
    fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
    if "player_name" in fields:
        return "Invalid player name."
    if "score" in fields:
        return "Invalid score."
    return "Invalid request body."


@router.get("")
async def list_high_scores(request: Request) -> list[ScoreRecord]:
    """Return the top scores, best first."""
    store = _get_store(request)
    try:
        return await run_in_threadpool(store.top_scores, _get_limit(request))
    except StoreError as exc:
        logger.exception("GET /high-scores failed.")
        raise HTTPException(
            status_code=500, detail="Failed to load high scores.",
        ) from exc


@router.post("", status_code=201)
async def create_high_score(request: Request) -> ScoreCreated:
    """Validate and store a new score."""
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=400, detail="Invalid request body.") from exc

    try:
        submission = ScoreSubmission.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=400, detail=_validation_message(exc),
        ) from exc

    store = _get_store(request)
    try:
        score_id = await run_in_threadpool(
            store.add_score, submission.player_name, submission.score,
        )
    except StoreError as exc:
        logger.exception("POST /high-scores failed.")
        raise HTTPException(status_code=500, detail="Failed to save score.") from exc

    logger.info(
        "Stored score %d for '%s' (id=%d).",
        submission.score, submission.player_name, score_id,
    )
    return ScoreCreated(message="Score saved.", id=score_id)
