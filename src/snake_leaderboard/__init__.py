"""Snake Leaderboard: core game engine and score submission client."""

from snake_leaderboard.client import LeaderboardView, ScoreClient
from snake_leaderboard.engine import GameEngine, GameState, Phase
from snake_leaderboard.grid import GRID_SIZE, Grid
from snake_leaderboard.session import GameSession
from snake_leaderboard.snake import Direction, Snake

__all__ = [
    "GRID_SIZE",
    "Direction",
    "GameEngine",
    "GameSession",
    "GameState",
    "Grid",
    "LeaderboardView",
    "Phase",
    "ScoreClient",
    "Snake",
]
