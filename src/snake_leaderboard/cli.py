"""Command-line entry point for the snake game and leaderboard server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from snake_leaderboard.config import Settings

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-leaderboard",
        description="Snake game with a server-persisted high-score leaderboard.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the high-score HTTP API.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # --- play ---
    play_p = sub.add_parser("play", help="Play in the terminal.")
    play_p.add_argument(
        "--name", type=str, default="",
        help="Player name used for the leaderboard (omit to play offline).",
    )
    play_p.add_argument("--api-url", type=str, default=None)
    play_p.add_argument("--tick-ms", type=int, default=None)
    play_p.add_argument("--seed", type=int, default=None)
    play_p.add_argument(
        "--log-file", type=str, default="snake-leaderboard.log",
        help="Where to write logs while the board owns the terminal.",
    )

    # --- scores ---
    scores_p = sub.add_parser("scores", help="Print the leaderboard.")
    scores_p.add_argument("--api-url", type=str, default=None)

    # --- init-db ---
    sub.add_parser("init-db", help="Create the scores table.")

    return parser


def _run_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from snake_leaderboard.server.app import create_app

    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)
    return 0


def _run_play(args: argparse.Namespace, settings: Settings) -> int:
    from snake_leaderboard import terminal
    from snake_leaderboard.client import ScoreClient
    from snake_leaderboard.engine import GameEngine
    from snake_leaderboard.session import GameSession

    client = None
    if args.name.strip():
        client = ScoreClient(
            args.api_url or settings.api_url, limit=settings.leaderboard_limit,
        )
    session = GameSession(
        GameEngine(seed=args.seed),
        tick_ms=args.tick_ms or settings.tick_ms,
        score_client=client,
        player_name=args.name.strip(),
    )
    terminal.run(session, client)
    print(f"Final score: {session.state.score}")  # noqa: T201
    return 0


def _run_scores(args: argparse.Namespace, settings: Settings) -> int:
    from snake_leaderboard.client import ScoreClient

    async def _fetch() -> tuple[list, str | None]:
        async with ScoreClient(
            args.api_url or settings.api_url, limit=settings.leaderboard_limit,
        ) as client:
            entries = await client.fetch_leaderboard()
            return entries, client.view.error

    entries, error = asyncio.run(_fetch())
    if error:
        print(error, file=sys.stderr)  # noqa: T201
        return 1
    if not entries:
        print("No scores yet.")  # noqa: T201
    for rank, entry in enumerate(entries, start=1):
        print(f"{rank:>3}. {entry.player_name:<20} {entry.score:>5}")  # noqa: T201
    return 0


def _run_init_db(args: argparse.Namespace, settings: Settings) -> int:
    from snake_leaderboard.server.store import PostgresScoreStore

    store = PostgresScoreStore.connect(settings.require_database_url())
    try:
        store.create_schema()
    finally:
        store.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-leaderboard`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    if args.command == "play":
        logging.basicConfig(level=level, format=_LOG_FORMAT, filename=args.log_file)
    else:
        logging.basicConfig(level=level, format=_LOG_FORMAT)

    if args.command is None:
        parser.print_help()
        return 1

    settings = Settings.from_env()
    handlers = {
        "serve": _run_serve,
        "play": _run_play,
        "scores": _run_scores,
        "init-db": _run_init_db,
    }
    return handlers[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
