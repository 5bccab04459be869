"""Curses front end: draws the board and feeds key presses to a session."""

from __future__ import annotations

import asyncio
import curses
import logging

from snake_leaderboard.client import LeaderboardView, ScoreClient
from snake_leaderboard.engine import GameState, Phase
from snake_leaderboard.session import GameSession
from snake_leaderboard.snake import Direction

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[int, Direction] = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord("w"): Direction.UP,
    ord("s"): Direction.DOWN,
    ord("a"): Direction.LEFT,
    ord("d"): Direction.RIGHT,
}

PAUSE_KEY = ord(" ")
RESET_KEYS = (ord("r"), ord("R"))
QUIT_KEYS = (ord("q"), ord("Q"), 27)

_POLL_INTERVAL = 0.02

_HEAD, _BODY, _FOOD, _EMPTY = "@", "o", "*", "."


def handle_key(session: GameSession, key: int) -> bool:
    """Apply one key press. Returns False when the player wants to quit."""
    if key in QUIT_KEYS:
        return False
    direction = KEY_BINDINGS.get(key)
    if direction is not None:
        session.submit_direction(direction)
    elif key == PAUSE_KEY:
        session.toggle_pause()
    elif key in RESET_KEYS and session.engine.phase == Phase.OVER:
        session.reset()
    return True


def render_lines(
    state: GameState, view: LeaderboardView | None = None, player_name: str = "",
) -> list[str]:
    """Draw the board, status line, and leaderboard as plain text rows."""
    size = state.grid_size
    rows = [[_EMPTY] * size for _ in range(size)]
    if state.food is not None:
        col, row = state.food
        rows[row][col] = _FOOD
    for i, (col, row) in enumerate(state.snake):
        rows[row][col] = _HEAD if i == 0 else _BODY

    lines = [f"Score: {state.score}"]
    lines.append("+" + "-" * size + "+")
    lines.extend("|" + "".join(r) + "|" for r in rows)
    lines.append("+" + "-" * size + "+")

    if state.phase == Phase.PAUSED:
        lines.append("Paused (space to resume)")
    elif state.phase == Phase.OVER:
        lines.append("Game over! Press r to restart, q to quit.")
    else:
        lines.append("Arrows/WASD move, space pauses, q quits")

    if view is not None:
        lines.append("")
        lines.append("High scores" + (f" (playing as {player_name})" if player_name else ""))
        if view.error:
            lines.append(f"! {view.error}")
        if not view.entries:
            lines.append("  no scores yet")
        for rank, entry in enumerate(view.entries, start=1):
            lines.append(f"{rank:>3}. {entry.player_name:<20} {entry.score:>5}")
    return lines


def _draw(stdscr, lines: list[str]) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    for y, line in enumerate(lines[: height - 1]):
        try:
            stdscr.addstr(y, 0, line[: width - 1])
        except curses.error:
            # Writing the bottom-right cell raises even though it succeeds.
            pass
    stdscr.refresh()


async def _play(stdscr, session: GameSession, client: ScoreClient | None) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.nodelay(True)
    stdscr.keypad(True)

    dirty = True

    def _mark_dirty(_state: GameState) -> None:
        nonlocal dirty
        dirty = True

    session.subscribe(_mark_dirty)
    if client is not None:
        await client.fetch_leaderboard()
    session.start()

    last_view = None
    try:
        while True:
            key = stdscr.getch()
            if key != -1:
                if not handle_key(session, key):
                    break
                dirty = True

            view = client.view if client is not None else None
            snapshot = (tuple(view.entries), view.error) if view is not None else None
            if dirty or snapshot != last_view:
                _draw(stdscr, render_lines(session.state, view, session.player_name))
                dirty = False
                last_view = snapshot
            await asyncio.sleep(_POLL_INTERVAL)
    finally:
        await session.close()


def run(session: GameSession, client: ScoreClient | None = None) -> None:
    """Play *session* in the current terminal until the player quits."""

    async def _main(stdscr) -> None:
        try:
            await _play(stdscr, session, client)
        finally:
            if client is not None:
                await client.aclose()

    curses.wrapper(lambda stdscr: asyncio.run(_main(stdscr)))
    logger.info("Terminal game finished with score %d.", session.state.score)
