"""SQLite-backed game document store."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from scoreboard.logic.exceptions import GameExistsError, SyncError
from scoreboard.logic.state import Game
from scoreboard.sync.store import ChangeFeed, GameStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.sync.store import ChangeCallback
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteGameStore(GameStore):
    """SQLite implementation of GameStore.

    Stores each game as a JSON document with indexed sport, status and
    last_update columns. Subscribers are notified in-process after every
    committed write, so several GameSync instances sharing one store observe
    each other's snapshots.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()
        self._feed = ChangeFeed()

    async def create_game(self, code: str, game: Game) -> None:
        async with self._lock:
            conn = self._db.connection
            try:
                conn.execute(
                    "INSERT INTO games (id, sport, status, last_update, data) VALUES (?, ?, ?, ?, ?)",
                    (code, game.sport, game.status.value, game.last_update, game.model_dump_json()),
                )
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                logger.warning("game code already in use", game_code=code)
                raise GameExistsError(code) from exc
            except sqlite3.Error as exc:
                conn.rollback()
                raise SyncError(game_code=code, operation="create", reason=str(exc)) from exc
        self._feed.publish(code, game)

    async def get_game(self, code: str) -> Game | None:
        try:
            row = self._db.connection.execute("SELECT data FROM games WHERE id = ?", (code,)).fetchone()
        except sqlite3.Error as exc:
            raise SyncError(game_code=code, operation="get", reason=str(exc)) from exc
        if row is None:
            return None
        try:
            return Game.model_validate_json(row[0])
        except ValidationError as exc:
            logger.error("stored game document is invalid", game_code=code, errors=exc.error_count())
            raise SyncError(game_code=code, operation="get", reason="stored document is invalid") from exc

    async def persist_game(self, code: str, game: Game) -> None:
        async with self._lock:
            conn = self._db.connection
            try:
                cursor = conn.execute(
                    "UPDATE games SET sport = ?, status = ?, last_update = ?, data = ? WHERE id = ?",
                    (game.sport, game.status.value, game.last_update, game.model_dump_json(), code),
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise SyncError(game_code=code, operation="persist", reason=str(exc)) from exc
            if cursor.rowcount == 0:
                raise SyncError(game_code=code, operation="persist", reason="game document does not exist")
        self._feed.publish(code, game)

    async def delete_game(self, code: str) -> None:
        async with self._lock:
            conn = self._db.connection
            try:
                cursor = conn.execute("DELETE FROM games WHERE id = ?", (code,))
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise SyncError(game_code=code, operation="delete", reason=str(exc)) from exc
            if cursor.rowcount == 0:
                logger.warning("delete_game had no effect (not found)", game_code=code)
                return
        logger.info("game deleted", game_code=code)
        self._feed.publish(code, None)

    def subscribe(self, code: str, on_change: ChangeCallback) -> Callable[[], None]:
        return self._feed.subscribe(code, on_change)
