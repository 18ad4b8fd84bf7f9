"""
Synchronization between one attached engine and the shared document store.

Local engine snapshots are queued and written through to the store; remote
snapshots read back from the store replace engine state only when strictly
newer by last_update (last-write-wins at whole-document granularity). The
echo of our own write carries an equal last_update and is ignored.

Rule rejections and sync failures travel on separate channels: run()
returns the engine's ValidResult alongside any SyncError raised while
persisting. A failed write never rolls back in-memory state; the snapshot
stays queued and the next flush retries it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import structlog

from scoreboard.logic.engine import GameEngine
from scoreboard.logic.exceptions import GameNotFoundError, SyncError

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.logic.events import StateChange
    from scoreboard.logic.registry import SportRegistry
    from scoreboard.logic.rules import SportConfiguration
    from scoreboard.logic.state import Game
    from scoreboard.logic.types import ValidResult
    from scoreboard.sync.store import GameStore

    EngineFactory = Callable[[Game, SportConfiguration], GameEngine]

logger = structlog.get_logger()


class SyncOutcome(NamedTuple):
    """Result of an engine operation applied through GameSync."""

    result: ValidResult
    sync_error: SyncError | None = None

    @property
    def synced(self) -> bool:
        return self.sync_error is None


class GameSync:
    """Owns the engine for one game code and keeps it in step with the store."""

    def __init__(
        self,
        code: str,
        store: GameStore,
        registry: SportRegistry,
        *,
        engine_factory: EngineFactory = GameEngine,
    ) -> None:
        self._code = code
        self._store = store
        self._registry = registry
        self._engine_factory = engine_factory
        self._engine: GameEngine | None = None
        self._pending: Game | None = None
        self._failure: GameNotFoundError | None = None
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def code(self) -> str:
        return self._code

    @property
    def engine(self) -> GameEngine:
        if self._engine is None:
            raise RuntimeError(f"GameSync for {self._code} is not attached")
        return self._engine

    @property
    def is_attached(self) -> bool:
        return self._engine is not None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def failure(self) -> GameNotFoundError | None:
        """Terminal load error, set once the game document disappears."""
        return self._failure

    async def attach(self) -> GameEngine:
        """
        Load the game, resolve its sport and start observing both sides.

        Raises:
            GameNotFoundError: No document exists for the code
            SportResolutionError: The game's sport is unknown or disabled
            SyncError: The store could not be read

        """
        if self._engine is not None:
            return self._engine
        game = await self._store.get_game(self._code)
        if game is None:
            raise GameNotFoundError(self._code)
        config = self._registry.get(game.sport)

        engine = self._engine_factory(game, config)
        self._engine = engine
        self._failure = None
        self._unsubscribers = [
            engine.subscribe(self._on_local_change),
            self._store.subscribe(self._code, self._on_remote_change),
        ]
        logger.info("game attached", game_code=self._code, sport=game.sport, status=game.status)
        return engine

    def detach(self) -> None:
        """Stop observing the engine and the store. Queued snapshots are dropped."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._pending is not None:
            logger.warning("detaching with unsynced snapshot", game_code=self._code)
        self._pending = None
        self._engine = None

    async def flush(self) -> None:
        """
        Write the latest queued snapshot to the store.

        Raises:
            SyncError: The write failed; the snapshot stays queued

        """
        snapshot = self._pending
        if snapshot is None:
            return
        try:
            await self._store.persist_game(self._code, snapshot)
        except SyncError as exc:
            logger.warning(
                "game sync failed",
                game_code=self._code,
                operation=exc.operation,
                reason=exc.reason,
                last_update=snapshot.last_update,
            )
            raise
        if self._pending is snapshot:
            self._pending = None

    async def run(self, operation: Callable[[GameEngine], ValidResult]) -> SyncOutcome:
        """
        Apply an engine operation and write the result through.

        Structural errors raised by the operation propagate unchanged.

        Raises:
            GameNotFoundError: The game document was deleted

        """
        if self._failure is not None:
            raise self._failure
        with structlog.contextvars.bound_contextvars(game_code=self._code):
            result = operation(self.engine)
            try:
                await self.flush()
            except SyncError as exc:
                return SyncOutcome(result, exc)
        return SyncOutcome(result)

    def _on_local_change(self, change: StateChange) -> None:
        if change.is_local:
            self._pending = change.game

    def _on_remote_change(self, game: Game | None) -> None:
        engine = self._engine
        if engine is None:
            return
        if game is None:
            self._failure = GameNotFoundError(self._code)
            self._pending = None
            logger.warning("game document removed", game_code=self._code)
            return
        current = engine.game.last_update
        if game.last_update <= current:
            return
        # a newer remote snapshot supersedes anything still queued locally
        self._pending = None
        engine.load_snapshot(game)
        logger.debug("remote snapshot applied", game_code=self._code, last_update=game.last_update, previous=current)
