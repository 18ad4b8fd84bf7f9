"""
Scoreboard service: game lifecycle on top of the document store.

Creates games under fresh codes, opens them for scoring (one GameSync per
open code), and closes or deletes them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from scoreboard.logic.engine import GameEngine
from scoreboard.logic.exceptions import GameExistsError, SyncError
from scoreboard.logic.game import generate_game_code, init_game
from scoreboard.logic.registry import default_registry
from scoreboard.settings import ScoreboardSettings
from scoreboard.sync.adapter import GameSync

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.logic.registry import SportRegistry
    from scoreboard.logic.rules import SportMeta
    from scoreboard.logic.state import Game
    from scoreboard.logic.types import TeamSetup
    from scoreboard.sync.adapter import EngineFactory
    from scoreboard.sync.store import GameStore

logger = structlog.get_logger()


class ScoreboardService:
    """Owning layer for games: the only place that creates GameSync instances."""

    def __init__(
        self,
        store: GameStore,
        registry: SportRegistry | None = None,
        *,
        settings: ScoreboardSettings | None = None,
        engine_factory: EngineFactory = GameEngine,
        code_factory: Callable[[], str] = generate_game_code,
    ) -> None:
        self._store = store
        self._registry = registry if registry is not None else default_registry()
        self._settings = settings if settings is not None else ScoreboardSettings()
        self._engine_factory = engine_factory
        self._code_factory = code_factory
        self._syncs: dict[str, GameSync] = {}

    def list_sports(self) -> list[SportMeta]:
        return self._registry.list_enabled()

    async def create_game(
        self,
        sport_id: str,
        team_a: TeamSetup,
        team_b: TeamSetup,
        *,
        game_name: str = "",
        venue: str | None = None,
        host_id: str = "",
        host_name: str | None = None,
        track_player_stats: bool = True,
    ) -> Game:
        """
        Create and store a new game in setup status.

        Code collisions are retried with a fresh code up to the configured
        number of attempts.

        Raises:
            SportResolutionError: The sport is unknown or disabled
            SyncError: The store failed, or no free code was found

        """
        config = self._registry.get(sport_id)
        attempts = self._settings.game_code_attempts
        code = ""
        for attempt in range(1, attempts + 1):
            code = self._code_factory()
            game = init_game(
                config,
                code,
                team_a,
                team_b,
                game_name=game_name,
                venue=venue,
                host_id=host_id,
                host_name=host_name,
                track_player_stats=track_player_stats,
            )
            try:
                await self._store.create_game(code, game)
            except GameExistsError:
                logger.warning("game code collision, retrying", game_code=code, attempt=attempt)
                continue
            logger.info("game created", game_code=code, sport=sport_id)
            return game
        raise SyncError(game_code=code, operation="create", reason=f"no free game code after {attempts} attempts")

    async def open_game(self, code: str) -> GameSync:
        """
        Attach to a stored game, reusing the sync already open for code.

        Raises:
            GameNotFoundError: No game is stored under code
            SportResolutionError: The game's sport is unknown or disabled

        """
        sync = self._syncs.get(code)
        if sync is not None:
            return sync
        sync = GameSync(code, self._store, self._registry, engine_factory=self._engine_factory)
        await sync.attach()
        self._syncs[code] = sync
        return sync

    def get_sync(self, code: str) -> GameSync | None:
        return self._syncs.get(code)

    async def close_game(self, code: str) -> None:
        """
        Flush any queued snapshot and detach.

        Raises:
            SyncError: The final write failed; the game is detached regardless

        """
        sync = self._syncs.pop(code, None)
        if sync is None:
            return
        try:
            if sync.failure is None:
                await sync.flush()
        finally:
            sync.detach()

    async def delete_game(self, code: str) -> None:
        sync = self._syncs.pop(code, None)
        if sync is not None:
            sync.detach()
        await self._store.delete_game(code)

    async def close_all(self) -> None:
        """Close every open game, flushing best effort."""
        for code in list(self._syncs):
            try:
                await self.close_game(code)
            except SyncError:
                logger.exception("failed to flush game on shutdown", game_code=code)
