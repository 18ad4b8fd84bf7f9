"""Abstract interface for the shared game document store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.logic.state import Game

    ChangeCallback = Callable[[Game | None], None]

logger = structlog.get_logger()


class GameStore(ABC):
    """
    Eventually-consistent store holding one document per game code.

    Writes replace the whole document. Observers receive every document
    change through subscribe; None means the document does not exist.
    Failures raise SyncError.
    """

    @abstractmethod
    async def create_game(self, code: str, game: Game) -> None:
        """Insert a new document; raises GameExistsError when the code is taken."""

    @abstractmethod
    async def get_game(self, code: str) -> Game | None: ...

    @abstractmethod
    async def persist_game(self, code: str, game: Game) -> None:
        """Overwrite an existing document with a newer snapshot."""

    @abstractmethod
    async def delete_game(self, code: str) -> None: ...

    @abstractmethod
    def subscribe(self, code: str, on_change: ChangeCallback) -> Callable[[], None]:
        """Observe changes to one document; returns a callable that stops observing."""


class ChangeFeed:
    """In-process fan-out of document changes to per-code subscribers."""

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, list[ChangeCallback]] = defaultdict(list)

    def subscribe(self, code: str, on_change: ChangeCallback) -> Callable[[], None]:
        self._subscribers[code].append(on_change)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(code)
            if callbacks and on_change in callbacks:
                callbacks.remove(on_change)
                if not callbacks:
                    del self._subscribers[code]

        return unsubscribe

    def subscriber_count(self, code: str) -> int:
        return len(self._subscribers.get(code, ()))

    def publish(self, code: str, game: Game | None) -> None:
        """Deliver a change to every subscriber of code; one failing subscriber never blocks the rest."""
        for callback in list(self._subscribers.get(code, ())):
            try:
                callback(game)
            except Exception:
                logger.exception("document subscriber failed", game_code=code)
