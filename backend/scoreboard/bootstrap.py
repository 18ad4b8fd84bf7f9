"""Composition root: wire settings, database, store and registry into a service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog

from scoreboard.logic.registry import build_registry
from scoreboard.service import ScoreboardService
from scoreboard.settings import ScoreboardSettings
from scoreboard.sports import BUNDLED_SPORTS
from scoreboard.sync.sqlite_store import SqliteGameStore
from shared.db import Database
from shared.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger()


@asynccontextmanager
async def open_scoreboard(
    settings: ScoreboardSettings | None = None,
    *,
    configure_logging: bool = False,
) -> AsyncIterator[ScoreboardService]:
    """
    Yield a ready ScoreboardService backed by the SQLite store.

    On exit every open game is flushed and closed before the database
    connection is released.
    """
    if settings is None:
        settings = ScoreboardSettings()
    if configure_logging:
        setup_logging(log_dir=settings.log_dir, level=settings.log_level, log_format=settings.log_format)

    registry = build_registry(BUNDLED_SPORTS, disabled=settings.disabled_sports)
    db = Database(settings.db_path)
    db.connect()
    service = ScoreboardService(SqliteGameStore(db), registry, settings=settings)
    logger.info("scoreboard started", db_path=settings.db_path, sports=[m.id for m in service.list_sports()])
    try:
        yield service
    finally:
        await service.close_all()
        db.close()
        logger.info("scoreboard stopped")
