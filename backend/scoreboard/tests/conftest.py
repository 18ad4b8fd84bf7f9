from __future__ import annotations

from itertools import count
from typing import TYPE_CHECKING

import pytest

from scoreboard.logic.engine import GameEngine
from scoreboard.logic.enums import GameStatus, Side
from scoreboard.logic.game import init_game
from scoreboard.logic.registry import build_registry
from scoreboard.logic.state_utils import set_score, update_state
from scoreboard.logic.types import PlayerSetup, TeamSetup
from scoreboard.sports import BADMINTON, BASKETBALL, BUNDLED_SPORTS, KABADDI
from scoreboard.tests.mocks import MemoryGameStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.logic.rules import SportConfiguration
    from scoreboard.logic.state import Game

TEST_CODE = "TEST42"
CREATED_AT = 1_700_000_000_000


# ============================================================================
# Test State Builder Helpers
# ============================================================================


class FakeClock:
    """Deterministic millisecond clock for engines under test."""

    def __init__(self, start: int = CREATED_AT) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> int:
        self.now += ms
        return self.now


def sequential_ids(prefix: str = "act") -> Callable[[], str]:
    counter = count(1)
    return lambda: f"{prefix}_{next(counter)}"


def create_team_setup(name: str, side: Side, players: int = 5) -> TeamSetup:
    """TeamSetup with players a1..aN or b1..bN, the first five starting."""
    prefix = side.value.lower()
    return TeamSetup(
        name=name,
        players=[
            PlayerSetup(id=f"{prefix}{n}", number=str(n), name=f"Player {prefix.upper()}{n}", is_starter=n <= 5)
            for n in range(1, players + 1)
        ],
    )


def create_game(
    config: SportConfiguration = BASKETBALL,
    *,
    status: GameStatus = GameStatus.LIVE,
    players: int = 5,
    code: str = TEST_CODE,
    track_player_stats: bool = True,
) -> Game:
    """A fresh game for config, live by default."""
    return init_game(
        config,
        code,
        create_team_setup("Home", Side.A, players),
        create_team_setup("Away", Side.B, players),
        game_name="Test Game",
        host_id="host-1",
        track_player_stats=track_player_stats,
        status=status,
        created_at=CREATED_AT,
    )


def create_engine(
    config: SportConfiguration = BASKETBALL,
    *,
    game: Game | None = None,
    clock: FakeClock | None = None,
    **game_options,
) -> GameEngine:
    return GameEngine(
        game if game is not None else create_game(config, **game_options),
        config,
        clock=clock if clock is not None else FakeClock(),
        action_ids=sequential_ids(),
    )


def with_scores(game: Game, score_a: int, score_b: int, *, period_start: tuple[int, int] = (0, 0)) -> Game:
    """Set both team scores directly, bypassing the action log."""
    game = set_score(game, Side.A, score_a)
    game = set_score(game, Side.B, score_b)
    start = game.state.period_start_scores.model_copy(update={"A": period_start[0], "B": period_start[1]})
    return update_state(game, period_start_scores=start)


def live_scores(engine: GameEngine) -> tuple[int, int]:
    return engine.game.teams[Side.A].score, engine.game.teams[Side.B].score


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def basketball(clock):
    return create_engine(BASKETBALL, clock=clock)


@pytest.fixture
def badminton(clock):
    return create_engine(BADMINTON, clock=clock, players=2)


@pytest.fixture
def kabaddi(clock):
    return create_engine(KABADDI, clock=clock, players=7)


@pytest.fixture
def registry():
    return build_registry(BUNDLED_SPORTS)


@pytest.fixture
def memory_store():
    return MemoryGameStore()
