"""
Game initialization for any configured sport.
"""

from __future__ import annotations

import secrets
import time
from typing import TYPE_CHECKING

from scoreboard.logic.enums import ClockDirection, GameStatus, Side
from scoreboard.logic.rules import DEFAULT_OVERTIME_MINUTES
from scoreboard.logic.state import (
    ClockState,
    Game,
    GameMetadata,
    GameSettings,
    GameState,
    Player,
    Team,
    TimeValue,
)

if TYPE_CHECKING:
    from scoreboard.logic.rules import SportConfiguration, SportRules
    from scoreboard.logic.types import PlayerSetup, TeamSetup

GAME_CODE_LENGTH = 6

# no 0/O, 1/I/L: codes are read aloud and typed on tablets
GAME_CODE_ALPHABET = "23456789ABCDEFGHJKMNPQRSTUVWXYZ"


def generate_game_code(length: int = GAME_CODE_LENGTH) -> str:
    """
    Generate a short human-typeable game code.

    Drawn from a CSPRNG over a 31-symbol alphabet (about 8.9e8 codes at the
    default length), so concurrent creations practically never collide; the
    service still retries on the rare collision.
    """
    return "".join(secrets.choice(GAME_CODE_ALPHABET) for _ in range(length))


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def period_start_time(rules: SportRules, *, overtime: bool = False) -> TimeValue:
    """Primary clock reading at the start of a period."""
    if rules.timing.clock_direction == ClockDirection.UP:
        return TimeValue()
    minutes = rules.period.duration
    if overtime:
        minutes = rules.overtime.duration or DEFAULT_OVERTIME_MINUTES
    return TimeValue(minutes=minutes)


def create_initial_state(rules: SportRules) -> GameState:
    """Clock face of a game that has not started yet."""
    timing = rules.timing
    return GameState(
        current_period=1,
        clock=ClockState(
            game=period_start_time(rules),
            game_running=False,
            secondary=timing.secondary_clock_duration if timing.has_secondary_clock else None,
            secondary_running=False,
        ),
        possession=Side.A if rules.tracks_possession else None,
    )


def create_player(
    config: SportConfiguration,
    player_id: str,
    number: str = "",
    name: str = "",
    *,
    position: str | None = None,
    is_starter: bool = False,
) -> Player:
    """Create a player whose stats are seeded from the sport's stat definitions."""
    return Player(
        id=player_id,
        number=number,
        name=name,
        position=position,
        is_starter=is_starter,
        is_active=is_starter,
        stats=config.default_player_stats(),
    )


def create_team(config: SportConfiguration, side: Side, setup: TeamSetup, *, track_player_stats: bool) -> Team:
    players: tuple[Player, ...] = ()
    if track_player_stats:
        players = tuple(_player_from_setup(config, p) for p in setup.players)
    stats = config.default_team_stats()
    return Team(
        id=side,
        name=setup.name,
        color=setup.color,
        logo=setup.logo,
        score=0,
        timeouts=config.rules.team.timeouts_per_period,
        timeouts_used=0,
        stats=stats,
        players=players,
    )


def _player_from_setup(config: SportConfiguration, setup: PlayerSetup) -> Player:
    return create_player(
        config,
        setup.id,
        setup.number,
        setup.name,
        position=setup.position,
        is_starter=setup.is_starter,
    )


def init_game(
    config: SportConfiguration,
    code: str,
    team_a: TeamSetup,
    team_b: TeamSetup,
    *,
    game_name: str = "",
    venue: str | None = None,
    host_id: str = "",
    host_name: str | None = None,
    track_player_stats: bool = True,
    status: GameStatus = GameStatus.SETUP,
    created_at: int | None = None,
) -> Game:
    """
    Initialize a new game for a configured sport.

    Both teams start at zero with the sport's timeout allotment and default
    stats; the configuration's rules are copied into the game as its rules
    snapshot. Returns a frozen Game.
    """
    timestamp = created_at if created_at is not None else now_ms()
    return Game(
        id=code,
        code=code,
        sport=config.id,
        host_id=host_id,
        host_name=host_name,
        status=status,
        created_at=timestamp,
        last_update=timestamp,
        settings=GameSettings(
            game_name=game_name,
            venue=venue,
            rules=config.rules,
            track_player_stats=track_player_stats,
        ),
        state=create_initial_state(config.rules),
        teams={
            Side.A: create_team(config, Side.A, team_a, track_player_stats=track_player_stats),
            Side.B: create_team(config, Side.B, team_b, track_player_stats=track_player_stats),
        },
        metadata=GameMetadata(tags=(config.id,)),
    )
