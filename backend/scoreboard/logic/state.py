"""
Game state models for live scorekeeping.

All models are frozen. The engine never mutates a snapshot in place: every
transition builds a new Game through the helpers in state_utils.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scoreboard.logic.enums import ActionKind, GameStatus, Side
from scoreboard.logic.rules import SportRules

# Stat maps are open-ended and sport-defined. bool comes first so that
# True/False are not coerced to 1/0.
StatValue = bool | int | float

TENTHS_PER_SECOND = 10
SECONDS_PER_MINUTE = 60


class TimeValue(BaseModel):
    """Primary clock reading."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0, lt=SECONDS_PER_MINUTE)
    tenths: int = Field(default=0, ge=0, lt=TENTHS_PER_SECOND)

    @property
    def total_tenths(self) -> int:
        return (self.minutes * SECONDS_PER_MINUTE + self.seconds) * TENTHS_PER_SECOND + self.tenths

    @property
    def is_zero(self) -> bool:
        return self.total_tenths == 0

    @classmethod
    def from_tenths(cls, total: int) -> TimeValue:
        total_seconds, tenths = divmod(max(total, 0), TENTHS_PER_SECOND)
        minutes, seconds = divmod(total_seconds, SECONDS_PER_MINUTE)
        return cls(minutes=minutes, seconds=seconds, tenths=tenths)

    def __str__(self) -> str:
        return f"{self.minutes}:{self.seconds:02d}.{self.tenths}"


class ClockState(BaseModel):
    """Primary clock plus the optional secondary (shot/raid) clock."""

    model_config = ConfigDict(frozen=True)

    game: TimeValue = Field(default_factory=TimeValue)
    game_running: bool = False
    secondary: float | None = None  # seconds; None when the sport has no secondary clock
    secondary_running: bool = False


class SideScores(BaseModel):
    """A pair of per-side integers (score deltas, period start scores)."""

    model_config = ConfigDict(frozen=True)

    A: int = 0  # noqa: N815
    B: int = 0  # noqa: N815

    def get(self, side: Side) -> int:
        return self.A if side is Side.A else self.B

    def with_side(self, side: Side, value: int) -> SideScores:
        return self.model_copy(update={side.value: value})

    @property
    def is_zero(self) -> bool:
        return self.A == 0 and self.B == 0


class GameState(BaseModel):
    """The mutable clock face of a game."""

    model_config = ConfigDict(frozen=True)

    current_period: int = Field(default=1, ge=1)
    clock: ClockState = Field(default_factory=ClockState)
    possession: Side | None = None  # None for sports without possession
    period_start_scores: SideScores = Field(default_factory=SideScores)
    custom: dict[str, StatValue | str] = Field(default_factory=dict)


class ActionResult(BaseModel):
    """Side effects applied by one action."""

    model_config = ConfigDict(frozen=True)

    score_change: SideScores = Field(default_factory=SideScores)
    possession: Side | None = None  # possession after the action, when it changed it
    clock_stop: bool = False
    player_stats: dict[str, StatValue] = Field(default_factory=dict)
    team_stats: dict[str, StatValue] = Field(default_factory=dict)


class GameAction(BaseModel):
    """
    Append-only action log entry.

    Once appended only the undone flag ever changes (tombstone undo).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: int  # epoch milliseconds
    kind: ActionKind
    side: Side | None  # None for neutral entries (period_end)
    player_id: str | None = None
    player_name: str | None = None
    action: str  # configuration-defined action id, e.g. "three_pointer"
    value: int = 0
    period: int
    game_time: TimeValue
    result: ActionResult = Field(default_factory=ActionResult)
    notes: str | None = None
    undone: bool = False


class Player(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    number: str = ""
    name: str = ""
    position: str | None = None
    is_active: bool = False
    is_starter: bool = False
    stats: dict[str, StatValue] = Field(default_factory=dict)
    disqualified: bool = False
    injured: bool = False


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Side
    name: str
    color: str = "#FFFFFF"
    logo: str | None = None
    score: int = 0
    timeouts: int = Field(default=0, ge=0)  # allotment
    timeouts_used: int = Field(default=0, ge=0)
    stats: dict[str, StatValue] = Field(default_factory=dict)
    players: tuple[Player, ...] = ()
    period_scores: tuple[int, ...] = ()  # points scored in each completed period

    @property
    def timeouts_remaining(self) -> int:
        return max(0, self.timeouts - self.timeouts_used)

    def find_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)


class GameSettings(BaseModel):
    """Per-game settings: rules snapshot plus feature flags."""

    model_config = ConfigDict(frozen=True)

    game_name: str = ""
    venue: str | None = None
    date: int | None = None
    rules: SportRules
    track_player_stats: bool = True
    allow_spectators: bool = True
    enable_live_stream: bool = False


class TournamentRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    round: str | None = None


class GameMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    tournament: TournamentRef | None = None
    officials: dict[str, str] = Field(default_factory=dict)
    tags: tuple[str, ...] = ()
    notes: str | None = None


class Game(BaseModel):
    """
    Root aggregate for one contest.

    teams always holds exactly the sides A and B. last_update is the sole
    ordering key used when merging snapshots from the document store.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    sport: str
    host_id: str = ""
    host_name: str | None = None
    status: GameStatus = GameStatus.SETUP
    created_at: int
    last_update: int
    settings: GameSettings
    state: GameState = Field(default_factory=GameState)
    teams: dict[Side, Team]
    action_log: tuple[GameAction, ...] = ()
    metadata: GameMetadata = Field(default_factory=GameMetadata)

    @model_validator(mode="after")
    def _check_sides(self) -> Game:
        if set(self.teams) != {Side.A, Side.B}:
            raise ValueError(f"teams must be keyed by exactly A and B, got {sorted(self.teams)}")
        for side, team in self.teams.items():
            if team.id != side:
                raise ValueError(f"team under side {side} has id {team.id}")
        return self

    def team(self, side: Side) -> Team:
        return self.teams[side]

    def period_points(self, side: Side) -> int:
        """Points scored by a side since the current period started."""
        return self.teams[side].score - self.state.period_start_scores.get(side)
