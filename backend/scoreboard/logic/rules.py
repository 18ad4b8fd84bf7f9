"""Sport configuration contract.

A sport is plugged into the engine as one SportConfiguration value: rule
parameters and action/stat catalogs as frozen pydantic models, plus a bundle
of pure decision functions. The engine is polymorphic over this interface
only and never over sport identity, so adding a sport never touches engine
code.

Rule parameters are serializable; a copy of SportRules is stored in every
game document as its rules snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.enums import (
    ClockDirection,
    CustomEventType,
    PenaltyType,
    PeriodKind,
    PossessionAfter,
    StatAccumulation,
    StatValueType,
    WinCondition,
)
from scoreboard.logic.exceptions import InvalidConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreboard.logic.enums import Side
    from scoreboard.logic.state import Game, GameAction, Player
    from scoreboard.logic.types import ValidResult

# team stat mirrored from Team.score by the engine; actions never list it
SCORE_STAT_ID = "score"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SportMeta(_Frozen):
    id: str
    name: str
    icon: str = ""
    description: str = ""
    color: str = "#FFFFFF"
    enabled: bool = True


class PeriodRules(_Frozen):
    kind: PeriodKind
    count: int
    duration: int  # minutes, 0 for untimed periods
    label_template: str = "P{n}"
    overtime_label_template: str | None = None  # {n} is the overtime number

    def label(self, period: int) -> str:
        """Format a 1-based period number, e.g. Q3 or OT1."""
        if period > self.count and self.overtime_label_template is not None:
            return self.overtime_label_template.format(n=period - self.count)
        return self.label_template.format(n=period)


class TimingRules(_Frozen):
    has_game_clock: bool
    clock_direction: ClockDirection = ClockDirection.DOWN
    has_secondary_clock: bool = False
    secondary_clock_duration: float | None = None  # seconds
    secondary_clock_label: str | None = None


class ScoringRules(_Frozen):
    win_condition: WinCondition
    target_score: int | None = None
    win_by_margin: int | None = None
    max_score: int | None = None  # hard cap that ends a period regardless of margin
    periods_to_win: int | None = None
    period_winner_stat: str | None = None  # team stat credited to the side leading a period at its end


class TeamRules(_Frozen):
    min_players: int = 1
    max_players: int = 15
    allow_substitutions: bool = True
    timeouts_per_period: int = 0
    timeouts_reset_each_period: bool = False
    max_fouls: int | None = None


class OvertimeRules(_Frozen):
    enabled: bool = False
    duration: int | None = None  # minutes
    sudden_death: bool = False


DEFAULT_OVERTIME_MINUTES = 5


class SportRules(_Frozen):
    period: PeriodRules
    timing: TimingRules
    scoring: ScoringRules
    team: TeamRules = Field(default_factory=TeamRules)
    overtime: OvertimeRules = Field(default_factory=OvertimeRules)
    tracks_possession: bool = True


class StatDefinition(_Frozen):
    id: str
    label: str
    short_label: str | None = None
    default: bool | int | float = 0
    value_type: StatValueType = StatValueType.NUMBER
    accumulate: StatAccumulation = StatAccumulation.COUNT
    period_scoped: bool = False  # reset to default when a period advances
    display_in_table: bool = False


class ScoreAction(_Frozen):
    id: str
    label: str
    short_label: str | None = None
    value: int
    color: str = "#FFFFFF"
    player_stats: tuple[str, ...] = ()
    team_stats: tuple[str, ...] = ()
    possession_after: PossessionAfter = PossessionAfter.NONE
    stops_clock: bool = False


class ViolationAction(_Frozen):
    id: str
    label: str
    color: str = "#FFFFFF"
    penalty_type: PenaltyType
    penalty_value: int = 0
    player_stats: tuple[str, ...] = ()
    team_stats: tuple[str, ...] = ()
    stops_clock: bool = False


class CustomEvent(_Frozen):
    id: str
    label: str
    event_type: CustomEventType
    requires_player: bool = False
    player_stats: tuple[str, ...] = ()
    team_stats: tuple[str, ...] = ()


@dataclass(frozen=True)
class SportValidators:
    """The entire sport-specific decision surface.

    Every function is pure: it receives frozen snapshots and returns a value.
    """

    validate_action: Callable[[GameAction, Game], ValidResult]
    should_end_period: Callable[[Game], bool]
    should_end_game: Callable[[Game], bool]
    get_winner: Callable[[Game], Side | None]
    calculate_derived_stats: Callable[[Player], dict[str, float]] | None = None


@dataclass(frozen=True)
class SportConfiguration:
    meta: SportMeta
    rules: SportRules
    scores: tuple[ScoreAction, ...]
    violations: tuple[ViolationAction, ...]
    validators: SportValidators
    events: tuple[CustomEvent, ...] = ()
    player_stats: tuple[StatDefinition, ...] = ()
    team_stats: tuple[StatDefinition, ...] = ()

    @property
    def id(self) -> str:
        return self.meta.id

    def find_score(self, action_id: str) -> ScoreAction | None:
        return next((s for s in self.scores if s.id == action_id), None)

    def find_violation(self, action_id: str) -> ViolationAction | None:
        return next((v for v in self.violations if v.id == action_id), None)

    def find_event(self, event_id: str) -> CustomEvent | None:
        return next((e for e in self.events if e.id == event_id), None)

    def player_stat(self, stat_id: str) -> StatDefinition | None:
        return next((s for s in self.player_stats if s.id == stat_id), None)

    def team_stat(self, stat_id: str) -> StatDefinition | None:
        return next((s for s in self.team_stats if s.id == stat_id), None)

    def default_player_stats(self) -> dict[str, bool | int | float]:
        return {s.id: s.default for s in self.player_stats}

    def default_team_stats(self) -> dict[str, bool | int | float]:
        return {s.id: s.default for s in self.team_stats}

    def with_enabled(self, enabled: bool) -> SportConfiguration:  # noqa: FBT001
        return replace(self, meta=self.meta.model_copy(update={"enabled": enabled}))


def _check_stat_defaults(kind: str, stats: tuple[StatDefinition, ...]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for stat in stats:
        if stat.id in seen:
            errors.append(f"duplicate {kind} stat id {stat.id!r}")
        seen.add(stat.id)
        is_bool = isinstance(stat.default, bool)
        if stat.value_type == StatValueType.BOOLEAN and not is_bool:
            errors.append(f"{kind} stat {stat.id!r} is boolean but defaults to {stat.default!r}")
        if stat.value_type == StatValueType.NUMBER and is_bool:
            errors.append(f"{kind} stat {stat.id!r} is numeric but defaults to {stat.default!r}")
        if stat.value_type == StatValueType.BOOLEAN and stat.accumulate == StatAccumulation.VALUE:
            errors.append(f"{kind} stat {stat.id!r} is boolean and cannot accumulate values")
    return errors


def validate_configuration(config: SportConfiguration) -> None:
    """Check a configuration against the contract.

    Raises InvalidConfigurationError listing every problem found.
    """
    errors: list[str] = []
    rules = config.rules

    errors.extend(_check_stat_defaults("player", config.player_stats))
    errors.extend(_check_stat_defaults("team", config.team_stats))

    player_stat_ids = {s.id for s in config.player_stats}
    team_stat_ids = {s.id for s in config.team_stats}
    numeric_player = {s.id for s in config.player_stats if s.value_type == StatValueType.NUMBER}
    numeric_team = {s.id for s in config.team_stats if s.value_type == StatValueType.NUMBER}

    action_ids: set[str] = set()
    catalog: list[ScoreAction | ViolationAction | CustomEvent] = [*config.scores, *config.violations, *config.events]
    for action in catalog:
        if action.id in action_ids:
            errors.append(f"duplicate action id {action.id!r}")
        action_ids.add(action.id)
        for stat_id in action.player_stats:
            if stat_id not in player_stat_ids:
                errors.append(f"action {action.id!r} references undeclared player stat {stat_id!r}")
            elif stat_id not in numeric_player:
                errors.append(f"action {action.id!r} increments non-numeric player stat {stat_id!r}")
        for stat_id in action.team_stats:
            if stat_id == SCORE_STAT_ID:
                errors.append(f"action {action.id!r} lists {SCORE_STAT_ID!r}, which mirrors the team score")
            elif stat_id not in team_stat_ids:
                errors.append(f"action {action.id!r} references undeclared team stat {stat_id!r}")
            elif stat_id not in numeric_team:
                errors.append(f"action {action.id!r} increments non-numeric team stat {stat_id!r}")

    if not rules.tracks_possession:
        for score in config.scores:
            if score.possession_after != PossessionAfter.NONE:
                errors.append(f"score {score.id!r} changes possession but the sport does not track it")
        for violation in config.violations:
            if violation.penalty_type == PenaltyType.POSSESSION:
                errors.append(f"violation {violation.id!r} has a possession penalty but the sport does not track it")

    winner_stat = rules.scoring.period_winner_stat
    if winner_stat is not None and winner_stat not in numeric_team:
        errors.append(f"period_winner_stat {winner_stat!r} is not a declared numeric team stat")

    scoring = rules.scoring
    if scoring.win_condition in (WinCondition.REACH_TARGET, WinCondition.BEST_OF_SETS) and scoring.target_score is None:
        errors.append(f"win condition {scoring.win_condition} requires a target_score")
    if scoring.win_condition == WinCondition.BEST_OF_SETS and (scoring.periods_to_win is None or winner_stat is None):
        errors.append("best-of-sets requires periods_to_win and period_winner_stat")

    if rules.overtime.sudden_death and not rules.overtime.enabled:
        errors.append("sudden-death overtime declared while overtime is disabled")

    if rules.period.count < 1:
        errors.append(f"period count must be positive, got {rules.period.count}")

    if rules.timing.has_secondary_clock and rules.timing.secondary_clock_duration is None:
        errors.append("secondary clock declared without a duration")

    if rules.timing.has_secondary_clock and not rules.timing.has_game_clock:
        errors.append("secondary clock declared without a primary game clock")

    if errors:
        raise InvalidConfigurationError(f"sport {config.id!r}: " + "; ".join(errors))
