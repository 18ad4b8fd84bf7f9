"""
Badminton: rally scoring, best of three sets to 21.

A set is won at 21 with a two-point margin, or by the first side to reach
the 30-point cap. Set scores are the points scored since the set started;
team scores keep running across sets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import (
    ClockDirection,
    CustomEventType,
    PenaltyType,
    PeriodKind,
    PossessionAfter,
    ScoringErrorCode,
    Side,
    StatAccumulation,
    WinCondition,
)
from scoreboard.logic.rules import (
    SCORE_STAT_ID,
    CustomEvent,
    OvertimeRules,
    PeriodRules,
    ScoreAction,
    ScoringRules,
    SportConfiguration,
    SportMeta,
    SportRules,
    SportValidators,
    StatDefinition,
    TeamRules,
    TimingRules,
    ViolationAction,
)
from scoreboard.logic.types import ValidResult

if TYPE_CHECKING:
    from scoreboard.logic.state import Game, GameAction

SETS_WON_STAT = "sets_won"

RULES = SportRules(
    period=PeriodRules(kind=PeriodKind.SET, count=3, duration=0, label_template="Set {n}"),
    timing=TimingRules(has_game_clock=False, clock_direction=ClockDirection.UP),
    scoring=ScoringRules(
        win_condition=WinCondition.BEST_OF_SETS,
        target_score=21,
        win_by_margin=2,
        max_score=30,
        periods_to_win=2,
        period_winner_stat=SETS_WON_STAT,
    ),
    team=TeamRules(min_players=1, max_players=2, allow_substitutions=False, timeouts_per_period=0),
    overtime=OvertimeRules(enabled=False),
)

TARGET_SCORE = RULES.scoring.target_score or 0
WIN_BY_MARGIN = RULES.scoring.win_by_margin or 0
MAX_SCORE = RULES.scoring.max_score or 0
SETS_TO_WIN = RULES.scoring.periods_to_win or 0

SCORES = (
    ScoreAction(
        id="point",
        label="Point",
        short_label="+1",
        value=1,
        color="#10B981",
        player_stats=("points",),
        possession_after=PossessionAfter.SCORER,
    ),
    ScoreAction(
        id="ace",
        label="Ace (Service Winner)",
        short_label="ACE",
        value=1,
        color="#3B82F6",
        player_stats=("points", "aces"),
        possession_after=PossessionAfter.SCORER,
    ),
    ScoreAction(
        id="smash",
        label="Smash Winner",
        short_label="SMH",
        value=1,
        player_stats=("points", "smashes"),
        possession_after=PossessionAfter.SCORER,
    ),
    ScoreAction(
        id="drop_shot",
        label="Drop Shot Winner",
        short_label="DRP",
        value=1,
        player_stats=("points", "drops"),
        possession_after=PossessionAfter.SCORER,
    ),
)

VIOLATIONS = (
    ViolationAction(
        id="fault",
        label="Fault",
        color="#EF4444",
        penalty_type=PenaltyType.POSSESSION,
        penalty_value=1,
        player_stats=("faults",),
    ),
    ViolationAction(id="let", label="Let (Replay)", color="#F59E0B", penalty_type=PenaltyType.NONE),
    ViolationAction(
        id="misconduct",
        label="Misconduct",
        color="#DC2626",
        penalty_type=PenaltyType.SCORE,
        penalty_value=1,
        player_stats=("misconducts",),
    ),
)

EVENTS = (
    CustomEvent(id="injury", label="Injury Timeout", event_type=CustomEventType.INJURY, requires_player=True),
    CustomEvent(id="challenge", label="Challenge", event_type=CustomEventType.CHALLENGE),
    CustomEvent(
        id="clear",
        label="Clear",
        event_type=CustomEventType.STAT,
        requires_player=True,
        player_stats=("clears",),
    ),
)

PLAYER_STATS = (
    StatDefinition(
        id="points",
        label="Points",
        short_label="PTS",
        accumulate=StatAccumulation.VALUE,
        display_in_table=True,
    ),
    StatDefinition(id="aces", label="Aces", short_label="ACE", display_in_table=True),
    StatDefinition(id="smashes", label="Smashes", short_label="SMH", display_in_table=True),
    StatDefinition(id="drops", label="Drop Shots", short_label="DRP", display_in_table=True),
    StatDefinition(id="clears", label="Clears", short_label="CLR", display_in_table=True),
    StatDefinition(id="faults", label="Faults", short_label="FLT", display_in_table=True),
    StatDefinition(id="misconducts", label="Misconducts", short_label="MC"),
)

TEAM_STATS = (
    StatDefinition(id=SCORE_STAT_ID, label="Score", display_in_table=True),
    StatDefinition(id=SETS_WON_STAT, label="Sets Won", display_in_table=True),
)


def set_is_decided(points_a: int, points_b: int) -> bool:
    """True when a set standing at points_a to points_b is over."""
    if MAX_SCORE in (points_a, points_b):
        return True
    leader, trailer = max(points_a, points_b), min(points_a, points_b)
    return leader >= TARGET_SCORE and leader - trailer >= WIN_BY_MARGIN


def validate_action(action: GameAction, game: Game) -> ValidResult:
    """No rally can be scored once the set is decided, which includes a side at the cap."""
    if action.result.score_change.is_zero:
        return ValidResult.ok()
    if should_end_period(game):
        return ValidResult.fail(ScoringErrorCode.RULE_VIOLATION, "Set is already decided")
    return ValidResult.ok()


def should_end_period(game: Game) -> bool:
    return set_is_decided(game.period_points(Side.A), game.period_points(Side.B))


def _sets_won(game: Game, side: Side) -> int:
    return int(game.teams[side].stats.get(SETS_WON_STAT, 0))


def should_end_game(game: Game) -> bool:
    return max(_sets_won(game, Side.A), _sets_won(game, Side.B)) >= SETS_TO_WIN


def get_winner(game: Game) -> Side | None:
    sets_a = _sets_won(game, Side.A)
    sets_b = _sets_won(game, Side.B)
    if sets_a > sets_b:
        return Side.A
    if sets_b > sets_a:
        return Side.B
    return None


BADMINTON = SportConfiguration(
    meta=SportMeta(
        id="badminton",
        name="Badminton",
        icon="🏸",
        description="Racquet sport with shuttlecock",
        color="#10B981",
    ),
    rules=RULES,
    scores=SCORES,
    violations=VIOLATIONS,
    events=EVENTS,
    player_stats=PLAYER_STATS,
    team_stats=TEAM_STATS,
    validators=SportValidators(
        validate_action=validate_action,
        should_end_period=should_end_period,
        should_end_game=should_end_game,
        get_winner=get_winner,
    ),
)
