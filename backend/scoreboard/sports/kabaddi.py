"""Kabaddi: two 20-minute halves with a 30-second raid timer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import (
    ClockDirection,
    CustomEventType,
    PenaltyType,
    PeriodKind,
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
    from scoreboard.logic.state import Game, GameAction, Player

RULES = SportRules(
    period=PeriodRules(
        kind=PeriodKind.HALF,
        count=2,
        duration=20,
        label_template="Half {n}",
        overtime_label_template="Extra Time {n}",
    ),
    timing=TimingRules(
        has_game_clock=True,
        clock_direction=ClockDirection.DOWN,
        has_secondary_clock=True,
        secondary_clock_duration=30,
        secondary_clock_label="Raid Timer",
    ),
    scoring=ScoringRules(win_condition=WinCondition.HIGHEST_SCORE),
    team=TeamRules(min_players=7, max_players=12, timeouts_per_period=2, timeouts_reset_each_period=True),
    overtime=OvertimeRules(enabled=True, duration=7),
)

SCORES = (
    ScoreAction(
        id="touch_point",
        label="Touch Point",
        short_label="Touch",
        value=1,
        color="#3B82F6",
        player_stats=("points", "touch_points", "raids", "successful_raids"),
    ),
    ScoreAction(
        id="bonus_point",
        label="Bonus Point",
        short_label="Bonus",
        value=1,
        color="#10B981",
        player_stats=("points", "bonus_points"),
    ),
    ScoreAction(
        id="all_out",
        label="All Out",
        value=2,
        color="#F59E0B",
        team_stats=("all_outs",),
    ),
    ScoreAction(
        id="super_tackle",
        label="Super Tackle",
        short_label="S.Tackle",
        value=2,
        color="#8B5CF6",
        player_stats=("points", "super_tackles", "tackles"),
    ),
)

VIOLATIONS = (
    ViolationAction(
        id="out",
        label="Out",
        color="#EF4444",
        penalty_type=PenaltyType.SCORE,
        penalty_value=1,
        player_stats=("outs",),
    ),
    ViolationAction(
        id="technical_point",
        label="Technical Point",
        color="#F59E0B",
        penalty_type=PenaltyType.SCORE,
        penalty_value=1,
    ),
)

EVENTS = (
    CustomEvent(id="substitution", label="Substitution", event_type=CustomEventType.SUBSTITUTION, requires_player=True),
    CustomEvent(id="injury", label="Injury Timeout", event_type=CustomEventType.INJURY, requires_player=True),
    CustomEvent(id="review", label="Video Review", event_type=CustomEventType.CHALLENGE),
    CustomEvent(
        id="empty_raid",
        label="Empty Raid",
        event_type=CustomEventType.STAT,
        requires_player=True,
        player_stats=("raids", "empty_raids"),
    ),
    CustomEvent(
        id="tackle",
        label="Tackle",
        event_type=CustomEventType.STAT,
        requires_player=True,
        player_stats=("tackles",),
    ),
)

PLAYER_STATS = (
    StatDefinition(
        id="points",
        label="Total Points",
        short_label="PTS",
        accumulate=StatAccumulation.VALUE,
        display_in_table=True,
    ),
    StatDefinition(id="touch_points", label="Touch Points", short_label="TP", display_in_table=True),
    StatDefinition(id="bonus_points", label="Bonus Points", short_label="BP", display_in_table=True),
    StatDefinition(id="super_tackles", label="Super Tackles", short_label="ST", display_in_table=True),
    StatDefinition(id="tackles", label="Tackles", short_label="T", display_in_table=True),
    StatDefinition(id="raids", label="Raids", short_label="R", display_in_table=True),
    StatDefinition(id="successful_raids", label="Successful Raids", short_label="SR", display_in_table=True),
    StatDefinition(id="empty_raids", label="Empty Raids", short_label="ER"),
    StatDefinition(id="outs", label="Outs", short_label="OUT"),
)

TEAM_STATS = (
    StatDefinition(id=SCORE_STAT_ID, label="Score", display_in_table=True),
    StatDefinition(id="all_outs", label="All Outs", display_in_table=True),
)


def validate_action(action: GameAction, game: Game) -> ValidResult:  # noqa: ARG001
    return ValidResult.ok()


def should_end_period(game: Game) -> bool:
    return game.state.clock.game.is_zero


def should_end_game(game: Game) -> bool:
    if game.state.current_period < RULES.period.count:
        return False
    if not game.state.clock.game.is_zero:
        return False
    return game.teams[Side.A].score != game.teams[Side.B].score


def get_winner(game: Game) -> Side | None:
    score_a = game.teams[Side.A].score
    score_b = game.teams[Side.B].score
    if score_a == score_b:
        return None
    return Side.A if score_a > score_b else Side.B


def calculate_derived_stats(player: Player) -> dict[str, float]:
    raids = player.stats.get("raids", 0)
    successful = player.stats.get("successful_raids", 0)
    return {"raid_success_rate": round(successful / raids * 100, 1) if raids else 0.0}


KABADDI = SportConfiguration(
    meta=SportMeta(
        id="kabaddi",
        name="Kabaddi",
        icon="🤼",
        description="Contact team sport with raids and tackles",
        color="#DC2626",
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
        calculate_derived_stats=calculate_derived_stats,
    ),
)
