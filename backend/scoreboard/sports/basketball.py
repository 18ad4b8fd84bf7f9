"""Basketball: four 10-minute quarters, 24-second shot clock, five-foul limit."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import (
    ActionKind,
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
    from scoreboard.logic.state import Game, GameAction, Player

RULES = SportRules(
    period=PeriodRules(
        kind=PeriodKind.QUARTER,
        count=4,
        duration=10,
        label_template="Q{n}",
        overtime_label_template="OT{n}",
    ),
    timing=TimingRules(
        has_game_clock=True,
        clock_direction=ClockDirection.DOWN,
        has_secondary_clock=True,
        secondary_clock_duration=24,
        secondary_clock_label="Shot Clock",
    ),
    scoring=ScoringRules(win_condition=WinCondition.HIGHEST_SCORE),
    team=TeamRules(min_players=5, max_players=15, timeouts_per_period=2, max_fouls=5),
    overtime=OvertimeRules(enabled=True, duration=5),
)

MAX_FOULS = RULES.team.max_fouls or 0


def _made(*stats: str) -> tuple[str, ...]:
    return ("points", *stats)


def _stat_event(event_id: str, label: str, *stats: str) -> CustomEvent:
    return CustomEvent(
        id=event_id,
        label=label,
        event_type=CustomEventType.STAT,
        requires_player=True,
        player_stats=stats,
    )


SCORES = (
    ScoreAction(
        id="free_throw",
        label="Free Throw",
        short_label="+1",
        value=1,
        player_stats=_made("free_throws_made", "free_throws_attempted"),
        possession_after=PossessionAfter.OPPONENT,
    ),
    ScoreAction(
        id="two_pointer",
        label="2-Point Field Goal",
        short_label="+2",
        value=2,
        color="#3B82F6",
        player_stats=_made("field_goals_made", "field_goals_attempted"),
        possession_after=PossessionAfter.OPPONENT,
    ),
    ScoreAction(
        id="three_pointer",
        label="3-Point Field Goal",
        short_label="+3",
        value=3,
        color="#10B981",
        player_stats=_made(
            "field_goals_made",
            "field_goals_attempted",
            "three_points_made",
            "three_points_attempted",
        ),
        possession_after=PossessionAfter.OPPONENT,
    ),
)

VIOLATIONS = (
    ViolationAction(
        id="personal_foul",
        label="Personal Foul",
        color="#EAB308",
        penalty_type=PenaltyType.SCORE,
        penalty_value=1,
        player_stats=("fouls",),
        team_stats=("team_fouls", "fouls_this_quarter"),
        stops_clock=True,
    ),
    ViolationAction(
        id="technical_foul",
        label="Technical Foul",
        color="#EF4444",
        penalty_type=PenaltyType.SCORE,
        penalty_value=1,
        player_stats=("fouls",),
        team_stats=("team_fouls",),
        stops_clock=True,
    ),
    ViolationAction(
        id="flagrant_foul",
        label="Flagrant Foul",
        color="#DC2626",
        penalty_type=PenaltyType.DISQUALIFY,
        penalty_value=2,
        player_stats=("fouls",),
        team_stats=("team_fouls",),
        stops_clock=True,
    ),
    ViolationAction(
        id="travel",
        label="Traveling",
        penalty_type=PenaltyType.POSSESSION,
        player_stats=("turnovers",),
        stops_clock=True,
    ),
)

EVENTS = (
    CustomEvent(id="substitution", label="Substitution", event_type=CustomEventType.SUBSTITUTION, requires_player=True),
    CustomEvent(id="injury", label="Injury Timeout", event_type=CustomEventType.INJURY, requires_player=True),
    _stat_event("missed_field_goal", "Missed Field Goal", "field_goals_attempted"),
    _stat_event("missed_three", "Missed 3-Pointer", "field_goals_attempted", "three_points_attempted"),
    _stat_event("missed_free_throw", "Missed Free Throw", "free_throws_attempted"),
    _stat_event("rebound", "Rebound", "rebounds"),
    _stat_event("assist", "Assist", "assists"),
    _stat_event("steal", "Steal", "steals"),
    _stat_event("block", "Block", "blocks"),
)

PLAYER_STATS = (
    StatDefinition(
        id="points",
        label="Points",
        short_label="PTS",
        accumulate=StatAccumulation.VALUE,
        display_in_table=True,
    ),
    StatDefinition(id="rebounds", label="Rebounds", short_label="REB", display_in_table=True),
    StatDefinition(id="assists", label="Assists", short_label="AST", display_in_table=True),
    StatDefinition(id="steals", label="Steals", short_label="STL", display_in_table=True),
    StatDefinition(id="blocks", label="Blocks", short_label="BLK", display_in_table=True),
    StatDefinition(id="turnovers", label="Turnovers", short_label="TO", display_in_table=True),
    StatDefinition(id="fouls", label="Fouls", short_label="PF", display_in_table=True),
    StatDefinition(id="field_goals_made", label="Field Goals Made", short_label="FGM"),
    StatDefinition(id="field_goals_attempted", label="Field Goals Attempted", short_label="FGA"),
    StatDefinition(id="three_points_made", label="3-Pointers Made", short_label="3PM"),
    StatDefinition(id="three_points_attempted", label="3-Pointers Attempted", short_label="3PA"),
    StatDefinition(id="free_throws_made", label="Free Throws Made", short_label="FTM"),
    StatDefinition(id="free_throws_attempted", label="Free Throws Attempted", short_label="FTA"),
)

TEAM_STATS = (
    StatDefinition(id=SCORE_STAT_ID, label="Score", display_in_table=True),
    StatDefinition(id="team_fouls", label="Team Fouls", display_in_table=True),
    StatDefinition(id="fouls_this_quarter", label="Fouls This Quarter", period_scoped=True, display_in_table=True),
)


def _time_expired(game: Game) -> bool:
    return game.state.clock.game.is_zero


def validate_action(action: GameAction, game: Game) -> ValidResult:
    """Players who are disqualified or have fouled out can no longer score or foul."""
    if action.kind not in (ActionKind.SCORE, ActionKind.VIOLATION) or action.player_id is None or action.side is None:
        return ValidResult.ok()
    player = game.teams[action.side].find_player(action.player_id)
    if player is None:
        return ValidResult.ok()
    if player.disqualified:
        return ValidResult.fail(ScoringErrorCode.RULE_VIOLATION, "Player is disqualified")
    if player.stats.get("fouls", 0) >= MAX_FOULS:
        return ValidResult.fail(ScoringErrorCode.RULE_VIOLATION, "Player has fouled out")
    return ValidResult.ok()


def should_end_period(game: Game) -> bool:
    return _time_expired(game)


def should_end_game(game: Game) -> bool:
    """Regulation or overtime has expired without a tie."""
    if game.state.current_period < RULES.period.count:
        return False
    if not _time_expired(game):
        return False
    return game.teams[Side.A].score != game.teams[Side.B].score


def get_winner(game: Game) -> Side | None:
    score_a = game.teams[Side.A].score
    score_b = game.teams[Side.B].score
    if score_a > score_b:
        return Side.A
    if score_b > score_a:
        return Side.B
    return None


def _percentage(made: float, attempted: float) -> float:
    if not attempted:
        return 0.0
    return round(made / attempted * 100, 1)


def calculate_derived_stats(player: Player) -> dict[str, float]:
    stats = player.stats
    return {
        "fg_percentage": _percentage(stats.get("field_goals_made", 0), stats.get("field_goals_attempted", 0)),
        "three_percentage": _percentage(stats.get("three_points_made", 0), stats.get("three_points_attempted", 0)),
        "ft_percentage": _percentage(stats.get("free_throws_made", 0), stats.get("free_throws_attempted", 0)),
    }


BASKETBALL = SportConfiguration(
    meta=SportMeta(
        id="basketball",
        name="Basketball",
        icon="🏀",
        description="5v5 court sport with hoops",
        color="#F97316",
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
