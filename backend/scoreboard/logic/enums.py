"""
String enum definitions for scorekeeping concepts.

Values double as the stored document format, so they must stay stable.
"""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """One of the two fixed contestants."""

    A = "A"
    B = "B"

    @property
    def opponent(self) -> Side:
        return Side.B if self is Side.A else Side.A


class GameStatus(StrEnum):
    """Lifecycle status of a game."""

    SETUP = "setup"
    LIVE = "live"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# statuses from which no further transition is possible
TERMINAL_STATUSES = frozenset({GameStatus.COMPLETED, GameStatus.CANCELLED})


class ActionKind(StrEnum):
    """Kind of an action log entry."""

    SCORE = "score"
    VIOLATION = "violation"
    TIMEOUT = "timeout"
    PERIOD_END = "period_end"
    CUSTOM = "custom"


class PenaltyType(StrEnum):
    """Side effect of a violation. Exactly one applies per violation."""

    SCORE = "score"  # opponent is credited with penalty_value
    POSSESSION = "possession"  # possession goes to the opponent
    TIMEOUT = "timeout"  # offending team is charged a timeout
    DISQUALIFY = "disqualify"  # offending player is disqualified
    NONE = "none"


class PossessionAfter(StrEnum):
    """Who holds possession after a score."""

    NONE = "none"  # unchanged
    SCORER = "scorer"  # rally sports: the point winner serves
    OPPONENT = "opponent"  # the conceding side inbounds


class CustomEventType(StrEnum):
    """Types of non-scoring events a sport can log."""

    SUBSTITUTION = "substitution"
    INJURY = "injury"
    CHALLENGE = "challenge"
    STAT = "stat"
    OTHER = "other"


class PeriodKind(StrEnum):
    QUARTER = "quarter"
    HALF = "half"
    SET = "set"
    PERIOD = "period"
    INNING = "inning"


class ClockDirection(StrEnum):
    UP = "up"
    DOWN = "down"


class WinCondition(StrEnum):
    HIGHEST_SCORE = "highest-score"
    REACH_TARGET = "reach-target"
    BEST_OF_SETS = "best-of-sets"


class StatValueType(StrEnum):
    NUMBER = "number"
    BOOLEAN = "boolean"


class StatAccumulation(StrEnum):
    """How an action increments a stat it lists."""

    COUNT = "count"  # +1 per action (made shots, fouls)
    VALUE = "value"  # +action value (points)


class ScoringErrorCode(StrEnum):
    """Reasons an engine operation was rejected without changing state."""

    UNKNOWN_ACTION = "unknown_action"
    RULE_VIOLATION = "rule_violation"
    NO_TIMEOUTS_REMAINING = "no_timeouts_remaining"
    GAME_COMPLETE = "game_complete"
    NOTHING_TO_UNDO = "nothing_to_undo"
    GAME_NOT_LIVE = "game_not_live"
    INVALID_TRANSITION = "invalid_transition"
    UNKNOWN_PLAYER = "unknown_player"
    PLAYER_REQUIRED = "player_required"
    DUPLICATE_PLAYER = "duplicate_player"
    ROSTER_FULL = "roster_full"


class ChangeKind(StrEnum):
    """Kind of state change carried by an engine notification."""

    SCORE_RECORDED = "score_recorded"
    VIOLATION_RECORDED = "violation_recorded"
    EVENT_RECORDED = "event_recorded"
    TIMEOUT_CALLED = "timeout_called"
    CLOCK_TOGGLED = "clock_toggled"
    CLOCK_UPDATED = "clock_updated"
    SECONDARY_CLOCK_UPDATED = "secondary_clock_updated"
    PERIOD_ADVANCED = "period_advanced"
    POSSESSION_CHANGED = "possession_changed"
    ACTION_UNDONE = "action_undone"
    STATUS_CHANGED = "status_changed"
    ROSTER_CHANGED = "roster_changed"
    SNAPSHOT_LOADED = "snapshot_loaded"
