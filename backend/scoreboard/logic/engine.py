"""
Sport-agnostic game engine.

The engine owns one in-memory Game while attached and applies every
operation as a single transition: build the new frozen snapshot, commit it,
then notify subscribers once with the full snapshot. Everything sport
specific comes from the attached SportConfiguration; the engine never
branches on sport identity.

Rule rejections are returned as ValidResult values. Calling an operation
the sport structurally does not support (a clock operation on an untimed
sport, possession on a sport without possession) raises an
UnsupportedOperationError subclass instead.

Undo policy: undo reverses only the score delta of the most recent live log
entry and tombstones it. Stat increments, possession changes, timeout usage,
disqualification and clock stops stay applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from scoreboard.logic.enums import (
    TERMINAL_STATUSES,
    ActionKind,
    ChangeKind,
    CustomEventType,
    GameStatus,
    PenaltyType,
    PossessionAfter,
    ScoringErrorCode,
    Side,
    StatAccumulation,
)
from scoreboard.logic.events import StateChange
from scoreboard.logic.exceptions import NoGameClockError, NoPossessionTrackingError, NoSecondaryClockError
from scoreboard.logic.game import create_player, now_ms, period_start_time
from scoreboard.logic.state import ActionResult, ClockState, GameAction, SideScores
from scoreboard.logic.state_utils import (
    add_stat_deltas,
    append_action,
    mark_undone,
    set_score,
    stop_clocks,
    touch,
    update_clock,
    update_player,
    update_state,
    update_team,
)
from scoreboard.logic.types import ValidResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from scoreboard.logic.rules import SportConfiguration, SportRules, StatDefinition
    from scoreboard.logic.state import Game, Player, StatValue, TimeValue
    from scoreboard.logic.types import PlayerSetup

    StateListener = Callable[[StateChange], None]

logger = structlog.get_logger()

PERIOD_END_ACTION = "period_end"
TIMEOUT_ACTION = "timeout"

_START_FROM = frozenset({GameStatus.SETUP})
_PAUSE_FROM = frozenset({GameStatus.LIVE})
_RESUME_FROM = frozenset({GameStatus.PAUSED})
_END_FROM = frozenset({GameStatus.LIVE, GameStatus.PAUSED})
_CANCEL_FROM = frozenset({GameStatus.SETUP, GameStatus.LIVE, GameStatus.PAUSED})


def new_action_id() -> str:
    return f"act_{uuid4().hex[:12]}"


def _stat_deltas(
    stat_ids: Iterable[str],
    lookup: Callable[[str], StatDefinition | None],
    value: int,
) -> dict[str, StatValue]:
    """Deltas an action applies to the stats it lists."""
    deltas: dict[str, StatValue] = {}
    for stat_id in stat_ids:
        definition = lookup(stat_id)
        step = value if definition is not None and definition.accumulate == StatAccumulation.VALUE else 1
        deltas[stat_id] = deltas.get(stat_id, 0) + step
    return deltas


class GameEngine:
    """
    State machine for one game.

    Operations are synchronous and run to completion; callers serialize them
    by call order. The clock and action id factory are injectable so tests
    can pin timestamps and log ids.
    """

    def __init__(
        self,
        game: Game,
        config: SportConfiguration,
        *,
        clock: Callable[[], int] = now_ms,
        action_ids: Callable[[], str] = new_action_id,
    ) -> None:
        if game.sport != config.id:
            raise ValueError(f"game {game.code} is a {game.sport} game, not {config.id}")
        self._game = game
        self._config = config
        self._clock = clock
        self._action_ids = action_ids
        self._listeners: list[StateListener] = []

    @property
    def game(self) -> Game:
        return self._game

    @property
    def config(self) -> SportConfiguration:
        return self._config

    @property
    def rules(self) -> SportRules:
        return self._config.rules

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load_snapshot(self, game: Game) -> None:
        """
        Replace the in-memory game with an externally observed snapshot.

        Callers decide whether the snapshot supersedes the current one; the
        engine applies it unconditionally.
        """
        if game.sport != self._config.id:
            raise ValueError(f"snapshot {game.code} is a {game.sport} game, not {self._config.id}")
        self._game = game
        self._notify(StateChange(kind=ChangeKind.SNAPSHOT_LOADED, game=game))

    def _commit(self, game: Game, kind: ChangeKind, action_id: str | None = None) -> None:
        self._game = touch(game, self._clock())
        self._notify(StateChange(kind=kind, game=self._game, action_id=action_id))

    def _notify(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("state listener failed", game_id=change.game.id, change=change.kind)

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _require_live(self) -> ValidResult | None:
        status = self._game.status
        if status != GameStatus.LIVE:
            return ValidResult.fail(ScoringErrorCode.GAME_NOT_LIVE, f"game is {status}, not live")
        return None

    def _require_game_clock(self, operation: str) -> None:
        if not self.rules.timing.has_game_clock:
            raise NoGameClockError(sport_id=self._config.id, operation=operation, reason="no game clock")

    def _require_secondary_clock(self, operation: str) -> None:
        if not self.rules.timing.has_secondary_clock:
            raise NoSecondaryClockError(sport_id=self._config.id, operation=operation, reason="no secondary clock")

    def _require_possession(self, operation: str) -> None:
        if not self.rules.tracks_possession:
            raise NoPossessionTrackingError(
                sport_id=self._config.id,
                operation=operation,
                reason="possession is not tracked",
            )

    def _lookup_player(self, side: Side, player_id: str | None) -> tuple[Player | None, ValidResult | None]:
        if player_id is None:
            return None, None
        player = self._game.teams[side].find_player(player_id)
        if player is None:
            return None, ValidResult.fail(
                ScoringErrorCode.UNKNOWN_PLAYER,
                f"player {player_id!r} is not on team {side}",
            )
        return player, None

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def start_game(self) -> ValidResult:
        return self._change_status(GameStatus.LIVE, _START_FROM, "start")

    def pause_game(self) -> ValidResult:
        return self._change_status(GameStatus.PAUSED, _PAUSE_FROM, "pause")

    def resume_game(self) -> ValidResult:
        return self._change_status(GameStatus.LIVE, _RESUME_FROM, "resume")

    def end_game(self) -> ValidResult:
        """Mark the game completed and stop both clocks."""
        return self._change_status(GameStatus.COMPLETED, _END_FROM, "end")

    def cancel_game(self) -> ValidResult:
        return self._change_status(GameStatus.CANCELLED, _CANCEL_FROM, "cancel")

    def _change_status(self, target: GameStatus, allowed_from: frozenset[GameStatus], verb: str) -> ValidResult:
        current = self._game.status
        if current not in allowed_from:
            return ValidResult.fail(ScoringErrorCode.INVALID_TRANSITION, f"cannot {verb} a game that is {current}")
        game = self._game.model_copy(update={"status": target})
        if target != GameStatus.LIVE:
            game = stop_clocks(game)
        self._commit(game, ChangeKind.STATUS_CHANGED)
        logger.info("game status changed", game_id=game.id, previous=current, status=target)
        return ValidResult.ok()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _build_action(
        self,
        kind: ActionKind,
        side: Side | None,
        action_id: str,
        value: int,
        result: ActionResult,
        player: Player | None = None,
        notes: str | None = None,
    ) -> GameAction:
        state = self._game.state
        return GameAction(
            id=self._action_ids(),
            timestamp=self._clock(),
            kind=kind,
            side=side,
            player_id=player.id if player else None,
            player_name=player.name if player else None,
            action=action_id,
            value=value,
            period=state.current_period,
            game_time=state.clock.game,
            result=result,
            notes=notes,
        )

    def _apply_result(self, game: Game, side: Side, result: ActionResult, player: Player | None) -> Game:
        """Apply the generic side effects recorded in an ActionResult."""
        for scored in Side:
            delta = result.score_change.get(scored)
            if delta:
                game = set_score(game, scored, game.teams[scored].score + delta)
        if result.team_stats:
            game = update_team(game, side, stats=add_stat_deltas(game.teams[side].stats, result.team_stats))
        if player is not None and result.player_stats:
            current = game.teams[side].find_player(player.id)
            stats = current.stats if current else player.stats
            game = update_player(game, side, player.id, stats=add_stat_deltas(stats, result.player_stats))
        if result.possession is not None:
            game = update_state(game, possession=result.possession)
        if result.clock_stop:
            game = stop_clocks(game)
        return game

    def _player_deltas(self, stat_ids: Iterable[str], value: int, player: Player | None) -> dict[str, StatValue]:
        if player is None:
            return {}
        return _stat_deltas(stat_ids, self._config.player_stat, value)

    def _team_deltas(self, stat_ids: Iterable[str], value: int) -> dict[str, StatValue]:
        return _stat_deltas(stat_ids, self._config.team_stat, value)

    def _possession_after(self, side: Side, rule: PossessionAfter) -> Side | None:
        if not self.rules.tracks_possession or rule == PossessionAfter.NONE:
            return None
        return side if rule == PossessionAfter.SCORER else side.opponent

    def record_score(self, side: Side, score_action_id: str, player_id: str | None = None) -> ValidResult:
        """
        Record a score from the sport's score catalog.

        Adds the action's point value to the side's score and applies its
        stat increments, possession rule and clock stop. Rejections leave
        the game untouched.
        """
        if failure := self._require_live():
            return failure
        definition = self._config.find_score(score_action_id)
        if definition is None:
            return ValidResult.fail(ScoringErrorCode.UNKNOWN_ACTION, f"unknown score action {score_action_id!r}")
        player, failure = self._lookup_player(side, player_id)
        if failure:
            return failure

        before = self._game
        result = ActionResult(
            score_change=SideScores().with_side(side, definition.value),
            possession=self._possession_after(side, definition.possession_after),
            clock_stop=definition.stops_clock,
            player_stats=self._player_deltas(definition.player_stats, definition.value, player),
            team_stats=self._team_deltas(definition.team_stats, definition.value),
        )
        action = self._build_action(ActionKind.SCORE, side, definition.id, definition.value, result, player)
        validation = self._config.validators.validate_action(action, before)
        if not validation.valid:
            logger.info("score rejected", game_id=before.id, side=side, action=definition.id, reason=validation.message)
            return validation

        game = append_action(self._apply_result(before, side, result, player), action)
        game = self._maybe_end_period(before, game)
        self._commit(game, ChangeKind.SCORE_RECORDED, action.id)
        logger.debug("score recorded", game_id=game.id, side=side, action=definition.id, value=definition.value)
        return ValidResult.ok()

    def record_violation(self, side: Side, violation_id: str, player_id: str | None = None) -> ValidResult:
        """
        Record a violation committed by side.

        Exactly one penalty applies: score credits the opponent with the
        penalty value, possession hands possession to the opponent, timeout
        charges the offending team a timeout, disqualify flags the offending
        player, none only logs the violation and its stats.
        """
        if failure := self._require_live():
            return failure
        definition = self._config.find_violation(violation_id)
        if definition is None:
            return ValidResult.fail(ScoringErrorCode.UNKNOWN_ACTION, f"unknown violation {violation_id!r}")
        player, failure = self._lookup_player(side, player_id)
        if failure:
            return failure

        before = self._game
        penalty = definition.penalty_type
        score_change = SideScores()
        if penalty == PenaltyType.SCORE and definition.penalty_value:
            score_change = score_change.with_side(side.opponent, definition.penalty_value)
        possession = side.opponent if penalty == PenaltyType.POSSESSION and self.rules.tracks_possession else None
        result = ActionResult(
            score_change=score_change,
            possession=possession,
            clock_stop=definition.stops_clock,
            player_stats=self._player_deltas(definition.player_stats, definition.penalty_value, player),
            team_stats=self._team_deltas(definition.team_stats, definition.penalty_value),
        )
        action = self._build_action(ActionKind.VIOLATION, side, definition.id, definition.penalty_value, result, player)
        validation = self._config.validators.validate_action(action, before)
        if not validation.valid:
            logger.info("violation rejected", game_id=before.id, action=definition.id, reason=validation.message)
            return validation

        game = self._apply_result(before, side, result, player)
        if penalty == PenaltyType.TIMEOUT:
            team = game.teams[side]
            game = update_team(game, side, timeouts_used=min(team.timeouts, team.timeouts_used + 1))
        elif penalty == PenaltyType.DISQUALIFY and player is not None:
            game = update_player(game, side, player.id, disqualified=True)
            logger.info("player disqualified", game_id=game.id, side=side, player_id=player.id)
        game = append_action(game, action)
        game = self._maybe_end_period(before, game)
        self._commit(game, ChangeKind.VIOLATION_RECORDED, action.id)
        logger.debug("violation recorded", game_id=game.id, side=side, action=definition.id, penalty=penalty)
        return ValidResult.ok()

    def record_event(
        self,
        side: Side,
        event_id: str,
        player_id: str | None = None,
        *,
        notes: str | None = None,
    ) -> ValidResult:
        """Log a non-scoring event from the sport's event catalog."""
        if failure := self._require_live():
            return failure
        definition = self._config.find_event(event_id)
        if definition is None:
            return ValidResult.fail(ScoringErrorCode.UNKNOWN_ACTION, f"unknown event {event_id!r}")
        if definition.requires_player and player_id is None:
            return ValidResult.fail(ScoringErrorCode.PLAYER_REQUIRED, f"{definition.label} requires a player")
        player, failure = self._lookup_player(side, player_id)
        if failure:
            return failure
        if definition.event_type == CustomEventType.SUBSTITUTION and not self.rules.team.allow_substitutions:
            return ValidResult.fail(ScoringErrorCode.RULE_VIOLATION, "substitutions are not allowed")

        before = self._game
        result = ActionResult(
            player_stats=self._player_deltas(definition.player_stats, 1, player),
            team_stats=self._team_deltas(definition.team_stats, 1),
        )
        action = self._build_action(ActionKind.CUSTOM, side, definition.id, 0, result, player, notes)
        validation = self._config.validators.validate_action(action, before)
        if not validation.valid:
            return validation

        game = self._apply_result(before, side, result, player)
        if player is not None:
            if definition.event_type == CustomEventType.SUBSTITUTION:
                game = update_player(game, side, player.id, is_active=not player.is_active)
            elif definition.event_type == CustomEventType.INJURY:
                game = update_player(game, side, player.id, injured=True)
        self._commit(append_action(game, action), ChangeKind.EVENT_RECORDED, action.id)
        return ValidResult.ok()

    def call_timeout(self, side: Side) -> ValidResult:
        """Charge side one timeout and stop both clocks."""
        if failure := self._require_live():
            return failure
        team = self._game.teams[side]
        if team.timeouts_used >= team.timeouts:
            return ValidResult.fail(
                ScoringErrorCode.NO_TIMEOUTS_REMAINING,
                f"team {side} has used all {team.timeouts} timeouts",
            )
        result = ActionResult(clock_stop=True)
        action = self._build_action(ActionKind.TIMEOUT, side, TIMEOUT_ACTION, 0, result)
        game = update_team(self._game, side, timeouts_used=team.timeouts_used + 1)
        game = append_action(stop_clocks(game), action)
        self._commit(game, ChangeKind.TIMEOUT_CALLED, action.id)
        logger.info("timeout called", game_id=game.id, side=side, remaining=game.teams[side].timeouts_remaining)
        return ValidResult.ok()

    def undo_last_action(self) -> ValidResult:
        """
        Tombstone the most recent live log entry and reverse its score delta.

        Only the score is reversed; every other effect of the entry stays.
        """
        if failure := self._require_live():
            return failure
        log = self._game.action_log
        index = next((i for i in range(len(log) - 1, -1, -1) if not log[i].undone), None)
        if index is None:
            return ValidResult.fail(ScoringErrorCode.NOTHING_TO_UNDO, "no actions to undo")

        entry = log[index]
        game = self._game
        for side in Side:
            delta = entry.result.score_change.get(side)
            if delta:
                game = set_score(game, side, game.teams[side].score - delta)
        game = mark_undone(game, index)
        self._commit(game, ChangeKind.ACTION_UNDONE, entry.id)
        logger.info("action undone", game_id=game.id, action_id=entry.id, action=entry.action)
        return ValidResult.ok()

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def add_player(self, side: Side, setup: PlayerSetup) -> ValidResult:
        status = self._game.status
        if status in TERMINAL_STATUSES:
            return ValidResult.fail(ScoringErrorCode.GAME_NOT_LIVE, f"game is {status}")
        team = self._game.teams[side]
        if team.find_player(setup.id) is not None:
            return ValidResult.fail(ScoringErrorCode.DUPLICATE_PLAYER, f"player {setup.id!r} is already on team {side}")
        if len(team.players) >= self.rules.team.max_players:
            return ValidResult.fail(ScoringErrorCode.ROSTER_FULL, f"team {side} roster is full")
        player = create_player(
            self._config,
            setup.id,
            setup.number,
            setup.name,
            position=setup.position,
            is_starter=setup.is_starter,
        )
        game = update_team(self._game, side, players=(*team.players, player))
        self._commit(game, ChangeKind.ROSTER_CHANGED)
        return ValidResult.ok()

    # ------------------------------------------------------------------
    # Clocks
    # ------------------------------------------------------------------

    def toggle_game_clock(self) -> ValidResult:
        """
        Start or stop the primary clock.

        The secondary clock, when the sport has one, always runs exactly
        when the primary does.
        """
        self._require_game_clock("toggle_game_clock")
        if failure := self._require_live():
            return failure
        running = not self._game.state.clock.game_running
        updates: dict[str, object] = {"game_running": running}
        if self.rules.timing.has_secondary_clock:
            updates["secondary_running"] = running
        self._commit(update_clock(self._game, **updates), ChangeKind.CLOCK_TOGGLED)
        return ValidResult.ok()

    def update_game_time(self, time: TimeValue) -> ValidResult:
        """
        Set the primary clock reading.

        The engine has no timer of its own; a periodic caller drives the
        clock through this method. When the new reading ends the period,
        period-end handling runs in the same transition.
        """
        self._require_game_clock("update_game_time")
        if failure := self._require_live():
            return failure
        before = self._game
        game = self._maybe_end_period(before, update_clock(before, game=time))
        self._commit(game, ChangeKind.CLOCK_UPDATED)
        return ValidResult.ok()

    def reset_secondary_clock(self, value: float | None = None) -> ValidResult:
        self._require_secondary_clock("reset_secondary_clock")
        if failure := self._require_live():
            return failure
        seconds = self.rules.timing.secondary_clock_duration if value is None else value
        self._commit(update_clock(self._game, secondary=seconds), ChangeKind.SECONDARY_CLOCK_UPDATED)
        return ValidResult.ok()

    def update_secondary_clock(self, value: float) -> ValidResult:
        self._require_secondary_clock("update_secondary_clock")
        if failure := self._require_live():
            return failure
        self._commit(update_clock(self._game, secondary=max(value, 0.0)), ChangeKind.SECONDARY_CLOCK_UPDATED)
        return ValidResult.ok()

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------

    def _maybe_end_period(self, before: Game, after: Game) -> Game:
        """Run period-end handling when the transition made the period end."""

        def ended(game: Game) -> bool:
            return self._config.validators.should_end_period(game) or self._sudden_death_decided(game)

        if ended(before) or not ended(after):
            return after
        # already closed; reopened by undo or a clock correction
        if len(after.teams[Side.A].period_scores) >= after.state.current_period:
            return after
        return self._close_period(after, log=True)

    def _sudden_death_decided(self, game: Game) -> bool:
        """An overtime period under sudden death ends on the first score that breaks the tie."""
        if not self.rules.overtime.sudden_death or game.state.current_period <= self.rules.period.count:
            return False
        return game.teams[Side.A].score != game.teams[Side.B].score

    def _game_decided(self, game: Game) -> bool:
        return self._config.validators.should_end_game(game) or self._sudden_death_decided(game)

    def _close_period(self, game: Game, *, log: bool) -> Game:
        """Stop the clocks and record the period's result."""
        period = game.state.current_period
        points = {side: game.period_points(side) for side in Side}
        for side in Side:
            team = game.teams[side]
            game = update_team(game, side, period_scores=(*team.period_scores, points[side]))

        winner_stat = self.rules.scoring.period_winner_stat
        leader = None
        if points[Side.A] != points[Side.B]:
            leader = Side.A if points[Side.A] > points[Side.B] else Side.B
        if winner_stat is not None and leader is not None:
            game = update_team(game, leader, stats=add_stat_deltas(game.teams[leader].stats, {winner_stat: 1}))

        game = stop_clocks(game)
        if log:
            action = GameAction(
                id=self._action_ids(),
                timestamp=self._clock(),
                kind=ActionKind.PERIOD_END,
                side=None,
                action=PERIOD_END_ACTION,
                period=period,
                game_time=game.state.clock.game,
                result=ActionResult(clock_stop=True),
            )
            game = append_action(game, action)
        logger.info("period ended", game_id=game.id, period=period, points_a=points[Side.A], points_b=points[Side.B])
        return game

    def advance_period(self) -> ValidResult:
        """
        Move to the next period, or into overtime after the last one.

        Fails with GAME_COMPLETE when the sport's game-end condition holds,
        or when the regulation periods are used up and overtime is disabled;
        the period number is unchanged in both cases.
        """
        if failure := self._require_live():
            return failure
        game = self._game
        if self._game_decided(game):
            return ValidResult.fail(ScoringErrorCode.GAME_COMPLETE, "game is complete")
        period = game.state.current_period
        overtime = period >= self.rules.period.count
        if overtime and not self.rules.overtime.enabled:
            return ValidResult.fail(ScoringErrorCode.GAME_COMPLETE, "all periods played and overtime is disabled")

        if len(game.teams[Side.A].period_scores) < period:
            game = self._close_period(game, log=False)

        timing = self.rules.timing
        game = update_state(
            game,
            current_period=period + 1,
            clock=ClockState(
                game=period_start_time(self.rules, overtime=overtime),
                game_running=False,
                secondary=timing.secondary_clock_duration if timing.has_secondary_clock else None,
                secondary_running=False,
            ),
            period_start_scores=SideScores(A=game.teams[Side.A].score, B=game.teams[Side.B].score),
        )
        game = self._reset_period_stats(game)
        self._commit(game, ChangeKind.PERIOD_ADVANCED)
        logger.info("period advanced", game_id=game.id, period=period + 1, overtime=overtime)
        return ValidResult.ok()

    def _reset_period_stats(self, game: Game) -> Game:
        team_resets = {s.id: s.default for s in self._config.team_stats if s.period_scoped}
        player_resets = {s.id: s.default for s in self._config.player_stats if s.period_scoped}
        reset_timeouts = self.rules.team.timeouts_reset_each_period
        for side in Side:
            team = game.teams[side]
            updates: dict[str, object] = {}
            if team_resets:
                updates["stats"] = {**team.stats, **team_resets}
            if player_resets:
                updates["players"] = tuple(
                    p.model_copy(update={"stats": {**p.stats, **player_resets}}) for p in team.players
                )
            if reset_timeouts:
                updates["timeouts_used"] = 0
            if updates:
                game = update_team(game, side, **updates)
        return game

    # ------------------------------------------------------------------
    # Possession
    # ------------------------------------------------------------------

    def toggle_possession(self) -> ValidResult:
        self._require_possession("toggle_possession")
        if failure := self._require_live():
            return failure
        current = self._game.state.possession
        return self._set_possession(current.opponent if current is not None else Side.A)

    def set_possession(self, side: Side) -> ValidResult:
        self._require_possession("set_possession")
        if failure := self._require_live():
            return failure
        return self._set_possession(side)

    def _set_possession(self, side: Side) -> ValidResult:
        self._commit(update_state(self._game, possession=side), ChangeKind.POSSESSION_CHANGED)
        return ValidResult.ok()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_winner(self) -> Side | None:
        return self._config.validators.get_winner(self._game)

    def is_game_over(self) -> bool:
        return self._game.status == GameStatus.COMPLETED or self._game_decided(self._game)

    def period_label(self) -> str:
        return self.rules.period.label(self._game.state.current_period)

    def period_points(self, side: Side) -> int:
        return self._game.period_points(side)

    def derived_stats(self, side: Side, player_id: str) -> dict[str, float]:
        """
        Computed rates for one player; never stored on the player.

        Raises:
            ValueError: If the player is not on the team

        """
        player = self._game.teams[side].find_player(player_id)
        if player is None:
            raise ValueError(f"Player {player_id!r} is not on team {side}")
        calculate = self._config.validators.calculate_derived_stats
        if calculate is None:
            return {}
        return calculate(player)
