"""
Immutable state update utilities using Pydantic model_copy.

Provides helper functions for common immutable state updates on frozen
Pydantic models. These functions never mutate the input state - they
always return new state objects with the requested changes applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.rules import SCORE_STAT_ID
from scoreboard.logic.state import ClockState, Game, GameAction, GameState, Player, Team

if TYPE_CHECKING:
    from collections.abc import Mapping

    from scoreboard.logic.enums import Side
    from scoreboard.logic.state import StatValue

_TEAM_FIELDS = set(Team.model_fields)
_PLAYER_FIELDS = set(Player.model_fields)
_STATE_FIELDS = set(GameState.model_fields)
_CLOCK_FIELDS = set(ClockState.model_fields)


def _check_fields(kind: str, updates: Mapping[str, object], allowed: set[str]) -> None:
    invalid_fields = set(updates) - allowed
    if invalid_fields:
        raise ValueError(f"Invalid {kind} fields: {invalid_fields}")


def update_team(game: Game, side: Side, **updates: object) -> Game:
    """
    Return new game with the team at side updated.

    Raises:
        ValueError: If update fields are invalid

    """
    _check_fields("team", updates, _TEAM_FIELDS)
    teams = dict(game.teams)
    teams[side] = game.teams[side].model_copy(update=updates)
    return game.model_copy(update={"teams": teams})


def update_player(game: Game, side: Side, player_id: str, **updates: object) -> Game:
    """
    Return new game with one player of a team updated.

    Raises:
        ValueError: If the player is not on the team or update fields are invalid

    """
    _check_fields("player", updates, _PLAYER_FIELDS)
    team = game.teams[side]
    if team.find_player(player_id) is None:
        raise ValueError(f"Player {player_id!r} is not on team {side}")
    players = tuple(p.model_copy(update=updates) if p.id == player_id else p for p in team.players)
    return update_team(game, side, players=players)


def update_state(game: Game, **updates: object) -> Game:
    """Return new game with GameState fields replaced."""
    _check_fields("state", updates, _STATE_FIELDS)
    return game.model_copy(update={"state": game.state.model_copy(update=updates)})


def update_clock(game: Game, /, **updates: object) -> Game:
    """Return new game with ClockState fields replaced."""
    _check_fields("clock", updates, _CLOCK_FIELDS)
    return update_state(game, clock=game.state.clock.model_copy(update=updates))


def stop_clocks(game: Game) -> Game:
    """Return new game with both clocks stopped."""
    return update_clock(game, game_running=False, secondary_running=False)


def set_score(game: Game, side: Side, score: int) -> Game:
    """
    Return new game with a team's score set.

    The team stat 'score', when the sport declares it, mirrors the score.
    """
    team = game.teams[side]
    updates: dict[str, object] = {"score": score}
    if SCORE_STAT_ID in team.stats:
        updates["stats"] = {**team.stats, SCORE_STAT_ID: score}
    return update_team(game, side, **updates)


def add_stat_deltas(stats: Mapping[str, StatValue], deltas: Mapping[str, StatValue]) -> dict[str, StatValue]:
    """Return a new stat map with numeric deltas added."""
    result = dict(stats)
    for stat_id, delta in deltas.items():
        result[stat_id] = result.get(stat_id, 0) + delta
    return result


def append_action(game: Game, action: GameAction) -> Game:
    """Return new game with an action appended to the log."""
    return game.model_copy(update={"action_log": (*game.action_log, action)})


def mark_undone(game: Game, index: int) -> Game:
    """
    Return new game with the log entry at index tombstoned.

    The undone flag is the only field of a logged action that ever changes.
    """
    log = list(game.action_log)
    log[index] = log[index].model_copy(update={"undone": True})
    return game.model_copy(update={"action_log": tuple(log)})


def touch(game: Game, now_ms: int) -> Game:
    """
    Return new game with last_update advanced.

    last_update strictly increases even when the wall clock stalls or steps
    backwards, so every local transition outranks the snapshot it replaced.
    """
    return game.model_copy(update={"last_update": max(now_ms, game.last_update + 1)})
