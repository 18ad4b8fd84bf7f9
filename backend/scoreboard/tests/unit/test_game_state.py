import pytest
from pydantic import ValidationError

from scoreboard.logic.enums import ActionKind, Side
from scoreboard.logic.state import Game, GameAction, TimeValue
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
from scoreboard.sports import BADMINTON, KABADDI
from scoreboard.tests.conftest import CREATED_AT, create_game


def make_action(action_id="act_1", **overrides):
    fields = {
        "id": action_id,
        "timestamp": CREATED_AT,
        "kind": ActionKind.SCORE,
        "side": Side.A,
        "action": "point",
        "value": 1,
        "period": 1,
        "game_time": TimeValue(),
    }
    fields.update(overrides)
    return GameAction(**fields)


class TestTimeValue:
    def test_str(self):
        assert str(TimeValue(minutes=9, seconds=5, tenths=3)) == "9:05.3"

    def test_from_tenths(self):
        assert TimeValue.from_tenths(6005) == TimeValue(minutes=10, seconds=0, tenths=5)
        assert TimeValue.from_tenths(-20).is_zero

    def test_rejects_out_of_range_seconds(self):
        with pytest.raises(ValidationError):
            TimeValue(seconds=60)


class TestGameModel:
    def test_snapshots_are_frozen(self):
        game = create_game()

        with pytest.raises(ValidationError):
            game.status = "completed"

    def test_requires_both_sides(self):
        data = create_game().model_dump()
        del data["teams"][Side.B]

        with pytest.raises(ValidationError, match="exactly A and B"):
            Game.model_validate(data)

    def test_json_document_round_trip(self):
        game = set_score(create_game(KABADDI, players=7), Side.A, 4)
        game = append_action(game, make_action())

        restored = Game.model_validate_json(game.model_dump_json())

        assert restored == game
        assert restored.teams[Side.A].stats["score"] == 4

    def test_document_uses_plain_enum_values(self):
        data = create_game(BADMINTON, players=2).model_dump(mode="json")

        assert set(data["teams"]) == {"A", "B"}
        assert data["status"] == "live"
        assert data["settings"]["rules"]["period"]["kind"] == "set"


class TestStateUtils:
    def test_update_team_returns_new_game(self):
        game = create_game()

        updated = update_team(game, Side.B, name="Visitors")

        assert updated.teams[Side.B].name == "Visitors"
        assert game.teams[Side.B].name == "Away"

    def test_update_team_rejects_unknown_fields(self):
        with pytest.raises(ValueError, match="Invalid team fields"):
            update_team(create_game(), Side.A, nickname="x")

    def test_update_player(self):
        game = update_player(create_game(), Side.A, "a2", injured=True)

        assert game.teams[Side.A].find_player("a2").injured
        assert not game.teams[Side.A].find_player("a1").injured

    def test_update_player_missing(self):
        with pytest.raises(ValueError, match="not on team"):
            update_player(create_game(), Side.A, "b1", injured=True)

    def test_update_state_and_clock(self):
        game = update_state(create_game(), current_period=3)
        game = update_clock(game, game_running=True, secondary_running=True)

        assert game.state.current_period == 3
        assert game.state.clock.game_running

        stopped = stop_clocks(game)
        assert not stopped.state.clock.game_running
        assert not stopped.state.clock.secondary_running

    def test_update_clock_rejects_unknown_fields(self):
        with pytest.raises(ValueError, match="Invalid clock fields"):
            update_clock(create_game(), shot_clock=3)

    def test_set_score_mirrors_score_stat(self):
        game = set_score(create_game(), Side.B, 17)

        assert game.teams[Side.B].score == 17
        assert game.teams[Side.B].stats["score"] == 17

    def test_add_stat_deltas(self):
        assert add_stat_deltas({"points": 2, "fouls": 1}, {"points": 3, "rebounds": 1}) == {
            "points": 5,
            "fouls": 1,
            "rebounds": 1,
        }

    def test_mark_undone_only_touches_one_entry(self):
        game = append_action(create_game(), make_action("act_1"))
        game = append_action(game, make_action("act_2"))

        game = mark_undone(game, 0)

        assert [a.undone for a in game.action_log] == [True, False]

    def test_touch_uses_wall_clock_when_ahead(self):
        game = create_game()
        assert touch(game, CREATED_AT + 500).last_update == CREATED_AT + 500

    def test_touch_never_goes_backwards(self):
        game = create_game()

        assert touch(game, CREATED_AT).last_update == CREATED_AT + 1
        assert touch(game, CREATED_AT - 60_000).last_update == CREATED_AT + 1
