from scoreboard.logic.enums import ActionKind, ChangeKind, ScoringErrorCode, Side


class TestRecordEvent:
    def test_substitution_toggles_active_flag(self, kabaddi):
        bench = kabaddi.game.teams[Side.A].find_player("a6")
        assert bench.is_active is False

        kabaddi.record_event(Side.A, "substitution", "a6")
        assert kabaddi.game.teams[Side.A].find_player("a6").is_active is True

        kabaddi.record_event(Side.A, "substitution", "a6")
        assert kabaddi.game.teams[Side.A].find_player("a6").is_active is False

    def test_injury_marks_player(self, basketball):
        basketball.record_event(Side.B, "injury", "b4", notes="left ankle")

        assert basketball.game.teams[Side.B].find_player("b4").injured
        entry = basketball.game.action_log[-1]
        assert entry.kind == ActionKind.CUSTOM
        assert entry.notes == "left ankle"
        assert entry.value == 0

    def test_event_does_not_touch_score_or_possession(self, basketball):
        basketball.record_event(Side.A, "rebound", "a2")

        assert basketball.game.teams[Side.A].score == 0
        assert basketball.game.state.possession == Side.A
        assert basketball.game.teams[Side.A].find_player("a2").stats["rebounds"] == 1

    def test_event_without_player_requirement(self, kabaddi):
        changes = []
        kabaddi.subscribe(changes.append)

        result = kabaddi.record_event(Side.B, "review")

        assert result.valid
        assert changes[0].kind == ChangeKind.EVENT_RECORDED
        assert kabaddi.game.action_log[-1].player_id is None

    def test_player_required(self, badminton):
        before = badminton.game

        result = badminton.record_event(Side.A, "injury")

        assert result.error == ScoringErrorCode.PLAYER_REQUIRED
        assert badminton.game is before

    def test_unknown_event(self, badminton):
        # badminton does not offer substitutions at all
        result = badminton.record_event(Side.A, "substitution", "a1")
        assert result.error == ScoringErrorCode.UNKNOWN_ACTION

    def test_unknown_player(self, kabaddi):
        result = kabaddi.record_event(Side.A, "tackle", "b1")
        assert result.error == ScoringErrorCode.UNKNOWN_PLAYER

    def test_undo_event_changes_no_score(self, kabaddi):
        kabaddi.record_score(Side.A, "touch_point", "a1")
        kabaddi.record_event(Side.A, "tackle", "a2")

        kabaddi.undo_last_action()

        assert kabaddi.game.teams[Side.A].score == 1
        assert kabaddi.game.action_log[-1].undone
        assert kabaddi.game.teams[Side.A].find_player("a2").stats["tackles"] == 1


class TestKabaddiScoring:
    def test_raid_stats_and_success_rate(self, kabaddi):
        kabaddi.record_score(Side.A, "touch_point", "a1")
        kabaddi.record_score(Side.A, "touch_point", "a1")
        kabaddi.record_event(Side.A, "empty_raid", "a1")

        stats = kabaddi.game.teams[Side.A].find_player("a1").stats
        assert stats["raids"] == 3
        assert stats["successful_raids"] == 2
        assert stats["points"] == 2
        assert kabaddi.derived_stats(Side.A, "a1") == {"raid_success_rate": 66.7}

    def test_all_out_counts_team_stat(self, kabaddi):
        kabaddi.record_score(Side.B, "all_out")

        team = kabaddi.game.teams[Side.B]
        assert team.score == 2
        assert team.stats["all_outs"] == 1
        assert kabaddi.game.state.possession == Side.A

    def test_super_tackle(self, kabaddi):
        kabaddi.record_score(Side.B, "super_tackle", "b3")

        stats = kabaddi.game.teams[Side.B].find_player("b3").stats
        assert stats["points"] == 2
        assert stats["super_tackles"] == 1
        assert stats["tackles"] == 1

    def test_out_credits_opponent(self, kabaddi):
        kabaddi.record_violation(Side.A, "out", "a5")

        assert kabaddi.game.teams[Side.B].score == 1
        assert kabaddi.game.teams[Side.A].find_player("a5").stats["outs"] == 1
