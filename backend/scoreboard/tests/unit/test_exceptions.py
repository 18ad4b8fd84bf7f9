"""Tests for the scoreboard exception hierarchy."""

import pytest

from scoreboard.logic.exceptions import (
    GameExistsError,
    GameNotFoundError,
    InvalidConfigurationError,
    NoGameClockError,
    NoPossessionTrackingError,
    NoSecondaryClockError,
    ScoreboardError,
    SportDisabledError,
    SportResolutionError,
    SyncError,
    UnknownSportError,
    UnsupportedOperationError,
)


class TestUnsupportedOperationError:
    @pytest.mark.parametrize("exc_class", [NoGameClockError, NoSecondaryClockError, NoPossessionTrackingError])
    def test_subclasses_carry_sport_and_operation(self, exc_class) -> None:
        err = exc_class(sport_id="badminton", operation="toggle_game_clock", reason="no game clock")

        assert isinstance(err, UnsupportedOperationError)
        assert isinstance(err, ScoreboardError)
        assert err.sport_id == "badminton"
        assert err.operation == "toggle_game_clock"
        assert str(err) == "toggle_game_clock is not supported by badminton: no game clock"

    def test_fields_are_keyword_only(self) -> None:
        with pytest.raises(TypeError):
            NoGameClockError("badminton", "toggle_game_clock", "no game clock")


class TestSportResolutionError:
    def test_unknown_sport(self) -> None:
        err = UnknownSportError("curling")

        assert isinstance(err, SportResolutionError)
        assert err.sport_id == "curling"
        assert str(err) == "sport configuration not found: 'curling'"

    def test_disabled_sport(self) -> None:
        err = SportDisabledError("kabaddi")

        assert isinstance(err, SportResolutionError)
        assert err.sport_id == "kabaddi"
        assert str(err) == "sport is disabled: 'kabaddi'"

    def test_catch_base_catches_both(self) -> None:
        for err in (UnknownSportError("curling"), SportDisabledError("kabaddi")):
            with pytest.raises(SportResolutionError):
                raise err


class TestSyncError:
    def test_fields_and_message(self) -> None:
        err = SyncError(game_code="TEST42", operation="persist", reason="database is locked")

        assert err.game_code == "TEST42"
        assert err.operation == "persist"
        assert err.reason == "database is locked"
        assert str(err) == "persist failed for game TEST42: database is locked"

    def test_game_exists_is_a_create_failure(self) -> None:
        err = GameExistsError("TEST42")

        assert isinstance(err, SyncError)
        assert err.game_code == "TEST42"
        assert err.operation == "create"
        assert err.reason == "game code already in use"


class TestOtherErrors:
    def test_game_not_found_is_not_a_sync_error(self) -> None:
        err = GameNotFoundError("TEST42")

        assert not isinstance(err, SyncError)
        assert err.game_code == "TEST42"
        assert str(err) == "game not found: TEST42"

    def test_invalid_configuration_is_a_scoreboard_error(self) -> None:
        with pytest.raises(ScoreboardError, match="sport 'kabaddi'"):
            raise InvalidConfigurationError("sport 'kabaddi': duplicate action id 'raid'")
