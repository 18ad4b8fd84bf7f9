import pytest

from scoreboard.logic.exceptions import (
    InvalidConfigurationError,
    SportDisabledError,
    SportResolutionError,
    UnknownSportError,
)
from scoreboard.logic.registry import build_registry, default_registry, get_sport_config
from scoreboard.sports import BADMINTON, BASKETBALL, BUNDLED_SPORTS, KABADDI


@pytest.fixture
def fresh_default_registry():
    default_registry.cache_clear()
    yield
    default_registry.cache_clear()


class TestSportRegistry:
    def test_resolves_bundled_sports(self, registry):
        assert registry.get("basketball") is BASKETBALL
        assert registry.get("badminton") is BADMINTON
        assert registry.get("kabaddi") is KABADDI
        assert len(registry) == 3

    def test_unknown_sport_fails_closed(self, registry):
        with pytest.raises(UnknownSportError) as exc_info:
            registry.get("unknown_sport")

        assert exc_info.value.sport_id == "unknown_sport"
        assert "unknown_sport" not in registry
        assert not registry.is_supported("unknown_sport")

    def test_disabled_sport(self):
        registry = build_registry(BUNDLED_SPORTS, disabled=["kabaddi"])

        with pytest.raises(SportDisabledError):
            registry.get("kabaddi")
        assert registry.is_supported("kabaddi")
        assert [m.id for m in registry.list_enabled()] == ["basketball", "badminton"]

    def test_configuration_disabled_in_its_metadata(self):
        registry = build_registry([BASKETBALL.with_enabled(enabled=False)])

        with pytest.raises(SportResolutionError):
            registry.get("basketball")
        assert registry.list_enabled() == []

    def test_list_enabled_keeps_registration_order(self):
        registry = build_registry([KABADDI, BASKETBALL])
        assert [m.name for m in registry.list_enabled()] == ["Kabaddi", "Basketball"]

    def test_duplicate_sport_id(self):
        with pytest.raises(InvalidConfigurationError, match="duplicate sport id"):
            build_registry([BASKETBALL, BADMINTON, BASKETBALL])

    def test_disabling_unregistered_sport(self):
        with pytest.raises(InvalidConfigurationError, match="unregistered"):
            build_registry([BASKETBALL], disabled=["curling"])

    def test_table_is_read_only(self, registry):
        with pytest.raises(TypeError):
            registry._configs["curling"] = BASKETBALL


class TestDefaultRegistry:
    def test_get_sport_config(self, fresh_default_registry):
        assert get_sport_config("basketball") is BASKETBALL

    def test_get_sport_config_unknown(self, fresh_default_registry):
        with pytest.raises(UnknownSportError):
            get_sport_config("unknown_sport")

    def test_honors_disabled_sports_setting(self, fresh_default_registry, monkeypatch):
        monkeypatch.setenv("SCOREBOARD_DISABLED_SPORTS", "badminton")

        with pytest.raises(SportDisabledError):
            get_sport_config("badminton")
        assert get_sport_config("kabaddi") is KABADDI

    def test_is_built_once(self, fresh_default_registry):
        assert default_registry() is default_registry()
