import pytest
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_string_list


class _ListSettings(BaseSettings):
    disabled_sports: list[str] = []
    other_ids: list[str] = []


class TestParseStringList:
    def test_json_array_string(self):
        result = parse_string_list('["basketball","kabaddi"]')
        assert result == ["basketball", "kabaddi"]

    def test_comma_separated_string(self):
        result = parse_string_list("basketball,kabaddi")
        assert result == ["basketball", "kabaddi"]

    def test_comma_separated_with_whitespace(self):
        result = parse_string_list("basketball , kabaddi")
        assert result == ["basketball", "kabaddi"]

    def test_passthrough_list(self):
        sports = ["basketball", "kabaddi"]
        result = parse_string_list(sports)
        assert result == sports

    def test_empty_string_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_string_list("")

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError, match="Invalid JSON array"):
            parse_string_list("[not valid json")

    def test_json_mixed_types_array_raises(self):
        with pytest.raises(ValueError, match="must be an array of strings"):
            parse_string_list('["basketball", 123]')

    def test_json_empty_array_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_string_list("[]")

    def test_empty_list_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_string_list([])

    def test_comma_separated_skips_empty_segments(self):
        result = parse_string_list("basketball,,kabaddi,")
        assert result == ["basketball", "kabaddi"]

    def test_comma_only_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_string_list(",")

    def test_multiple_commas_only_raises(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_string_list(",,,,")

    def test_allow_empty_string(self):
        assert parse_string_list("", allow_empty=True) == []
        assert parse_string_list("   ", allow_empty=True) == []

    def test_allow_empty_json_array(self):
        assert parse_string_list("[]", allow_empty=True) == []

    def test_allow_empty_list(self):
        assert parse_string_list([], allow_empty=True) == []

    def test_allow_empty_still_parses_values(self):
        assert parse_string_list("kabaddi, badminton", allow_empty=True) == ["kabaddi", "badminton"]


class TestStringListEnvSettingsSource:
    def test_string_list_field_stays_raw(self):
        source = StringListEnvSettingsSource(_ListSettings)
        field = _ListSettings.model_fields["disabled_sports"]

        result = source.prepare_field_value("disabled_sports", field, "kabaddi, badminton", value_is_complex=False)

        assert result == "kabaddi, badminton"

    def test_other_list_fields_are_json_decoded(self):
        source = StringListEnvSettingsSource(_ListSettings)
        field = _ListSettings.model_fields["other_ids"]

        assert source.prepare_field_value("other_ids", field, '["a", "b"]', value_is_complex=False) == ["a", "b"]
