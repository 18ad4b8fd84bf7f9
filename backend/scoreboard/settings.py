"""Scoreboard configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from shared.logging import resolve_log_format, resolve_log_level
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class ScoreboardSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREBOARD_"}

    db_path: str = Field(default="backend/data/scoreboard.db", min_length=1)
    log_dir: str = Field(default="backend/logs/scoreboard", min_length=1)
    # bundled sports that resolve to SportDisabledError
    disabled_sports: list[str] = []
    game_code_attempts: int = Field(default=5, ge=1)
    # unset falls back to LOG_LEVEL / LOG_FORMAT
    log_level: str | None = None
    log_format: str | None = None

    @field_validator("disabled_sports", mode="before")
    @classmethod
    def validate_disabled_sports(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str | None:
        if v is None:
            return None
        resolve_log_level(v)
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str | None) -> str | None:
        if v is None:
            return None
        resolve_log_format(v)
        return v.lower()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings
