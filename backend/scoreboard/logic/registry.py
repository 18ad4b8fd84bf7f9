"""Sport registry: sport id to configuration.

Built once at startup into a read-only table. Resolution fails closed: an
unknown or disabled sport raises, it is never replaced by another sport's
rules.
"""

from __future__ import annotations

from functools import cache
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from scoreboard.logic.exceptions import InvalidConfigurationError, SportDisabledError, UnknownSportError
from scoreboard.logic.rules import validate_configuration

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from scoreboard.logic.rules import SportConfiguration, SportMeta

logger = structlog.get_logger()


class SportRegistry:
    """Immutable table of validated sport configurations."""

    def __init__(self, configs: Mapping[str, SportConfiguration]) -> None:
        self._configs: Mapping[str, SportConfiguration] = MappingProxyType(dict(configs))

    def get(self, sport_id: str) -> SportConfiguration:
        """
        Resolve a sport id.

        Raises:
            UnknownSportError: No configuration is registered under sport_id
            SportDisabledError: The configuration is disabled

        """
        config = self._configs.get(sport_id)
        if config is None:
            raise UnknownSportError(sport_id)
        if not config.meta.enabled:
            raise SportDisabledError(sport_id)
        return config

    def is_supported(self, sport_id: str) -> bool:
        return sport_id in self._configs

    def list_enabled(self) -> list[SportMeta]:
        """Metadata of enabled sports, in registration order."""
        return [c.meta for c in self._configs.values() if c.meta.enabled]

    def __contains__(self, sport_id: object) -> bool:
        return sport_id in self._configs

    def __len__(self) -> int:
        return len(self._configs)


def build_registry(
    configs: Iterable[SportConfiguration],
    *,
    disabled: Iterable[str] = (),
) -> SportRegistry:
    """
    Validate configurations and freeze them into a registry.

    Sports named in disabled are registered as disabled copies, so resolving
    them raises SportDisabledError rather than UnknownSportError.

    Raises:
        InvalidConfigurationError: A configuration breaks the contract, two
            share an id, or disabled names an unregistered sport

    """
    disabled_ids = set(disabled)
    table: dict[str, SportConfiguration] = {}
    for config in configs:
        if config.id in table:
            raise InvalidConfigurationError(f"duplicate sport id {config.id!r}")
        validate_configuration(config)
        table[config.id] = config.with_enabled(enabled=False) if config.id in disabled_ids else config

    unknown = disabled_ids - set(table)
    if unknown:
        raise InvalidConfigurationError(f"cannot disable unregistered sports: {sorted(unknown)}")

    registry = SportRegistry(table)
    logger.info("sport registry built", sports=list(table), enabled=[m.id for m in registry.list_enabled()])
    return registry


@cache
def default_registry() -> SportRegistry:
    """Process-wide registry of the bundled sports, honoring settings."""
    from scoreboard.settings import ScoreboardSettings  # noqa: PLC0415
    from scoreboard.sports import BUNDLED_SPORTS  # noqa: PLC0415

    settings = ScoreboardSettings()
    return build_registry(BUNDLED_SPORTS, disabled=settings.disabled_sports)


def get_sport_config(sport_id: str) -> SportConfiguration:
    """Resolve a sport id against the default registry."""
    return default_registry().get(sport_id)
