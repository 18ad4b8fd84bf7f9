"""
Pydantic models that cross component boundaries.

ValidResult is how every engine operation reports a rule rejection; the
setup models describe the input for creating a game.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.enums import ScoringErrorCode  # noqa: TC001


class ValidResult(BaseModel):
    """Outcome of an engine operation: accepted, or rejected with a reason."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    error: ScoringErrorCode | None = None
    message: str | None = None

    @classmethod
    def ok(cls) -> ValidResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: ScoringErrorCode, message: str) -> ValidResult:
        return cls(valid=False, error=error, message=message)


class PlayerSetup(BaseModel):
    """Roster entry supplied when a game is created."""

    id: str
    number: str = ""
    name: str = ""
    position: str | None = None
    is_starter: bool = False


class TeamSetup(BaseModel):
    """Team identity supplied when a game is created."""

    name: str = Field(min_length=1)
    color: str = "#FFFFFF"
    logo: str | None = None
    players: list[PlayerSetup] = Field(default_factory=list)
