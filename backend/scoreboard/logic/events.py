"""Engine notifications.

Every engine transition emits exactly one StateChange carrying the complete
new snapshot, so subscribers never observe a partially applied action.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from scoreboard.logic.enums import ChangeKind  # noqa: TC001
from scoreboard.logic.state import Game  # noqa: TC001


class StateChange(BaseModel):
    """A committed engine transition."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    game: Game
    action_id: str | None = None  # log entry appended or tombstoned by the transition

    @property
    def is_local(self) -> bool:
        """True when the change originated in this engine, not in the store."""
        return self.kind != ChangeKind.SNAPSHOT_LOADED

