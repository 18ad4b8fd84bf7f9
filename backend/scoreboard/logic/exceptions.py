"""Typed exceptions for structural misuse and external failures.

Rule rejections (bad action id, no timeouts left, disqualified player) are
not exceptions: engine operations return them as ValidResult values. The
classes here signal conditions a caller cannot correct at runtime: calling
an operation the attached sport does not support, resolving an unknown or
disabled sport, a malformed sport configuration, or a failing document
store. Callers should not catch-and-ignore them.
"""


class ScoreboardError(Exception):
    """Base class for all scoreboard errors."""


class UnsupportedOperationError(ScoreboardError):
    """The attached sport does not support the requested operation.

    Attributes:
        sport_id: Sport the engine is attached to.
        operation: Name of the rejected operation.

    """

    def __init__(self, *, sport_id: str, operation: str, reason: str) -> None:
        self.sport_id = sport_id
        self.operation = operation
        super().__init__(f"{operation} is not supported by {sport_id}: {reason}")


class NoGameClockError(UnsupportedOperationError):
    """Sport declares no primary game clock."""


class NoSecondaryClockError(UnsupportedOperationError):
    """Sport declares no secondary (shot/raid) clock."""


class NoPossessionTrackingError(UnsupportedOperationError):
    """Sport has no possession concept."""


class SportResolutionError(ScoreboardError):
    """A sport id could not be resolved to a usable configuration."""

    def __init__(self, sport_id: str, message: str) -> None:
        self.sport_id = sport_id
        super().__init__(message)


class UnknownSportError(SportResolutionError):
    """No configuration is registered for the sport id."""

    def __init__(self, sport_id: str) -> None:
        super().__init__(sport_id, f"sport configuration not found: {sport_id!r}")


class SportDisabledError(SportResolutionError):
    """The configuration exists but is disabled."""

    def __init__(self, sport_id: str) -> None:
        super().__init__(sport_id, f"sport is disabled: {sport_id!r}")


class InvalidConfigurationError(ScoreboardError):
    """A sport configuration violates the configuration contract.

    Raised while the registry is built, so typoed stat ids and colliding
    action ids fail at startup instead of at the first increment.
    """


class SyncError(ScoreboardError):
    """Reading from or writing to the document store failed.

    Never rolls back in-memory engine state; the caller decides whether to retry.
    """

    def __init__(self, *, game_code: str, operation: str, reason: str) -> None:
        self.game_code = game_code
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed for game {game_code}: {reason}")


class GameExistsError(SyncError):
    """A game document with this code already exists."""

    def __init__(self, game_code: str) -> None:
        super().__init__(game_code=game_code, operation="create", reason="game code already in use")


class GameNotFoundError(ScoreboardError):
    """The game document does not exist (or was deleted).

    Terminal for the owning layer: it is not a transient empty state.
    """

    def __init__(self, game_code: str) -> None:
        self.game_code = game_code
        super().__init__(f"game not found: {game_code}")
