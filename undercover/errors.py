"""Error taxonomy for the Bettercover engine."""


class GameError(Exception):
    """Base class for engine errors."""


class InvalidSetup(GameError, ValueError):
    """Start request rejected: role counts or roster size are not allowed."""


class PreconditionViolation(GameError):
    """Event issued in a phase that does not accept it, or against a bad target."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class InvalidBallot(GameError, ValueError):
    """Tally is partial or names players that cannot receive votes."""


class CatalogError(GameError, LookupError):
    """Unknown language or empty word catalog."""
