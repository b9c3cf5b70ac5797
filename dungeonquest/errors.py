"""Exception types raised by the game core."""


class GameError(Exception):
    """Base class for recoverable gameplay errors.

    The dispatcher reports these to the player and keeps the session running.
    """


class CombatError(GameError):
    """Raised when an attack cannot happen (dead attacker, missing target)."""


class PuzzleError(GameError):
    """Raised when attempting a puzzle that is solved or out of attempts."""


class SaveGameError(GameError):
    """Raised when a save file cannot be written, read, or restored."""
