"""
ERRORS.PY - Everything that can go wrong in the game core
Bad settings, broken invariants and a save file we can't reach
"""


class MathRaceError(Exception):
    pass


class InvalidArgumentError(MathRaceError, ValueError):
    """A setting outside its allowed range (max factor < 1, unknown tier)"""


class InvariantViolationError(MathRaceError, RuntimeError):
    """Internal bug - should never happen during a real game"""


class StorageUnavailableError(MathRaceError, OSError):
    """High score file could not be read or written"""
