# engine/errors.py


class MinesweeperError(Exception):
    """Base class for every error raised by the game engine."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board or mine parameters are inconsistent."""


class IllegalState(MinesweeperError, RuntimeError):
    """An operation was invoked in a state that does not allow it."""


class GameOver(IllegalState):
    """A mutating command reached a session that is already won or lost."""


class PersistenceError(MinesweeperError):
    """The statistics file could not be read or written."""
