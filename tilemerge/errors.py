"""
Exceptions raised by the tile merge engine and the score history ledger.
"""


class TileMergeError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(TileMergeError, ValueError):
    """An argument passed by the caller is not acceptable."""


class InvalidDirectionError(InvalidArgumentError):
    """
    Raised when a move is requested with an unknown direction token.

    Parameters
    ----------
    direction : object
        The rejected token.
    """

    def __init__(self, direction: object):
        self.direction = direction
        super().__init__(f"Unknown move direction: {direction!r}, expected one of 'up', 'down', 'left', 'right'")


class InvalidGridError(InvalidArgumentError):
    """Raised when a grid handed to the engine breaks the tile invariants."""


class InvalidScoreError(InvalidArgumentError):
    """Raised when a score to record is negative or not an integer."""


class MalformedHistoryError(TileMergeError, ValueError):
    """
    Raised when persisted score history cannot be decoded.

    The ledger catches it on load and falls back to an empty history.
    """
