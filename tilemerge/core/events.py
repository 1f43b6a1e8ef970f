"""
Data contract between a move and whatever animates or displays it.
"""

from typing import NamedTuple


class MergeEvent(NamedTuple):
    """
    A cell produced by a merge during one move.

    Attributes
    ----------
    row : int
        Absolute row of the merged cell.
    col : int
        Absolute column of the merged cell.
    value : int
        Value of the tile resulting from the merge.
    """

    row: int
    col: int
    value: int


class MoveResult(NamedTuple):
    """
    Outcome of applying one move to a grid.

    Attributes
    ----------
    changed : bool
        Whether any cell value changed. A move that leaves the grid untouched must not be followed by a spawn.
    score : int
        Score gained by the move, the sum of every merge value.
    events : tuple[MergeEvent, ...]
        Merge events ordered by line index, then by travel order within the line.
    """

    changed: bool
    score: int
    events: tuple[MergeEvent, ...]
