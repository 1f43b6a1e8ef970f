"""
Core functionality of the tile merge game: sliding and merging lines, placing new tiles and detecting the end of
the game. Every function works on a square numpy board where 0 marks an empty cell.
"""

import logging
from collections.abc import Mapping

from numpy import all as np_all
from numpy import any as np_any
from numpy import arange, argwhere, array_equal, ndarray

from tilemerge.config import DEFAULT_CONFIG
from tilemerge.core.events import MergeEvent, MoveResult
from tilemerge.core.gamemove import Direction, oriented_view, parse_direction
from tilemerge.core.randomness import RandomSource

_logger = logging.getLogger(__name__)


def merge_line(line: ndarray) -> tuple[int, ndarray, list[int]]:
    """
    Slide a line toward its start and merge equal neighbours.

    Parameters
    ----------
    line : ndarray
        A 1D array read in travel order, the cell nearest the destination edge first.

    Returns
    -------
    score : int
        The sum of the values produced by merges.
    merged_line : ndarray
        The line after the move, padded with zeros up to the input length.
    merged_positions : list[int]
        Indices of ``merged_line`` holding a tile produced by a merge, in increasing order.

    Notes
    -----
    - Zeros (empty cells) are ignored before merging.
    - Single pass: a value merges into the last output slot when equal to it, unless that slot was itself produced
      by a merge during this pass. ``[2, 2, 2]`` gives ``[4, 2]``, and ``[4, 4, 8]`` gives ``[8, 8]``.
    """
    result: list[int] = []
    merged_positions: list[int] = []
    score = 0

    for value in line[line != 0].tolist():
        last = len(result) - 1
        if result and result[last] == value and (not merged_positions or merged_positions[-1] != last):
            result[last] *= 2
            score += result[last]
            merged_positions.append(last)
        else:
            result.append(value)

    merged_line = line.copy()
    merged_line[:] = 0
    merged_line[: len(result)] = result
    return score, merged_line, merged_positions


def slide_and_merge(board: ndarray, direction: Direction) -> tuple[int, ndarray, list[MergeEvent]]:
    """
    Slide every line of the board in a direction, merge adjacent cells and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board, a square 2D array. Left untouched.
    direction : Direction
        The direction of travel.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        A new board after sliding and merging.
    events : list[MergeEvent]
        Merges with their absolute coordinates, ordered by line index then travel order.
    """
    size = board.shape[0]
    result = board.copy()
    lines = oriented_view(result, direction)

    # ##: Flat cell indices seen through the same orientation, to map line positions back to the board.
    positions = oriented_view(arange(size * size).reshape(size, size), direction)

    score = 0
    events = []
    for i in range(size):
        line_score, merged_line, merged_positions = merge_line(lines[i])
        lines[i] = merged_line
        score += line_score
        for j in merged_positions:
            row, col = divmod(int(positions[i, j]), size)
            events.append(MergeEvent(row=row, col=col, value=int(merged_line[j])))

    return score, result, events


def latent_state(state: ndarray, direction: 'Direction | str') -> tuple[ndarray, MoveResult]:
    """
    Compute the board after a move, without adding a new tile.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    direction : Direction or str
        The move to apply.

    Returns
    -------
    new_state : ndarray
        The board after the move. Equal to ``state`` when nothing moved.
    result : MoveResult
        Whether the board changed, the score gained and the merge events.

    Raises
    ------
    InvalidDirectionError
        If ``direction`` is not a known direction.
    """
    direction = parse_direction(direction)
    score, new_state, events = slide_and_merge(state, direction)
    changed = not array_equal(new_state, state)
    return new_state, MoveResult(changed=changed, score=score, events=tuple(events))


def empty_cells(state: ndarray) -> list[tuple[int, int]]:
    """
    List the empty cells of a board in row-major order.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[tuple[int, int]]
        Positions ``(row, col)`` of the cells holding 0.
    """
    return [(int(cell[0]), int(cell[1])) for cell in argwhere(state == 0)]


def fill_cell(
    state: ndarray, random: RandomSource, tile_spawn_probs: Mapping[int, float] | None = None
) -> tuple[int, int, int] | None:
    """
    Place one new tile on a random empty cell.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. **Modified in-place.**
    random : RandomSource
        Source of uniform draws in ``[0, 1)``.
    tile_spawn_probs : Mapping[int, float], optional
        Probability of each of the two spawnable values, by default 90% for 2 and 10% for 4.

    Returns
    -------
    tuple[int, int, int] or None
        The ``(row, col, value)`` placed, or None when the board is full.

    Notes
    -----
    - The first draw selects the cell uniformly among empty cells, the second selects the value.
    - A full board is left untouched and consumes no draw.
    """
    spawn_probs = tile_spawn_probs or DEFAULT_CONFIG.tile_spawn_probs
    cells = empty_cells(state)
    if not cells:
        return None

    row, col = cells[int(random() * len(cells))]
    small, large = min(spawn_probs), max(spawn_probs)
    value = small if random() < spawn_probs[small] else large

    state[row, col] = value
    _logger.debug('Spawned %d at (%d, %d)', value, row, col)
    return row, col, value


def is_done(state: ndarray) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no adjacent cells have the same value.
    """
    return bool(
        np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
    )


def is_valid_board(state: ndarray, size: int) -> bool:
    """
    Check that a board is square of the given size and only holds empty cells or powers of two.

    Parameters
    ----------
    state : ndarray
        The board to check.
    size : int
        Expected side of the board.

    Returns
    -------
    bool
        True if every cell is 0 or a power of two greater or equal to 2.
    """
    if state.shape != (size, size):
        return False
    tiles = state[state != 0]
    return bool(np_all(tiles >= 2) and np_all((tiles & (tiles - 1)) == 0))
