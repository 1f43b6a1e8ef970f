"""
Move directions for the tile merge game, and helpers to determine which moves change a board.
"""

from enum import Enum

from numpy import ndarray

from tilemerge.errors import InvalidDirectionError


class Direction(str, Enum):
    """
    Swipe direction. Tiles travel toward the edge named by the direction.
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'


def parse_direction(direction: 'Direction | str') -> Direction:
    """
    Convert a direction token into a ``Direction``.

    Parameters
    ----------
    direction : Direction or str
        Either a ``Direction`` member or one of ``'up'``, ``'down'``, ``'left'``, ``'right'``.

    Returns
    -------
    Direction
        The matching direction.

    Raises
    ------
    InvalidDirectionError
        If the token does not name a direction.
    """
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(direction)
    except ValueError:
        raise InvalidDirectionError(direction) from None


def oriented_view(board: ndarray, direction: Direction) -> ndarray:
    """
    View a board so that each row is one line read in travel order.

    Parameters
    ----------
    board : ndarray
        A 2D board.
    direction : Direction
        The direction of travel.

    Returns
    -------
    ndarray
        A view (not a copy) of the board. Row ``i`` holds line ``i``, which is row ``i`` of the board for horizontal
        moves and column ``i`` for vertical moves, starting from the cell nearest the destination edge.

    Notes
    -----
    Writing into the view writes into ``board``.
    """
    if direction is Direction.LEFT:
        return board
    if direction is Direction.RIGHT:
        return board[:, ::-1]
    if direction is Direction.UP:
        return board.T
    return board[::-1, :].T


def legal_actions_mask(state: ndarray) -> dict[Direction, bool]:
    """
    Tell for every direction whether a move would change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    dict[Direction, bool]
        Mapping from direction to legality, in ``Direction`` order.

    Notes
    -----
    Horizontal and vertical adjacencies are computed once, then shared by the two directions of each axis.
    """
    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = state[:, :-1], state[:, 1:]
    h_can_merge = bool(((left_cols != 0) & (left_cols == right_cols)).any())

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = state[:-1, :], state[1:, :]
    v_can_merge = bool(((top_rows != 0) & (top_rows == bottom_rows)).any())

    # ##>: Check slide conditions per direction.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return {
        Direction.LEFT: bool(left.any()) or h_can_merge,
        Direction.UP: bool(up.any()) or v_can_merge,
        Direction.RIGHT: bool(right.any()) or h_can_merge,
        Direction.DOWN: bool(down.any()) or v_can_merge,
    }


def legal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the moves that would change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Legal directions, in ``Direction`` order.
    """
    return [direction for direction, legal in legal_actions_mask(state).items() if legal]


def illegal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the moves that would leave the board unchanged.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Illegal directions, in ``Direction`` order.
    """
    return [direction for direction, legal in legal_actions_mask(state).items() if not legal]
