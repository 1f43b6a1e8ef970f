"""Grid engine owning the board and the score of one game."""

import logging

from numpy import array_equal, asarray, int64, ndarray, zeros

from tilemerge.config import DEFAULT_CONFIG, GameConfig
from tilemerge.core.events import MoveResult
from tilemerge.core.gameboard import fill_cell, is_done, is_valid_board, latent_state
from tilemerge.core.gamemove import Direction, legal_actions
from tilemerge.core.randomness import RandomSource, numpy_source
from tilemerge.errors import InvalidArgumentError, InvalidGridError

_logger = logging.getLogger(__name__)


class GridEngine:
    """
    Tile merge game engine.

    This class owns the grid and the score of one game. It applies moves, places new tiles and tells whether a move
    is still available. It never spawns a tile on its own: the caller applies a move, then spawns a tile when the
    move changed the grid, then checks whether the game can go on.

    The engine is not reentrant and is meant to be driven by a single caller.
    """

    def __init__(
        self,
        size: int | None = None,
        random: RandomSource | None = None,
        seed: int | None = None,
        config: GameConfig | None = None,
        *,
        _grid: ndarray | None = None,
        _score: int = 0,
    ):
        """
        Initialize the engine and start a new game.

        Parameters
        ----------
        size : int, optional
            The size of the square grid (default taken from the configuration, 4).
        random : RandomSource, optional
            Source of uniform draws in ``[0, 1)`` used to place new tiles. Defaults to a numpy generator.
        seed : int, optional
            Seed of the default numpy generator. Ignored when ``random`` is given.
        config : GameConfig, optional
            Game configuration (default is ``DEFAULT_CONFIG``).

        Raises
        ------
        InvalidArgumentError
            If ``size`` is smaller than 1.
        """
        self._config = config or DEFAULT_CONFIG
        self.size = self._config.size if size is None else size
        if self.size < 1:
            raise InvalidArgumentError(f'Grid size must be at least 1, got {self.size}')
        self._random = random or numpy_source(seed)
        self._grid: ndarray = zeros((self.size, self.size), dtype=int64)
        self._score = 0

        # ##: Resuming from a validated grid must not consume random draws.
        if _grid is None:
            self.reset()
        else:
            self._grid = _grid.copy()
            self._score = _score

    @classmethod
    def from_grid(
        cls,
        grid,
        score: int = 0,
        random: RandomSource | None = None,
        seed: int | None = None,
        config: GameConfig | None = None,
    ) -> 'GridEngine':
        """
        Build an engine resuming from an existing grid.

        Parameters
        ----------
        grid : array_like
            A square grid of tile values, 0 for empty cells.
        score : int, optional
            Score already accumulated (default is 0).
        random : RandomSource, optional
            Source of uniform draws in ``[0, 1)``.
        seed : int, optional
            Seed of the default numpy generator.
        config : GameConfig, optional
            Game configuration.

        Returns
        -------
        GridEngine
            An engine holding a copy of ``grid``.

        Raises
        ------
        InvalidGridError
            If the grid is not a non-empty square array of integers, or holds a value that is neither 0 nor a
            power of two, or if the score is negative.
        """
        try:
            values = asarray(grid)
        except ValueError as error:
            raise InvalidGridError(f'Grid is not a rectangular array: {error}') from error

        # ##: Check the values before casting, a float or string must not be truncated into a tile.
        if values.dtype.kind not in 'iu' or values.ndim != 2 or values.shape[0] < 1:
            raise InvalidGridError(f'Grid must be a non-empty 2D array of integers, got {values.tolist()!r}')
        state = values.astype(int64)
        if not array_equal(state, values) or not is_valid_board(state, state.shape[0]):
            raise InvalidGridError(f'Grid must be square and hold 0 or powers of two >= 2, got {values.tolist()}')
        if score < 0:
            raise InvalidGridError(f'Score must be non-negative, got {score}')

        return cls(size=state.shape[0], random=random, seed=seed, config=config, _grid=state, _score=int(score))

    @property
    def grid(self) -> ndarray:
        """
        Get a copy of the current grid.

        Returns
        -------
        ndarray
            The grid as a 2D numpy array. Modifying it does not affect the engine.
        """
        return self._grid.copy()

    @property
    def score(self) -> int:
        """Cumulative score of the current game."""
        return self._score

    @property
    def max_tile(self) -> int:
        """Largest tile on the grid."""
        return int(self._grid.max())

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True if no move is available any more, False otherwise.
        """
        return not self.has_available_move()

    def reset(self) -> ndarray:
        """
        Start a new game: empty the grid, zero the score and place two tiles.

        Returns
        -------
        ndarray
            A copy of the new grid.
        """
        self._grid = zeros((self.size, self.size), dtype=int64)
        self._score = 0
        self.spawn_tile()
        self.spawn_tile()
        return self.grid

    def spawn_tile(self) -> tuple[int, int, int] | None:
        """
        Place a new tile on a random empty cell.

        Returns
        -------
        tuple[int, int, int] or None
            The ``(row, col, value)`` placed, or None when the grid is full. A full grid is left untouched.

        Notes
        -----
        The value is 2 with probability 0.9 and 4 otherwise.
        """
        return fill_cell(self._grid, self._random, self._config.tile_spawn_probs)

    def apply_move(self, direction: Direction | str) -> MoveResult:
        """
        Slide every line of the grid toward an edge and merge equal tiles.

        Parameters
        ----------
        direction : Direction or str
            One of ``'up'``, ``'down'``, ``'left'``, ``'right'``.

        Returns
        -------
        MoveResult
            Whether the grid changed, the score gained and the merge events in line order.

        Raises
        ------
        InvalidDirectionError
            If ``direction`` is not a known direction.

        Notes
        -----
        No tile is spawned. Call ``spawn_tile`` when ``changed`` is True.
        """
        self._grid, result = latent_state(self._grid, direction)
        self._score += result.score
        _logger.debug(
            'Move %s: changed=%s, gained=%d, merges=%d', direction, result.changed, result.score, len(result.events)
        )
        return result

    def has_available_move(self) -> bool:
        """
        Tell whether any move is still possible.

        Returns
        -------
        bool
            False only if the grid is full and no two adjacent cells, horizontally or vertically, are equal.
        """
        return not is_done(self._grid)

    def legal_moves(self) -> list[Direction]:
        """
        List the directions whose move would change the grid.

        Returns
        -------
        list[Direction]
            Legal directions.
        """
        return legal_actions(self._grid)
