"""
Turn sequencing for one player: move, spawn, check for the end, record the score.
"""

import logging
from typing import NamedTuple

from numpy import ndarray

from tilemerge.core.events import MergeEvent
from tilemerge.core.gamemove import Direction
from tilemerge.envs.engine import GridEngine
from tilemerge.history.ledger import ScoreLedger

_logger = logging.getLogger(__name__)


class TurnOutcome(NamedTuple):
    """
    What a front end needs to display after one turn.

    Attributes
    ----------
    changed : bool
        Whether the move changed the grid. Nothing else happened when False.
    grid : ndarray
        Snapshot of the grid after the move and the spawn.
    score : int
        Cumulative score of the game.
    events : tuple[MergeEvent, ...]
        Merges of this move, in line order, for animations.
    finished : bool
        Whether the game is over.
    """

    changed: bool
    grid: ndarray
    score: int
    events: tuple[MergeEvent, ...]
    finished: bool


class GameSession:
    """
    Drive a ``GridEngine`` and a ``ScoreLedger`` through complete turns.

    Each call to ``play`` is one atomic turn: apply the move, spawn a tile if the grid changed, then check whether a
    move is still available. When the game ends, its score is recorded once in the ledger.

    Parameters
    ----------
    engine : GridEngine, optional
        The engine to drive (default is a new 4x4 engine).
    ledger : ScoreLedger, optional
        Where final scores are recorded (default is an in-memory ledger). It is loaded on construction.
    """

    def __init__(self, engine: GridEngine | None = None, ledger: ScoreLedger | None = None):
        self.engine = engine or GridEngine()
        self.ledger = ledger or ScoreLedger()
        self.ledger.load()
        self._recorded = False

    @property
    def finished(self) -> bool:
        return self.engine.is_finished

    def new_game(self) -> ndarray:
        """Reset the engine and return the first grid."""
        self._recorded = False
        return self.engine.reset()

    def play(self, direction: Direction | str) -> TurnOutcome:
        """
        Play one turn.

        Parameters
        ----------
        direction : Direction or str
            The swipe direction.

        Returns
        -------
        TurnOutcome
            The grid, score, merge events and end-of-game flag after the turn.

        Raises
        ------
        InvalidDirectionError
            If ``direction`` is not a known direction.
        """
        result = self.engine.apply_move(direction)
        if result.changed:
            self.engine.spawn_tile()

        finished = self.engine.is_finished
        if finished and not self._recorded:
            # ##: Record once, even if the caller keeps swiping on a finished grid.
            self.ledger.record(self.engine.score)
            self._recorded = True
            _logger.info('Game over with score %d, max tile %d', self.engine.score, self.engine.max_tile)

        return TurnOutcome(
            changed=result.changed,
            grid=self.engine.grid,
            score=self.engine.score,
            events=result.events,
            finished=finished,
        )
