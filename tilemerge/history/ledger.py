"""
Bounded score history: the most recent games and the best games.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from tilemerge.config import DEFAULT_CONFIG, GameConfig
from tilemerge.errors import InvalidArgumentError, InvalidScoreError, MalformedHistoryError
from tilemerge.history.records import ScoreRecord, dumps_records, loads_records, to_millis
from tilemerge.history.store import KeyValueStore, MemoryStore

_logger = logging.getLogger(__name__)

# ##>: Number of records kept in each list.
MAX_HISTORY = DEFAULT_CONFIG.max_history


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class ScoreLedger:
    """
    Score history made of two bounded lists.

    - ``recent`` holds the latest records, most recent first.
    - ``top`` holds the best records, highest score first. Equal scores keep their insertion order, the earlier
      record ranking higher.

    Both lists are truncated to ``max_history`` on every insertion and persisted under two fixed keys of a key-value
    store. Identical scores are not deduplicated.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        max_history: int | None = None,
        clock: Callable[[], datetime] | None = None,
        config: GameConfig | None = None,
    ):
        """
        Initialize an empty ledger. Call ``load`` to read the persisted history.

        Parameters
        ----------
        store : KeyValueStore, optional
            Where both lists are persisted (default is a fresh ``MemoryStore``).
        max_history : int, optional
            Bound of each list (default taken from the configuration, 5).
        clock : Callable[[], datetime], optional
            Returns the timestamp of new records (default is the current UTC time).
        config : GameConfig, optional
            Configuration holding the store keys and the default bound.

        Raises
        ------
        InvalidArgumentError
            If ``max_history`` is smaller than 1.
        """
        self._config = config or DEFAULT_CONFIG
        self.store = store if store is not None else MemoryStore()
        self.max_history = self._config.max_history if max_history is None else max_history
        if self.max_history < 1:
            raise InvalidArgumentError(f'History bound must be at least 1, got {self.max_history}')
        self._clock = clock or _utc_now

        self._recent: list[ScoreRecord] = []
        self._top: list[ScoreRecord] = []

    @property
    def recent_key(self) -> str:
        return self._config.recent_key

    @property
    def top_key(self) -> str:
        return self._config.top_key

    def _ranked(self, records: list[ScoreRecord]) -> list[ScoreRecord]:
        # ##: sorted() is stable, ties keep their insertion order.
        return sorted(records, key=lambda record: record.score, reverse=True)[: self.max_history]

    def _read_list(self, key: str) -> list[ScoreRecord]:
        text = self.store.get(key)
        if text is None:
            return []
        try:
            return loads_records(text)
        except MalformedHistoryError:
            _logger.warning('Malformed score history under %r, starting from an empty list', key, exc_info=True)
            return []

    def load(self) -> None:
        """
        Read both lists from the store.

        A missing or malformed list is replaced by an empty one: corrupt history degrades to no history and never
        raises. Loaded lists are truncated to the bound, and the best scores list is ranked again.
        """
        self._recent = self._read_list(self.recent_key)[: self.max_history]
        self._top = self._ranked(self._read_list(self.top_key))
        _logger.debug('Loaded %d recent and %d top scores', len(self._recent), len(self._top))

    def serialize(self) -> dict[str, str]:
        """
        Serialize both lists.

        Returns
        -------
        dict[str, str]
            The JSON text of each list, keyed by its store key.
        """
        return {self.recent_key: dumps_records(self._recent), self.top_key: dumps_records(self._top)}

    def save(self) -> None:
        """Persist both lists, the recent list first."""
        payload = self.serialize()
        self.store.set(self.recent_key, payload[self.recent_key])
        self.store.set(self.top_key, payload[self.top_key])

    def record(self, score: int) -> ScoreRecord:
        """
        Record the final score of a game and persist the history.

        Parameters
        ----------
        score : int
            The final score, a non-negative integer.

        Returns
        -------
        ScoreRecord
            The new record, timestamped by the ledger clock.

        Raises
        ------
        InvalidScoreError
            If ``score`` is negative or not an integer.
        """
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise InvalidScoreError(f'Score must be a non-negative integer, got {score!r}')

        record = ScoreRecord(score=score, date=to_millis(self._clock()))

        self._recent = [record, *self._recent][: self.max_history]
        self._top = self._ranked([*self._top, record])
        self.save()

        _logger.info('Recorded score %d', score)
        return record

    def clear(self) -> None:
        """Forget every record and persist the empty history."""
        self._recent = []
        self._top = []
        self.save()

    def recent_list(self) -> tuple[ScoreRecord, ...]:
        """
        Get the most recent records.

        Returns
        -------
        tuple[ScoreRecord, ...]
            A snapshot, most recent first.
        """
        return tuple(self._recent)

    def top_list(self) -> tuple[ScoreRecord, ...]:
        """
        Get the best records.

        Returns
        -------
        tuple[ScoreRecord, ...]
            A snapshot, highest score first.
        """
        return tuple(self._top)
