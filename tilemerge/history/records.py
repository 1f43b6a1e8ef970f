"""
Score records and their JSON representation.

A record is persisted as ``{"score": <int>, "date": <ISO-8601 string>}``. Dates are written in UTC with millisecond
precision and a ``Z`` suffix, the format produced by JavaScript's ``Date.prototype.toISOString``, so that histories
saved by a browser front end load unchanged.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone

from tilemerge.errors import MalformedHistoryError


def to_millis(moment: datetime) -> datetime:
    """
    Convert a datetime to UTC and drop sub-millisecond precision.

    Parameters
    ----------
    moment : datetime
        An aware datetime. A naive one is taken as UTC.

    Returns
    -------
    datetime
        The same instant, in UTC, truncated to the millisecond.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def format_date(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return to_millis(moment).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_date(text: str) -> datetime:
    """
    Parse an ISO-8601 timestamp, accepting a ``Z`` suffix.

    Raises
    ------
    MalformedHistoryError
        If ``text`` is not a string or not an ISO-8601 timestamp.
    """
    if not isinstance(text, str):
        raise MalformedHistoryError(f'Date must be a string, got {text!r}')
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return to_millis(datetime.fromisoformat(text))
    except ValueError as error:
        raise MalformedHistoryError(f'Invalid date: {text!r}') from error


@dataclass(frozen=True)
class ScoreRecord:
    """
    Final score of one game.

    Attributes
    ----------
    score : int
        The final score, non-negative.
    date : datetime
        When the game ended, in UTC.
    """

    score: int
    date: datetime

    def to_dict(self) -> dict:
        """Convert the record into its JSON-ready mapping."""
        return {'score': self.score, 'date': format_date(self.date)}

    @classmethod
    def from_dict(cls, payload: dict) -> 'ScoreRecord':
        """
        Build a record from its JSON mapping.

        Parameters
        ----------
        payload : dict
            A mapping holding ``score`` and ``date``.

        Returns
        -------
        ScoreRecord
            The decoded record.

        Raises
        ------
        MalformedHistoryError
            If a field is missing or has the wrong type.
        """
        if not isinstance(payload, dict):
            raise MalformedHistoryError(f'Score record must be an object, got {payload!r}')
        if 'score' not in payload or 'date' not in payload:
            raise MalformedHistoryError(f'Score record needs "score" and "date", got {payload!r}')

        score = payload['score']
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise MalformedHistoryError(f'Score must be a non-negative integer, got {score!r}')
        return cls(score=score, date=parse_date(payload['date']))


def dumps_records(records) -> str:
    """
    Serialize records into a JSON array.

    Parameters
    ----------
    records : Iterable[ScoreRecord]
        Records to serialize, in order.

    Returns
    -------
    str
        The JSON text.
    """
    return json.dumps([record.to_dict() for record in records])


def loads_records(text: str) -> list[ScoreRecord]:
    """
    Deserialize a JSON array of records.

    Parameters
    ----------
    text : str
        The JSON text.

    Returns
    -------
    list[ScoreRecord]
        The records, in order.

    Raises
    ------
    MalformedHistoryError
        If the text is not valid JSON, nests too deeply, is not an array, or holds an invalid record.
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError, RecursionError) as error:
        raise MalformedHistoryError(f'History is not valid JSON: {error}') from error

    if not isinstance(payload, list):
        raise MalformedHistoryError(f'History must be a JSON array, got {type(payload).__name__}')
    return [ScoreRecord.from_dict(item) for item in payload]
