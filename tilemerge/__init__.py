# -*- coding: utf-8 -*-
"""
Rules engine of a 2048-like sliding tile game, with a bounded score history.
"""

from tilemerge.config import DEFAULT_CONFIG, GameConfig
from tilemerge.core import Direction, MergeEvent, MoveResult
from tilemerge.envs import GridEngine
from tilemerge.errors import (
    InvalidArgumentError,
    InvalidDirectionError,
    InvalidGridError,
    InvalidScoreError,
    MalformedHistoryError,
    TileMergeError,
)
from tilemerge.history import JsonFileStore, MemoryStore, ScoreLedger, ScoreRecord
from tilemerge.session import GameSession, TurnOutcome

__all__ = [
    "DEFAULT_CONFIG",
    "Direction",
    "GameConfig",
    "GameSession",
    "GridEngine",
    "InvalidArgumentError",
    "InvalidDirectionError",
    "InvalidGridError",
    "InvalidScoreError",
    "JsonFileStore",
    "MalformedHistoryError",
    "MemoryStore",
    "MergeEvent",
    "MoveResult",
    "ScoreLedger",
    "ScoreRecord",
    "TileMergeError",
    "TurnOutcome",
]
