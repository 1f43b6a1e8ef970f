# -*- coding: utf-8 -*-
"""
Score history of finished games.

This module provides the `ScoreLedger` class keeping the most recent and the best scores, the `ScoreRecord` it stores,
and the key-value stores it persists into.
"""

from .ledger import MAX_HISTORY, ScoreLedger
from .records import ScoreRecord
from .store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = ["MAX_HISTORY", "JsonFileStore", "KeyValueStore", "MemoryStore", "ScoreLedger", "ScoreRecord"]
