# -*- coding: utf-8 -*-
"""
This module provides the rules of a 2048-like game as functions over numpy boards.

It includes the merge algorithm, sliding a board in a direction with merge events, placing new tiles from an
injectable random source, detecting the end of the game, and determining which moves are legal.
"""

from .events import MergeEvent, MoveResult
from .gameboard import (
    empty_cells,
    fill_cell,
    is_done,
    is_valid_board,
    latent_state,
    merge_line,
    slide_and_merge,
)
from .gamemove import Direction, illegal_actions, legal_actions, parse_direction
from .randomness import RandomSource, ScriptedSource, numpy_source

__all__ = [
    "Direction",
    "MergeEvent",
    "MoveResult",
    "RandomSource",
    "ScriptedSource",
    "empty_cells",
    "fill_cell",
    "illegal_actions",
    "is_done",
    "is_valid_board",
    "latent_state",
    "legal_actions",
    "merge_line",
    "numpy_source",
    "parse_direction",
    "slide_and_merge",
]
