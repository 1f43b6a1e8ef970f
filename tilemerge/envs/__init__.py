# -*- coding: utf-8 -*-
"""
Stateful game engine.

This module provides the `GridEngine` class, which owns the grid and score of a game and exposes moves, tile spawning
and the end-of-game check.
"""

from .engine import GridEngine

__all__ = ["GridEngine"]
