"""
Configuration for the tile merge game and its score history.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration shared by the grid engine and the score ledger.

    Attributes are grouped by the component that reads them. ``tile_spawn_probs`` is copied into a read-only mapping,
    so a configuration cannot change once built.
    """

    # ##>: Grid parameters.
    size: int = 4  # Side of the square grid
    tile_spawn_probs: Mapping[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})

    # ##>: Score history parameters.
    max_history: int = 5  # Bound of each history list
    recent_key: str = 'recentScores'  # Store key of the most recent list
    top_key: str = 'topScores'  # Store key of the best scores list

    def __post_init__(self):
        object.__setattr__(self, 'tile_spawn_probs', MappingProxyType(dict(self.tile_spawn_probs)))


DEFAULT_CONFIG = GameConfig()
