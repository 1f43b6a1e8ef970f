"""
Random sources used to place new tiles.

A random source is any zero-argument callable returning a uniform float in ``[0, 1)``. The engine draws from it
exactly twice per spawned tile: once for the cell, once for the tile value.
"""

from collections.abc import Callable, Iterable

from numpy.random import PCG64DXSM, default_rng

RandomSource = Callable[[], float]


def numpy_source(seed: int | None = None) -> RandomSource:
    """
    Build a random source backed by a numpy generator.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility. When omitted, the generator is seeded from OS entropy.

    Returns
    -------
    RandomSource
        The bound ``random`` method of a fresh PCG64DXSM generator.
    """
    generator = default_rng(PCG64DXSM(seed))
    return generator.random


class ScriptedSource:
    """
    Random source replaying a fixed sequence of draws.

    Useful to make tile placement fully deterministic, for instance to replay a recorded game.

    Parameters
    ----------
    draws : Iterable[float]
        Values to return, in order. Each must lie in ``[0, 1)``.
    """

    def __init__(self, draws: Iterable[float]):
        self._draws = list(draws)
        self._position = 0
        for draw in self._draws:
            if not 0.0 <= draw < 1.0:
                raise ValueError(f'Random draws must lie in [0, 1), got {draw}')

    @property
    def remaining(self) -> int:
        """Number of draws not consumed yet."""
        return len(self._draws) - self._position

    def __call__(self) -> float:
        if self._position >= len(self._draws):
            raise IndexError('Scripted random source exhausted')
        draw = self._draws[self._position]
        self._position += 1
        return draw
