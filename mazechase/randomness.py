"""Injectable randomness for pursuer decisions.

Sessions never reach for the ``random`` module directly. They take any
object satisfying ``RandomSource``; ``random.Random`` qualifies, and
``ScriptedRandom`` replays fixed values for tests and replays.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Protocol


class RandomSource(Protocol):
    """Capability needed by pursuer policies."""

    def random(self) -> float:
        """Uniform float in ``[0, 1)``."""
        ...

    def randrange(self, stop: int) -> int:
        """Uniform integer in ``[0, stop)``."""
        ...


class ScriptedRandom:
    """Deterministic ``RandomSource`` that replays queued values.

    ``floats`` feed ``random()`` and ``ints`` feed ``randrange()``. When a
    queue runs dry the last value is repeated. ``int_bounds`` records every
    ``stop`` passed to ``randrange`` so callers can inspect candidate counts.
    """

    def __init__(self, floats: Iterable[float] = (0.5,), ints: Iterable[int] = (0,)):
        self._floats: List[float] = list(floats)
        self._ints: List[int] = list(ints)
        if not self._floats or not self._ints:
            raise ValueError("ScriptedRandom needs at least one float and one int")
        self._float_index = 0
        self._int_index = 0
        self.int_bounds: List[int] = []

    def random(self) -> float:
        value = self._floats[min(self._float_index, len(self._floats) - 1)]
        self._float_index += 1
        return value

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise ValueError("randrange() stop must be positive")
        self.int_bounds.append(stop)
        value = self._ints[min(self._int_index, len(self._ints) - 1)]
        self._int_index += 1
        if not 0 <= value < stop:
            raise ValueError(f"scripted int {value} outside [0, {stop})")
        return value


def build_rng(seed: Optional[int] = None) -> random.Random:
    """Return a private ``random.Random``; seeded when ``seed`` is given."""
    return random.Random(seed)
