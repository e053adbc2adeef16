"""Direction-selection policies for the pursuer.

The pursuer is intentionally memoryless: it does not look for the player.
Most steps it keeps going; occasionally it picks a new open direction at
random. A blocked move cancels its momentum until the next retarget.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .config import Config
from .entities import Entity
from .environment import Direction, GridMap, open_neighbor_directions
from .randomness import RandomSource


class PursuerPolicy(ABC):
    """Chooses the pursuer's direction once per step, before it moves."""

    @abstractmethod
    def choose_direction(self, pursuer: Entity, grid: GridMap, rng: RandomSource) -> Direction:
        """Return the direction the pursuer should attempt this step."""


class RandomRetargetPolicy(PursuerPolicy):
    """Keep the current direction, retargeting at random with a small chance.

    One ``rng.random()`` sample is drawn per step. A sample strictly below
    ``retarget_chance`` picks uniformly among the open neighbouring cells;
    otherwise, or when no neighbour is open, the current direction is kept.

    The open-neighbour check ignores the wrap tunnel unless
    ``allow_wrap_candidates`` is set, so by default a pursuer on an edge
    tile never chooses to teleport (it still wraps if already heading out).
    """

    def __init__(
        self,
        retarget_chance: float | None = None,
        *,
        allow_wrap_candidates: bool = False,
    ):
        chance = Config.RETARGET_CHANCE if retarget_chance is None else retarget_chance
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"retarget_chance must be within [0, 1], got {chance}")
        self.retarget_chance = chance
        self.allow_wrap_candidates = allow_wrap_candidates

    def choose_direction(self, pursuer: Entity, grid: GridMap, rng: RandomSource) -> Direction:
        if rng.random() >= self.retarget_chance:
            return pursuer.direction

        candidates = open_neighbor_directions(
            pursuer.position, grid, include_wrap=self.allow_wrap_candidates
        )
        if not candidates:
            return pursuer.direction
        return candidates[rng.randrange(len(candidates))]
