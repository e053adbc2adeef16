"""Runtime entities (player and pursuer) and input key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .environment import Direction, Position


class EntityKind(str, Enum):
    PLAYER = "player"
    PURSUER = "pursuer"


@dataclass
class Entity:
    """Mutable entity state owned by a ``GameSession``.

    ``direction`` is the committed direction attempted on the next step.
    ``desired_direction`` holds the latest input intent for the player until
    a step consumes it; it stays ``None`` for the pursuer.
    """

    kind: EntityKind
    position: Position
    direction: Direction = Direction.NONE
    desired_direction: Optional[Direction] = None

    def consume_intent(self) -> None:
        """Promote a pending intent to the committed direction."""
        if self.desired_direction is not None:
            self.direction = self.desired_direction
            self.desired_direction = None


# Key names accepted from input collaborators. Lookup is case-insensitive.
KEY_BINDINGS: Dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def parse_direction(value: Union[Direction, str, None]) -> Optional[Direction]:
    """Map an input value to a movement direction.

    Returns ``None`` for anything that is not one of the four cardinal
    directions (including ``Direction.NONE`` and unknown keys).
    """
    if isinstance(value, Direction):
        return None if value is Direction.NONE else value
    if isinstance(value, str):
        return KEY_BINDINGS.get(value.strip().lower())
    return None
