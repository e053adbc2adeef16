"""
Pydantic schemas for mazechase sessions.

Snapshots are what the presentation layer sees: frozen copies of the grid,
both entities, the score and the outcome, taken between simulation steps.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from mazechase.entities import Entity, EntityKind
from mazechase.environment import Direction, GridMapState, Tile


class OutcomeStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class SessionOutcome(BaseModel):
    """Result of a session. Terminal outcomes carry the final score."""

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus = Field(OutcomeStatus.IN_PROGRESS, description="Session state")
    final_score: Optional[int] = Field(
        None, ge=0, description="Score at the moment the session ended",
    )

    @classmethod
    def in_progress(cls) -> "SessionOutcome":
        return cls(status=OutcomeStatus.IN_PROGRESS)

    @classmethod
    def won(cls, final_score: int) -> "SessionOutcome":
        return cls(status=OutcomeStatus.WON, final_score=final_score)

    @classmethod
    def lost(cls, final_score: int) -> "SessionOutcome":
        return cls(status=OutcomeStatus.LOST, final_score=final_score)

    @property
    def is_terminal(self) -> bool:
        return self.status is not OutcomeStatus.IN_PROGRESS

    def describe(self) -> str:
        if self.status is OutcomeStatus.WON:
            return f"You Win! Final Score: {self.final_score}"
        if self.status is OutcomeStatus.LOST:
            return f"Game Over! Score: {self.final_score}"
        return "In progress"


class EntityState(BaseModel):
    """Frozen view of one entity."""

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    position: Tuple[int, int] = Field(..., description="(x, y) tile coordinates")
    direction: Direction = Field(Direction.NONE, description="Committed direction")

    @classmethod
    def from_entity(cls, entity: Entity) -> "EntityState":
        return cls(
            kind=entity.kind,
            position=(entity.position.x, entity.position.y),
            direction=entity.direction,
        )


class SessionSnapshot(BaseModel):
    """Everything a renderer needs to draw one frame."""

    model_config = ConfigDict(frozen=True)

    grid: GridMapState
    player: EntityState
    pursuer: EntityState
    score: int = Field(0, ge=0)
    outcome: SessionOutcome = Field(default_factory=SessionOutcome.in_progress)
    step: int = Field(0, ge=0, description="Number of simulation steps applied")

    @property
    def tiles(self) -> Tuple[Tuple[Tile, ...], ...]:
        return self.grid.tiles

    @property
    def remaining_collectibles(self) -> int:
        return self.grid.remaining_collectibles
