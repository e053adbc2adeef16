"""Pydantic schemas for the maze grid.

``GridMapState`` is the serializable, read-only view of a ``GridMap``
handed to renderers inside session snapshots.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .grid import Tile


class GridMapState(BaseModel):
    """Frozen copy of the tile rows at one point in time."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1, description="Number of columns")
    height: int = Field(..., ge=1, description="Number of rows")
    tiles: Tuple[Tuple[Tile, ...], ...] = Field(
        ..., description="Row-major tiles: tiles[y][x]",
    )
    remaining_collectibles: int = Field(0, ge=0)

    def tile_at(self, x: int, y: int) -> Tile:
        return self.tiles[y][x]

    def count(self, tile: Tile) -> int:
        return sum(1 for row in self.tiles for cell in row if cell is tile)
