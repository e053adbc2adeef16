"""Tile grid for the maze (walls, collectibles, wrap rows).

The wall topology is fixed when the map is built; only collectible state
changes afterwards. Template characters are decoded once in
``GridMap.from_template`` and never seen again at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, NamedTuple, Sequence, Tuple

if TYPE_CHECKING:
    from .schemas import GridMapState


# =============================
# Module-level Exceptions
# =============================

class MazeChaseError(Exception):
    """Base class for all maze-chase errors."""


class OutOfBoundsError(MazeChaseError, IndexError):
    """Raised when a position outside the grid is queried."""

    def __init__(self, position: Tuple[int, int], *, cols: int, rows: int) -> None:
        self.position = position
        self.cols = cols
        self.rows = rows
        super().__init__(
            f"Position {tuple(position)} is outside the {cols}x{rows} grid"
        )


class NotCollectibleError(MazeChaseError, ValueError):
    """Raised by a strict ``collect`` on a tile that holds no collectible."""

    def __init__(self, position: Tuple[int, int], tile: "Tile") -> None:
        self.position = position
        self.tile = tile
        super().__init__(f"Tile at {tuple(position)} is {tile.value}, not collectible")


class InvalidTemplateError(MazeChaseError, ValueError):
    """Raised when a level template cannot produce a playable map."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        message = (
            f"Invalid level template: {reason}\n\n"
            "Remediation tips:\n"
            "  - Every row must have the same number of characters\n"
            "  - Spawn cells must be inside the grid and not on a wall\n"
            "  - At least one open cell must be reachable from the player spawn"
        )
        super().__init__(message)


# =============================
# Core value types
# =============================

class Tile(Enum):
    WALL = "wall"
    EMPTY = "empty"
    COLLECTIBLE = "collectible"


class Direction(Enum):
    """Unit step on the grid. ``y`` grows downward (row index)."""

    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.dx != 0


# Order in which cardinal directions are enumerated when choosing at random.
CARDINAL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.LEFT,
    Direction.DOWN,
    Direction.UP,
)


class Position(NamedTuple):
    x: int
    y: int

    def offset(self, direction: Direction) -> "Position":
        """Neighbouring position one step along ``direction`` (may be off-grid)."""
        return Position(self.x + direction.dx, self.y + direction.dy)


# =============================
# GridMap
# =============================

class GridMap:
    """Rectangular tile grid owned by a single game session.

    Built from a wall mask plus the two spawn cells. Open tiles reachable
    from the player spawn hold a collectible; unreachable pockets stay empty
    so a level can always be cleared.
    """

    def __init__(
        self,
        walls: Sequence[Sequence[bool]],
        player_start: Tuple[int, int],
        pursuer_start: Tuple[int, int],
    ):
        # Local import: helpers depends on this module for the value types.
        from .helpers import flood_fill_reachable

        if not walls or not walls[0]:
            raise InvalidTemplateError("template needs at least one row and one column")
        width = len(walls[0])
        if any(len(row) != width for row in walls):
            raise InvalidTemplateError("rows have unequal lengths")

        self._rows = len(walls)
        self._cols = width

        player = Position(*player_start)
        pursuer = Position(*pursuer_start)
        for label, spawn in (("player", player), ("pursuer", pursuer)):
            if not self._contains(spawn):
                raise InvalidTemplateError(f"{label} spawn {tuple(spawn)} is outside the grid")
            if walls[spawn.y][spawn.x]:
                raise InvalidTemplateError(f"{label} spawn {tuple(spawn)} is on a wall")

        reachable = flood_fill_reachable(walls, player)

        self._tiles: List[List[Tile]] = []
        for y, row in enumerate(walls):
            tiles_row: List[Tile] = []
            for x, is_wall in enumerate(row):
                if is_wall:
                    tiles_row.append(Tile.WALL)
                elif (x, y) in reachable:
                    tiles_row.append(Tile.COLLECTIBLE)
                else:
                    tiles_row.append(Tile.EMPTY)
            self._tiles.append(tiles_row)

        # Spawn cells never start with a collectible.
        self._tiles[player.y][player.x] = Tile.EMPTY
        self._tiles[pursuer.y][pursuer.x] = Tile.EMPTY

        self._remaining = sum(
            1 for row in self._tiles for tile in row if tile is Tile.COLLECTIBLE
        )
        if self._remaining == 0:
            raise InvalidTemplateError(
                f"no collectible cell is reachable from the player spawn {tuple(player)}"
            )

    @classmethod
    def from_template(
        cls,
        rows: Sequence[str],
        player_start: Tuple[int, int],
        pursuer_start: Tuple[int, int],
        *,
        wall_char: str = "1",
    ) -> "GridMap":
        """Build a map from text rows where ``wall_char`` marks a wall."""
        from .helpers import parse_template

        walls = parse_template(rows, wall_char=wall_char)
        return cls(walls, player_start, pursuer_start)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def _contains(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self._cols and 0 <= y < self._rows

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        return self._contains(pos)

    def tile_at(self, pos: Tuple[int, int]) -> Tile:
        """Return the tile at ``pos``. Raises ``OutOfBoundsError`` off the grid."""
        if not self._contains(pos):
            raise OutOfBoundsError(pos, cols=self._cols, rows=self._rows)
        x, y = pos
        return self._tiles[y][x]

    def is_wall(self, pos: Tuple[int, int]) -> bool:
        return self.tile_at(pos) is Tile.WALL

    def row_allows_wrap(self, y: int) -> bool:
        """True when both edge tiles of row ``y`` are open."""
        if not 0 <= y < self._rows:
            return False
        row = self._tiles[y]
        return row[0] is not Tile.WALL and row[self._cols - 1] is not Tile.WALL

    def collect(self, pos: Tuple[int, int], *, strict: bool = False) -> bool:
        """Clear the collectible at ``pos``.

        Returns ``True`` when a collectible was removed. Any other tile is
        left alone and ``False`` is returned, unless ``strict`` is set, in
        which case ``NotCollectibleError`` is raised.
        """
        tile = self.tile_at(pos)
        if tile is not Tile.COLLECTIBLE:
            if strict:
                raise NotCollectibleError(pos, tile)
            return False
        x, y = pos
        self._tiles[y][x] = Tile.EMPTY
        self._remaining -= 1
        return True

    def remaining_collectibles(self) -> int:
        return self._remaining

    def tiles(self) -> Tuple[Tuple[Tile, ...], ...]:
        """Read-only copy of the tile rows."""
        return tuple(tuple(row) for row in self._tiles)

    def to_state(self) -> "GridMapState":
        from .schemas import GridMapState

        return GridMapState(
            width=self._cols,
            height=self._rows,
            tiles=self.tiles(),
            remaining_collectibles=self._remaining,
        )
