"""Grid environment for mazechase: tiles, reachability and movement."""

from .grid import (
    CARDINAL_DIRECTIONS,
    Direction,
    GridMap,
    InvalidTemplateError,
    MazeChaseError,
    NotCollectibleError,
    OutOfBoundsError,
    Position,
    Tile,
)
from .schemas import GridMapState
from .helpers import (
    flood_fill_reachable,
    open_neighbor_directions,
    parse_template,
    resolve_move,
)

__all__ = [
    "CARDINAL_DIRECTIONS",
    "Direction",
    "GridMap",
    "InvalidTemplateError",
    "MazeChaseError",
    "NotCollectibleError",
    "OutOfBoundsError",
    "Position",
    "Tile",
    "GridMapState",
    "flood_fill_reachable",
    "open_neighbor_directions",
    "parse_template",
    "resolve_move",
]
