"""Text rendering of session snapshots for terminals and debug output."""

from __future__ import annotations

from typing import Dict, List, Optional

from .environment import Tile
from .schemas import SessionSnapshot


_DEFAULT_SYMBOLS: Dict[str, str] = {
    "wall": "██",
    "empty": "  ",
    "collectible": "· ",
    "player": "C ",
    "pursuer": "M ",
}


def render_ascii(
    snapshot: SessionSnapshot,
    *,
    symbols: Optional[Dict[str, str]] = None,
    show_status: bool = True,
) -> str:
    """Render the whole maze, both entities and a status line.

    ``symbols`` overrides entries of the default mapping (keys: ``wall``,
    ``empty``, ``collectible``, ``player``, ``pursuer``). When both entities
    share a cell the pursuer is drawn.
    """
    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    tile_symbols = {
        Tile.WALL: mapping["wall"],
        Tile.EMPTY: mapping["empty"],
        Tile.COLLECTIBLE: mapping["collectible"],
    }

    lines: List[str] = []
    for y, row in enumerate(snapshot.tiles):
        cells: List[str] = []
        for x, tile in enumerate(row):
            if (x, y) == snapshot.pursuer.position:
                cells.append(mapping["pursuer"])
            elif (x, y) == snapshot.player.position:
                cells.append(mapping["player"])
            else:
                cells.append(tile_symbols[tile])
        lines.append("".join(cells))

    if show_status:
        lines.append(
            f"Score: {snapshot.score} | Left: {snapshot.remaining_collectibles} | "
            f"Step: {snapshot.step} | {snapshot.outcome.describe()}"
        )

    return "\n".join(lines)
