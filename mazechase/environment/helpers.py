"""Utilities for maze grids: template parsing, reachability and movement."""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple

from .grid import (
    CARDINAL_DIRECTIONS,
    Direction,
    GridMap,
    InvalidTemplateError,
    Position,
)


def parse_template(rows: Sequence[str], *, wall_char: str = "1") -> List[List[bool]]:
    """Decode text rows into a wall mask (``True`` = wall).

    Every character other than ``wall_char`` is an open cell. Rows must be
    non-empty and share one length.
    """
    if len(wall_char) != 1:
        raise InvalidTemplateError(f"wall_char must be a single character, got {wall_char!r}")
    if not rows:
        raise InvalidTemplateError("template has no rows")

    width = len(rows[0])
    if width == 0:
        raise InvalidTemplateError("template rows are empty")

    walls: List[List[bool]] = []
    for index, row in enumerate(rows):
        if len(row) != width:
            raise InvalidTemplateError(
                f"row {index} has {len(row)} columns, expected {width}"
            )
        walls.append([char == wall_char for char in row])
    return walls


def flood_fill_reachable(
    walls: Sequence[Sequence[bool]], start: Tuple[int, int]
) -> Set[Tuple[int, int]]:
    """Return every open ``(x, y)`` cell reachable from ``start``.

    Uses an explicit stack (depth-first). Besides the four orthogonal
    neighbours, a row whose first and last cells are both open links
    column 0 and column ``cols - 1`` in both directions (the wrap tunnel).
    Vertical wrap is never considered.
    """
    rows = len(walls)
    cols = len(walls[0]) if rows else 0

    def wraps(y: int) -> bool:
        return not walls[y][0] and not walls[y][cols - 1]

    reachable: Set[Tuple[int, int]] = set()
    stack: List[Tuple[int, int]] = [tuple(start)]

    while stack:
        x, y = stack.pop()
        # Skip out-of-bounds, walls and cells already claimed
        if not (0 <= x < cols and 0 <= y < rows):
            continue
        if (x, y) in reachable or walls[y][x]:
            continue
        reachable.add((x, y))

        stack.extend([(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)])

        if wraps(y):
            if x == 0:
                stack.append((cols - 1, y))
            if x == cols - 1:
                stack.append((0, y))

    return reachable


def resolve_move(
    pos: Tuple[int, int], direction: Direction, grid: GridMap
) -> Tuple[Position, Direction]:
    """Compute where an entity ends up after one step.

    Returns ``(new_position, new_direction)``:
    - ``Direction.NONE`` leaves the entity where it is.
    - Leaving the grid horizontally teleports to the opposite edge column
      when ``grid.row_allows_wrap(y)``; the direction is kept.
    - Moving onto an open in-bounds cell keeps the direction.
    - Anything else (wall, off-grid, disallowed wrap) leaves the entity in
      place and cancels its momentum with ``Direction.NONE``.
    """
    current = Position(*pos)
    if direction is Direction.NONE:
        return current, Direction.NONE

    candidate = current.offset(direction)

    if direction.is_horizontal and not 0 <= candidate.x < grid.cols:
        if grid.row_allows_wrap(current.y):
            wrapped_x = grid.cols - 1 if candidate.x < 0 else 0
            return Position(wrapped_x, current.y), direction
        # Disallowed wrap falls through to the bounds check below and stops.

    if grid.in_bounds(candidate) and not grid.is_wall(candidate):
        return candidate, direction

    return current, Direction.NONE


def open_neighbor_directions(
    pos: Tuple[int, int], grid: GridMap, *, include_wrap: bool = False
) -> List[Direction]:
    """List cardinal directions whose target cell is in bounds and not a wall.

    Directions are returned in ``CARDINAL_DIRECTIONS`` order. With
    ``include_wrap`` a horizontal direction that would teleport through a
    wrap row also counts as open.
    """
    current = Position(*pos)
    options: List[Direction] = []
    for direction in CARDINAL_DIRECTIONS:
        target = current.offset(direction)
        if grid.in_bounds(target):
            if not grid.is_wall(target):
                options.append(direction)
        elif include_wrap and direction.is_horizontal and grid.row_allows_wrap(current.y):
            options.append(direction)
    return options
