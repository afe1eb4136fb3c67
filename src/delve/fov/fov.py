from __future__ import annotations

import logging
from typing import FrozenSet, List, Set, Tuple

from ..map.grid import TileGrid

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def within_radius(ox: int, oy: int, x: int, y: int, radius: int) -> bool:
    """Euclidean torch radius: the lit area is a disc around the observer."""
    dx = x - ox
    dy = y - oy
    return dx * dx + dy * dy <= radius * radius


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """
    Bresenham's line algorithm. Returns the list of points from (x0, y0) to (x1, y1) inclusive.
    """
    points: List[Coord] = []

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return points


def has_line_of_sight(grid: TileGrid, x0: int, y0: int, x1: int, y1: int) -> bool:
    """
    True if no sight-blocking tile lies strictly between (x0, y0) and (x1, y1).

    The endpoints themselves are not checked: the observer may stand anywhere and
    an opaque target can still be seen (that is what lets walls light up).
    """
    line = bresenham_line(x0, y0, x1, y1)
    for x, y in line[1:-1]:
        if not grid.is_transparent(x, y):
            logger.debug("LoS blocked at (%d,%d) between (%d,%d)->(%d,%d)", x, y, x0, y0, x1, y1)
            return False
    return True


def compute_visible(
    grid: TileGrid,
    observer_x: int,
    observer_y: int,
    radius: int,
    *,
    light_walls: bool = True,
) -> FrozenSet[Coord]:
    """
    Compute the set of tiles visible from the observer.

    A tile is visible when it lies within the Euclidean ``radius`` and the
    Bresenham line from the observer reaches it without crossing a
    sight-blocking tile. With ``light_walls`` False, sight-blocking tiles are
    never reported even when the line to them is clear. The observer's own tile
    is always visible; ``radius <= 0`` yields only that tile.

    The result depends only on the arguments, so repeated calls agree.
    """
    visible: Set[Coord] = {(observer_x, observer_y)}
    if radius <= 0:
        return frozenset(visible)

    min_x = max(0, observer_x - radius)
    max_x = min(grid.width - 1, observer_x + radius)
    min_y = max(0, observer_y - radius)
    max_y = min(grid.height - 1, observer_y + radius)

    for y in range(min_y, max_y + 1):
        for x in range(min_x, max_x + 1):
            if x == observer_x and y == observer_y:
                continue
            if not within_radius(observer_x, observer_y, x, y, radius):
                continue
            if not light_walls and grid.blocks_sight(x, y):
                continue
            if has_line_of_sight(grid, observer_x, observer_y, x, y):
                visible.add((x, y))

    logger.debug("FOV from (%d,%d) radius %d -> %d visible tiles", observer_x, observer_y, radius, len(visible))
    return frozenset(visible)
