from __future__ import annotations

import logging
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ..map.grid import TileGrid
from .fov import compute_visible

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class TileVisibility(str, Enum):
    UNSEEN = "unseen"         # never seen
    EXPLORED = "explored"     # seen before but not currently visible
    VISIBLE = "visible"       # inside the current field of view


class VisibilityField:
    """
    Tracks what the observer can see from turn to turn.

    Responsibilities:
    - Recomputes the visible set when the observer's position changes and
      skips the work on turns where it stays put.
    - Remembers every tile that has been visible at least once.
    - Answers per-tile queries (visible / explored / unseen) for renderers.
    """

    def __init__(self, grid: TileGrid, radius: int, *, light_walls: bool = True) -> None:
        self.grid = grid
        self.radius = radius
        self.light_walls = light_walls
        self._visible: FrozenSet[Coord] = frozenset()
        self._explored: List[List[bool]] = [[False for _ in range(grid.width)] for _ in range(grid.height)]
        self._previous: Optional[Coord] = None
        self.recompute_count = 0
        logger.debug(
            "VisibilityField initialized: %dx%d radius=%d light_walls=%s",
            grid.width,
            grid.height,
            radius,
            light_walls,
        )

    @property
    def visible(self) -> FrozenSet[Coord]:
        return self._visible

    @property
    def previous_position(self) -> Optional[Coord]:
        return self._previous

    def needs_recompute(self, position: Coord) -> bool:
        return position != self._previous

    def update(self, position: Coord) -> bool:
        """
        Bring the field up to date for an observer at ``position``.

        Returns True if the field was recomputed, False if the observer had not
        moved since the previous update.
        """
        if not self.needs_recompute(position):
            return False
        x, y = position
        self._visible = compute_visible(self.grid, x, y, self.radius, light_walls=self.light_walls)
        for vx, vy in self._visible:
            self._explored[vy][vx] = True
        self._previous = position
        self.recompute_count += 1
        logger.debug("Visibility recomputed at %s; %d visible tiles", position, len(self._visible))
        return True

    def invalidate(self) -> None:
        """Force the next ``update`` to recompute."""
        self._previous = None

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible

    def is_explored(self, x: int, y: int) -> bool:
        if not self.grid.in_bounds(x, y):
            return False
        return self._explored[y][x]

    def explored_count(self) -> int:
        return sum(row.count(True) for row in self._explored)

    def state(self, x: int, y: int) -> TileVisibility:
        if not self.grid.in_bounds(x, y):
            raise IndexError("Tile out of bounds")
        if (x, y) in self._visible:
            return TileVisibility.VISIBLE
        if self._explored[y][x]:
            return TileVisibility.EXPLORED
        return TileVisibility.UNSEEN

    def reset_memory(self) -> None:
        """Forget explored tiles. The current field of view is kept."""
        for row in self._explored:
            for x in range(len(row)):
                row[x] = False
        for vx, vy in self._visible:
            self._explored[vy][vx] = True
        logger.debug("VisibilityField memory reset")
