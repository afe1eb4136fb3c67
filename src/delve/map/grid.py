from __future__ import annotations

import hashlib
import logging
from collections import deque
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .tiles import Tile

if TYPE_CHECKING:
    from ..dungeon.rect import Rect

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class TileGrid:
    """
    Fixed-size tile map shared by generation, movement and visibility.

    - Tiles are stored row-major: ``tiles[y][x]``.
    - Every cell starts as a wall; the dungeon generator carves floor into it.
    - Once ``freeze()`` is called the grid is read-only.

    Coordinate system is 0-based: x in [0, width), y in [0, height).
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TileGrid width/height must be > 0")
        self.width = width
        self.height = height
        wall = Tile.wall()
        self._tiles: List[List[Tile]] = [[wall for _ in range(width)] for _ in range(height)]
        self._frozen = False
        logger.debug("TileGrid created: %dx%d", width, height)

    # ---- Bounds / query --------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._tiles[y][x]

    def is_blocked(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._tiles[y][x].blocked

    def blocks_sight(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._tiles[y][x].block_sight

    def is_transparent(self, x: int, y: int) -> bool:
        return not self.blocks_sight(x, y)

    def neighbors_4(self, x: int, y: int) -> Iterator[Coord]:
        # Ordered for deterministic traversal
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def floor_count(self) -> int:
        return sum(1 for row in self._tiles for tile in row if not tile.blocked)

    # ---- Build phase -----------------------------------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "TileGrid":
        self._frozen = True
        return self

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        if self._frozen:
            raise RuntimeError("TileGrid is frozen; terrain cannot change after generation")
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y})")
        self._tiles[y][x] = tile

    def carve_room(self, room: "Rect") -> None:
        """Carve the interior of ``room``, leaving its outline as wall."""
        empty = Tile.empty()
        for y in range(room.y1 + 1, room.y2):
            for x in range(room.x1 + 1, room.x2):
                self.set_tile(x, y, empty)

    def carve_h_tunnel(self, x1: int, x2: int, y: int) -> None:
        empty = Tile.empty()
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self.set_tile(x, y, empty)

    def carve_v_tunnel(self, y1: int, y2: int, x: int) -> None:
        empty = Tile.empty()
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self.set_tile(x, y, empty)

    # ---- Search ----------------------------------------------------------
    def bfs_distance_map(self, start: Coord) -> List[List[Optional[int]]]:
        """
        Compute BFS step distances from start to every reachable passable tile.
        Returns 2D list ``[y][x]`` of distances, or None for unreachable cells.
        """
        dist: List[List[Optional[int]]] = [[None for _ in range(self.width)] for _ in range(self.height)]
        sx, sy = start
        if self.is_blocked(sx, sy):
            return dist

        dq = deque([start])
        dist[sy][sx] = 0
        while dq:
            x, y = dq.popleft()
            d = dist[y][x]
            for nx, ny in self.neighbors_4(x, y):
                if dist[ny][nx] is not None or self._tiles[ny][nx].blocked:
                    continue
                dist[ny][nx] = d + 1
                dq.append((nx, ny))
        return dist

    def reachable_from(self, start: Coord) -> Set[Coord]:
        dist = self.bfs_distance_map(start)
        return {
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if dist[y][x] is not None
        }

    # ---- ASCII I/O -------------------------------------------------------
    @classmethod
    def from_ascii(cls, rows: Sequence[str], wall_chars: Iterable[str] = ("#",)) -> "TileGrid":
        """
        Build a grid from ASCII rows for tests/tools.
        Any char in wall_chars becomes ``Tile.wall()``, everything else ``Tile.empty()``.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        grid = cls(width, len(rows))
        wall_set = set(wall_chars)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch not in wall_set:
                    grid.set_tile(x, y, Tile.empty())
        return grid

    def to_ascii(self) -> List[str]:
        return ["".join(tile.glyph for tile in row) for row in self._tiles]

    def signature(self) -> str:
        """Deterministic digest of the terrain, handy for comparing runs."""
        raw = "\n".join(self.to_ascii()).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "building"
        return f"TileGrid({self.width}x{self.height}, {state})"
