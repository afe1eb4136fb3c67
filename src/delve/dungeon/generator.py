from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import DungeonConfig
from ..map.grid import TileGrid
from .rect import Rect

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class GenerationResult:
    """Finished dungeon: a frozen grid, the spawn point and the rooms that were placed."""

    grid: TileGrid
    spawn: Coord
    rooms: Tuple[Rect, ...]


class DungeonGenerator:
    """Rooms + tunnels generator.

    Tries ``max_rooms`` random rectangles, keeps those that do not intersect an
    earlier room, and links each kept room to the previous one with an L-shaped
    tunnel. Every room is therefore reachable from the first one, whose centre
    is the spawn point.
    """

    def __init__(self, config: Optional[DungeonConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or DungeonConfig()
        self.rng = rng or random.Random()

    def generate(self) -> GenerationResult:
        cfg = self.config
        grid = TileGrid(cfg.map_width, cfg.map_height)

        rooms: List[Rect] = []
        spawn: Optional[Coord] = None
        for attempt in range(cfg.max_rooms):
            new_room = self._sample_room()
            if any(new_room.intersects(other) for other in rooms):
                logger.debug("Attempt %d: room %s rejected (overlap)", attempt, new_room)
                continue

            grid.carve_room(new_room)
            new_x, new_y = new_room.center()
            if not rooms:
                spawn = (new_x, new_y)
            else:
                self._connect(grid, rooms[-1].center(), (new_x, new_y))
            rooms.append(new_room)
            logger.debug("Attempt %d: room %s placed, centre (%d,%d)", attempt, new_room, new_x, new_y)

        if spawn is None:
            raise RuntimeError("Generated map missing spawn point")

        grid.freeze()
        logger.info(
            "Generated %dx%d dungeon: %d/%d rooms placed, spawn at %s",
            cfg.map_width,
            cfg.map_height,
            len(rooms),
            cfg.max_rooms,
            spawn,
        )
        return GenerationResult(grid=grid, spawn=spawn, rooms=tuple(rooms))

    def _sample_room(self) -> Rect:
        cfg = self.config
        w = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
        h = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
        # x2 = x + w stays <= width - 1, so carving never reaches the border
        x = self.rng.randrange(0, cfg.map_width - w)
        y = self.rng.randrange(0, cfg.map_height - h)
        return Rect.create(x, y, w, h)

    def _connect(self, grid: TileGrid, prev: Coord, new: Coord) -> None:
        prev_x, prev_y = prev
        new_x, new_y = new
        if self.rng.random() < 0.5:
            # horizontal first, then vertical
            grid.carve_h_tunnel(prev_x, new_x, prev_y)
            grid.carve_v_tunnel(prev_y, new_y, new_x)
        else:
            grid.carve_v_tunnel(prev_y, new_y, prev_x)
            grid.carve_h_tunnel(prev_x, new_x, new_y)


def generate(
    width: int,
    height: int,
    max_rooms: int,
    min_size: int,
    max_size: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """Generate a dungeon from bare parameters.

    Parameters are validated through :class:`DungeonConfig`, so inconsistent
    bounds fail with ``ValueError`` before any carving starts. Pass either an
    explicit ``rng`` or a ``seed`` for reproducible output.
    """
    config = DungeonConfig(
        map_width=width,
        map_height=height,
        max_rooms=max_rooms,
        room_min_size=min_size,
        room_max_size=max_size,
    )
    if rng is None:
        rng = random.Random(seed)
    return DungeonGenerator(config, rng).generate()
