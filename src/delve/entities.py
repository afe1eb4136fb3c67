from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from .map.grid import TileGrid

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
YELLOW: Color = (255, 255, 0)


@dataclass
class Entity:
    """Anything standing on the map: the player, an NPC.

    ``char`` and ``color`` only matter to renderers.
    """

    x: int
    y: int
    char: str = "@"
    color: Color = WHITE
    name: str = "entity"

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def move_by(self, dx: int, dy: int, grid: TileGrid) -> bool:
        """Step by (dx, dy) unless the destination is blocked.

        Returns True if the move happened. Bumping into a wall leaves the
        entity where it is and is not an error.
        """
        return move_by(self, dx, dy, grid)


def move_by(entity: Entity, dx: int, dy: int, grid: TileGrid) -> bool:
    nx = entity.x + dx
    ny = entity.y + dy
    if grid.is_blocked(nx, ny):
        logger.debug("%s blocked moving by (%d, %d) from (%d,%d)", entity.name, dx, dy, entity.x, entity.y)
        return False
    entity.x = nx
    entity.y = ny
    logger.debug("%s moved to (%d,%d)", entity.name, nx, ny)
    return True
