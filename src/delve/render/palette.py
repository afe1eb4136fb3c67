from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from ..map.tiles import Tile

Color = Tuple[int, int, int]


class TileShade(str, Enum):
    DARK_WALL = "dark_wall"
    DARK_GROUND = "dark_ground"
    LIGHT_WALL = "light_wall"
    LIGHT_GROUND = "light_ground"


PALETTE: Dict[TileShade, Color] = {
    TileShade.DARK_WALL: (0, 0, 100),
    TileShade.DARK_GROUND: (50, 50, 150),
    TileShade.LIGHT_WALL: (130, 110, 50),
    TileShade.LIGHT_GROUND: (200, 180, 50),
}


def shade_for(visible: bool, tile: Tile) -> TileShade:
    if visible:
        return TileShade.LIGHT_WALL if tile.block_sight else TileShade.LIGHT_GROUND
    return TileShade.DARK_WALL if tile.block_sight else TileShade.DARK_GROUND


def color_for(visible: bool, tile: Tile) -> Color:
    return PALETTE[shade_for(visible, tile)]
