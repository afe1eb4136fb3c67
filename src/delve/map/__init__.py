from .tiles import Tile
from .grid import TileGrid

__all__ = ["Tile", "TileGrid"]
