from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tile:
    """A single map cell.

    ``blocked`` stops movement, ``block_sight`` stops vision. The two presets
    below are the only ways tiles are built, so both flags always agree.
    """

    blocked: bool
    block_sight: bool

    @classmethod
    def empty(cls) -> "Tile":
        return _EMPTY

    @classmethod
    def wall(cls) -> "Tile":
        return _WALL

    @property
    def is_wall(self) -> bool:
        return self.blocked and self.block_sight

    @property
    def is_floor(self) -> bool:
        return not self.blocked and not self.block_sight

    @property
    def glyph(self) -> str:
        return "#" if self.block_sight else "."


_EMPTY = Tile(blocked=False, block_sight=False)
_WALL = Tile(blocked=True, block_sight=True)
