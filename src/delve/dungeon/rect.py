from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned room bounds.

    ``(x1, y1)`` is the top-left corner and ``(x2, y2)`` the bottom-right one.
    The outline itself stays wall; only the cells strictly inside are carved.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def create(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def center(self) -> Tuple[int, int]:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Touching edges count, so neighbouring rooms never share a wall.
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def contains_interior(self, x: int, y: int) -> bool:
        return self.x1 < x < self.x2 and self.y1 < y < self.y2
