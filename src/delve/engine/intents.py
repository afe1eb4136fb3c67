from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Intent(str, Enum):
    """One player decision per turn, as reported by the input layer."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE_FULLSCREEN = "toggle_fullscreen"
    EXIT = "exit"

    @property
    def delta(self) -> Optional[Tuple[int, int]]:
        return _DELTAS.get(self)

    @property
    def is_move(self) -> bool:
        return self in _DELTAS


_DELTAS = {
    Intent.MOVE_UP: (0, -1),
    Intent.MOVE_DOWN: (0, 1),
    Intent.MOVE_LEFT: (-1, 0),
    Intent.MOVE_RIGHT: (1, 0),
}
