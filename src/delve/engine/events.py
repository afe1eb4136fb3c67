from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify renderers and tools."""

    PLAYER_MOVED = auto()
    MOVE_BLOCKED = auto()
    VISIBILITY_RECOMPUTED = auto()
    DISPLAY_MODE_TOGGLED = auto()
    EXIT_REQUESTED = auto()
