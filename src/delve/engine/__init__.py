from .events import GameEvent
from .intents import Intent
from .session import GameSession

__all__ = ["GameEvent", "Intent", "GameSession"]
