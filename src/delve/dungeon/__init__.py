from .rect import Rect
from .generator import DungeonGenerator, GenerationResult, generate

__all__ = ["Rect", "DungeonGenerator", "GenerationResult", "generate"]
