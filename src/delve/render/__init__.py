from .palette import TileShade, color_for, shade_for
from .ascii import render_ascii

__all__ = ["TileShade", "color_for", "shade_for", "render_ascii"]
