from .fov import bresenham_line, compute_visible, has_line_of_sight, within_radius
from .visibility import TileVisibility, VisibilityField

__all__ = [
    "bresenham_line",
    "compute_visible",
    "has_line_of_sight",
    "within_radius",
    "TileVisibility",
    "VisibilityField",
]
