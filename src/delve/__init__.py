"""
Delve package root.

Procedural rooms-and-tunnels dungeon generation plus a per-turn visibility
field. Presentation (Arcade window, ASCII dumps) lives in ``delve.app`` and
``delve.render`` and only reads from the core modules.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
