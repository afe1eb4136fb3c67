from __future__ import annotations

import logging
from typing import Optional, Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for headless installs
    arcade = None

from ..config import DisplayConfig, Settings
from ..engine.events import GameEvent
from ..engine.intents import Intent
from ..engine.session import GameSession
from ..map.grid import TileGrid
from ..render.palette import color_for

logger = logging.getLogger(__name__)


def window_tiles(display: DisplayConfig, grid: TileGrid) -> Tuple[int, int]:
    """Window size in tiles: the configured screen, grown to fit the whole map."""
    return max(display.screen_width, grid.width), max(display.screen_height, grid.height)


def intent_for_key(symbol: int, modifiers: int = 0) -> Optional[Intent]:
    """Translate an Arcade key press into a session intent."""
    if arcade is None:
        raise RuntimeError("Arcade package is not installed")
    key = arcade.key
    if symbol == key.ENTER and modifiers & key.MOD_ALT:
        return Intent.TOGGLE_FULLSCREEN
    if symbol == key.ESCAPE:
        return Intent.EXIT
    return {
        key.UP: Intent.MOVE_UP,
        key.DOWN: Intent.MOVE_DOWN,
        key.LEFT: Intent.MOVE_LEFT,
        key.RIGHT: Intent.MOVE_RIGHT,
    }.get(symbol)


class DungeonWindow:
    """Arcade window that draws a GameSession and forwards key presses to it.

    Tests focus on the session layer; this class only exists when Arcade is
    installed.
    """

    def __init__(self, session: GameSession):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.session = session
        display = session.settings.display
        self.tile_px = display.tile_px
        cols, self.rows = window_tiles(display, session.grid)
        width = cols * self.tile_px
        height = self.rows * self.tile_px
        self._window = arcade.Window(
            width,
            height,
            title="delve",
            fullscreen=session.fullscreen,
            update_rate=1 / display.fps,
        )
        self._window.on_draw = self.on_draw
        self._window.on_key_press = self.on_key_press
        session.add_listener(self._on_event)
        logger.info("Arcade window initialized (%dx%d)", width, height)

    def _on_event(self, event: GameEvent, session: GameSession) -> None:
        if event is GameEvent.DISPLAY_MODE_TOGGLED:
            self._window.set_fullscreen(session.fullscreen)
        elif event is GameEvent.EXIT_REQUESTED:
            self._window.close()

    def run(self) -> None:
        arcade.run()

    def _screen_y(self, y: int) -> int:
        # grid rows grow downwards, Arcade's y axis grows upwards
        return (self.rows - 1 - y) * self.tile_px

    def on_draw(self) -> None:
        self._window.clear()
        self.session.refresh_visibility()
        grid = self.session.grid
        field = self.session.visibility
        size = self.tile_px
        for y in range(grid.height):
            bottom = self._screen_y(y)
            for x in range(grid.width):
                color = color_for(field.is_visible(x, y), grid.tile_at(x, y))
                left = x * size
                arcade.draw_lrbt_rectangle_filled(left, left + size, bottom, bottom + size, color)
        for entity in self.session.visible_entities():
            arcade.draw_text(
                entity.char,
                entity.x * size,
                self._screen_y(entity.y),
                entity.color,
                font_size=size * 0.75,
            )

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        intent = intent_for_key(symbol, modifiers)
        if intent is not None:
            self.session.handle(intent)


def run(settings: Optional[Settings] = None) -> None:  # pragma: no cover - manual usage
    """Launch an interactive window."""
    if arcade is None:
        raise RuntimeError("Arcade is not installed. Install the 'gui' extra to run the app.")
    session = GameSession(settings)
    window = DungeonWindow(session)
    window.run()
