from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config import Settings
from ..dungeon.generator import DungeonGenerator, GenerationResult
from ..entities import YELLOW, Entity
from ..fov.visibility import VisibilityField
from ..map.grid import TileGrid
from ..rng import DUNGEON_LAYOUT, RNGManager
from .events import GameEvent
from .intents import Intent

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Holds one run: the generated dungeon, its entities and the visibility field.

    The presentation layer feeds it one :class:`Intent` per turn through
    ``handle`` and calls ``refresh_visibility`` before drawing. Visibility is
    recomputed only on turns where the player actually moved.
    """

    def __init__(self, settings: Optional[Settings] = None, rngm: Optional[RNGManager] = None) -> None:
        self.settings = settings or Settings()
        self.rngm = rngm or RNGManager(self.settings.seed)
        self._listeners: List[Listener] = []

        generator = DungeonGenerator(self.settings.dungeon, self.rngm.context_rng(DUNGEON_LAYOUT))
        self.result: GenerationResult = generator.generate()

        spawn_x, spawn_y = self.result.spawn
        self.player = Entity(spawn_x, spawn_y, "@", name="player")
        self.entities: List[Entity] = [self.player]
        if len(self.result.rooms) > 1:
            npc_x, npc_y = self.result.rooms[-1].center()
            self.entities.append(Entity(npc_x, npc_y, "@", YELLOW, name="npc"))

        self.visibility = VisibilityField(
            self.grid,
            self.settings.fov.torch_radius,
            light_walls=self.settings.fov.light_walls,
        )
        self.fullscreen = self.settings.display.fullscreen
        self.running = True
        self.turn = 0
        logger.info(
            "Session started (seed=%s): %d rooms, player at %s",
            self.rngm.seed_hex,
            len(self.result.rooms),
            self.player.position,
        )

    @property
    def grid(self) -> TileGrid:
        return self.result.grid

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to session events (movement, visibility, display mode, exit)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Listener errored on %s", event)

    def refresh_visibility(self) -> bool:
        """Recompute the field of view if the player moved since the last refresh."""
        recomputed = self.visibility.update(self.player.position)
        if recomputed:
            self._emit(GameEvent.VISIBILITY_RECOMPUTED)
        return recomputed

    def move_player(self, dx: int, dy: int) -> bool:
        moved = self.player.move_by(dx, dy, self.grid)
        self._emit(GameEvent.PLAYER_MOVED if moved else GameEvent.MOVE_BLOCKED)
        return moved

    def handle(self, intent: Intent) -> bool:
        """Apply one intent. Returns False once the session should end."""
        if not self.running:
            return False
        self.turn += 1
        delta = intent.delta
        if delta is not None:
            self.move_player(*delta)
        elif intent is Intent.TOGGLE_FULLSCREEN:
            self.fullscreen = not self.fullscreen
            logger.debug("Fullscreen toggled -> %s", self.fullscreen)
            self._emit(GameEvent.DISPLAY_MODE_TOGGLED)
        elif intent is Intent.EXIT:
            self.running = False
            logger.info("Exit requested after %d turns", self.turn)
            self._emit(GameEvent.EXIT_REQUESTED)
        return self.running

    def visible_entities(self) -> List[Entity]:
        return [e for e in self.entities if self.visibility.is_visible(e.x, e.y)]
