from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..fov.visibility import TileVisibility

if TYPE_CHECKING:
    from ..engine.session import GameSession

# glyphs for (wall, floor) per visibility state
_GLYPHS = {
    TileVisibility.VISIBLE: ("#", "."),
    TileVisibility.EXPLORED: ("+", ","),
    TileVisibility.UNSEEN: (" ", " "),
}


def render_ascii(session: "GameSession", *, reveal: bool = False) -> List[str]:
    """Render the session as text rows.

    Only currently visible entities are drawn. With ``reveal`` the whole map is
    drawn as if it were visible, which is useful when inspecting generator output.
    """
    grid = session.grid
    field = session.visibility
    rows: List[List[str]] = []
    for y in range(grid.height):
        row: List[str] = []
        for x in range(grid.width):
            state = TileVisibility.VISIBLE if reveal else field.state(x, y)
            wall, floor = _GLYPHS[state]
            row.append(wall if grid.blocks_sight(x, y) else floor)
        rows.append(row)

    for entity in session.entities:
        if reveal or field.is_visible(entity.x, entity.y):
            rows[entity.y][entity.x] = entity.char
    return ["".join(row) for row in rows]
