from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import arcade

from ..input.mapping import InputMapper
from ..room.tiles import Cell
from .base import EXIT_PROMPT, WIN_MESSAGE, GlyphBuffer, status_text

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..engine.game_state import CellChange
    from ..engine.loop import GameLoop

logger = logging.getLogger(__name__)

FONT = ("Courier New", "Courier", "DejaVu Sans Mono", "monospace")
MARGIN_PX = 16

# Arcade key symbols translated to the names the InputMapper understands.
KEY_NAMES: Dict[int, str] = {
    arcade.key.UP: "UP",
    arcade.key.DOWN: "DOWN",
    arcade.key.LEFT: "LEFT",
    arcade.key.RIGHT: "RIGHT",
    arcade.key.ESCAPE: "ESCAPE",
    arcade.key.W: "W",
    arcade.key.A: "A",
    arcade.key.S: "S",
    arcade.key.D: "D",
    arcade.key.Q: "Q",
}


class ArcadeRenderer:
    """Keeps one Arcade text object per room row, refreshed from redraw instructions."""

    def __init__(self, tile_px: int = 24, glyphs: Optional[Dict[Cell, str]] = None) -> None:
        self.tile_px = tile_px
        self.glyphs = glyphs
        self.buffer: Optional[GlyphBuffer] = None
        self.rows: List[arcade.Text] = []
        self.status: Optional[arcade.Text] = None
        self.banner: List[arcade.Text] = []
        self.won: bool = False

    @property
    def font_size(self) -> float:
        return self.tile_px * 0.75

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        w = int(width * self.tile_px * 0.6) + 2 * MARGIN_PX
        h = (height + 4) * self.tile_px + 2 * MARGIN_PX
        return max(w, 480), h

    def _row_y(self, row: int, window_height: int) -> int:
        return window_height - MARGIN_PX - (row + 1) * self.tile_px

    def start(self, width: int, height: int) -> None:
        self.buffer = GlyphBuffer(width, height, self.glyphs)
        _, window_height = self.window_size(width, height)
        self.rows = [
            arcade.Text("", MARGIN_PX, self._row_y(y, window_height), arcade.color.WHITE, self.font_size, font_name=FONT)
            for y in range(height)
        ]
        self.status = arcade.Text(
            "", MARGIN_PX, self._row_y(height + 1, window_height), arcade.color.LIGHT_GRAY, self.font_size * 0.8, font_name=FONT
        )
        self.banner = [
            arcade.Text(WIN_MESSAGE, MARGIN_PX, self._row_y(height + 2, window_height), arcade.color.GOLD, self.font_size, font_name=FONT),
            arcade.Text(EXIT_PROMPT, MARGIN_PX, self._row_y(height + 3, window_height), arcade.color.LIGHT_GRAY, self.font_size * 0.8, font_name=FONT),
        ]

    def apply(self, changes: Iterable["CellChange"]) -> None:
        if self.buffer is None:
            raise RuntimeError("ArcadeRenderer.apply() called before start()")
        touched = set()
        for change in changes:
            if self.buffer.apply([change]):
                touched.add(change.position.y)
        lines = self.buffer.lines()
        for y in touched:
            self.rows[y].text = lines[y]

    def show_status(self, has_key: bool, door_open: bool) -> None:
        if self.status is not None:
            self.status.text = status_text(has_key, door_open)

    def show_win(self) -> None:
        self.won = True

    def close(self) -> None:
        logger.debug("Arcade renderer closed")

    def draw(self) -> None:
        for text in self.rows:
            text.draw()
        if self.status is not None:
            self.status.draw()
        if self.won:
            for text in self.banner:
                text.draw()


class EscapeRoomWindow(arcade.Window):
    """Arcade window feeding key presses into the game loop one at a time."""

    def __init__(self, loop: "GameLoop", renderer: ArcadeRenderer, mapper: InputMapper) -> None:
        width, height = renderer.window_size(loop.session.width, loop.session.height)
        super().__init__(width, height, title="Escape Room")
        self.background_color = arcade.color.BLACK
        self.loop = loop
        self.renderer = renderer
        self.mapper = mapper
        self.loop.start()

    def on_draw(self):
        self.clear()
        self.renderer.draw()

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.loop.running:
            # Session already over (win banner showing); any key closes.
            self.close()
            return
        action = self.mapper.translate_key(KEY_NAMES.get(symbol))
        if not self.loop.handle(action) and not self.renderer.won:
            self.close()
