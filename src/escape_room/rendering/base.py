from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Protocol

from ..room.tiles import Cell, DEFAULT_GLYPHS

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..engine.game_state import CellChange

WIN_MESSAGE = "Congratulations. You escaped."
EXIT_PROMPT = "Press any key to exit..."


def status_text(has_key: bool, door_open: bool) -> str:
    return f"Key = {'YES' if has_key else 'NO'} | Door = {'OPEN' if door_open else 'CLOSED'} | ESC to quit"


class Renderer(Protocol):
    """What the game loop needs from a display."""

    def start(self, width: int, height: int) -> None:
        """Prepare an empty display for a width x height room."""

    def apply(self, changes: Iterable["CellChange"]) -> None:
        """Redraw the given cells."""

    def show_status(self, has_key: bool, door_open: bool) -> None:
        """Refresh the status line."""

    def show_win(self) -> None:
        """Announce the win."""

    def close(self) -> None:
        """Release display resources."""


class GlyphBuffer:
    """Character grid mirroring what is on screen.

    Renderers that repaint whole frames (plain text, Arcade) keep one of these
    and update it from redraw instructions instead of reading the game state.
    """

    def __init__(self, width: int, height: int, glyphs: Optional[Dict[Cell, str]] = None, fill: str = " ") -> None:
        self.width = width
        self.height = height
        self.glyphs = glyphs or DEFAULT_GLYPHS
        self._rows: List[List[str]] = [[fill] * width for _ in range(height)]

    def apply(self, changes: Iterable["CellChange"]) -> int:
        """Write each change into the buffer. Returns the number of cells written."""
        n = 0
        for change in changes:
            p = change.position
            if 0 <= p.x < self.width and 0 <= p.y < self.height:
                self._rows[p.y][p.x] = self.glyphs[change.cell]
                n += 1
        return n

    def lines(self) -> List[str]:
        return ["".join(row) for row in self._rows]
