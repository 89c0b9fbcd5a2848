from __future__ import annotations

import curses
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Optional

from ..exceptions import RenderError
from ..input.actions import InputAction
from ..input.mapping import InputMapper
from ..room.tiles import Cell, DEFAULT_GLYPHS
from .base import EXIT_PROMPT, WIN_MESSAGE, status_text

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..engine.game_state import CellChange

logger = logging.getLogger(__name__)

# Rows needed below the room: a blank row and the status line.
STATUS_ROWS = 2


class TerminalRenderer:
    """Curses renderer that redraws only the cells it is told about.

    The room is drawn once in full at start; afterwards each redraw
    instruction becomes a single ``addch`` at the cell's position. The status
    line sits one row below the room.
    """

    def __init__(self, stdscr: Any, glyphs: Optional[Dict[Cell, str]] = None) -> None:
        self.stdscr = stdscr
        self.glyphs = glyphs or DEFAULT_GLYPHS
        self.width = 0
        self.height = 0

    def start(self, width: int, height: int) -> None:
        rows, cols = self.stdscr.getmaxyx()
        if rows < height + STATUS_ROWS or cols < width + 1:
            raise RenderError(
                f"Terminal is {cols}x{rows}; a {width}x{height} room needs at least "
                f"{width + 1}x{height + STATUS_ROWS}"
            )
        self.width = width
        self.height = height
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        self.stdscr.keypad(True)
        self.stdscr.clear()

    def apply(self, changes: Iterable["CellChange"]) -> None:
        for change in changes:
            p = change.position
            self.stdscr.addch(p.y, p.x, self.glyphs[change.cell])
        self.stdscr.refresh()

    def _status_row(self) -> int:
        rows, _ = self.stdscr.getmaxyx()
        return min(self.height + 1, rows - 1)

    def _clear_length(self) -> int:
        _, cols = self.stdscr.getmaxyx()
        return min(cols - 1, max(0, self.width + 40))

    def show_status(self, has_key: bool, door_open: bool) -> None:
        row = self._status_row()
        width = self._clear_length()
        self.stdscr.addstr(row, 0, " " * width)
        self.stdscr.addstr(row, 0, status_text(has_key, door_open)[:width])
        self.stdscr.refresh()

    def show_win(self) -> None:
        rows, cols = self.stdscr.getmaxyx()
        row = min(self.height + 3, rows - 2)
        self.stdscr.addstr(row, 0, WIN_MESSAGE[: cols - 1])
        self.stdscr.addstr(row + 1, 0, EXIT_PROMPT[: cols - 1])
        self.stdscr.refresh()
        self.stdscr.getch()

    def close(self) -> None:
        try:
            curses.curs_set(1)
        except curses.error:
            logger.debug("Terminal cannot restore the cursor")


def read_key_name(stdscr: Any) -> str:
    """Block for one key press and return its name (``UP``, ``ESCAPE``, ``w`` ...)."""
    ch = stdscr.get_wch()
    if isinstance(ch, int):
        return curses.keyname(ch).decode("ascii", errors="replace")
    if ch == "\x1b":
        return "ESCAPE"
    return ch


def key_action_source(stdscr: Any, mapper: InputMapper) -> Callable[[], Optional[InputAction]]:
    def _read() -> Optional[InputAction]:
        return mapper.translate_key(read_key_name(stdscr))

    return _read
