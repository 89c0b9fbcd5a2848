from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Optional, TextIO

from ..input.actions import InputAction
from ..input.mapping import InputMapper
from ..room.tiles import Cell
from .base import WIN_MESSAGE, GlyphBuffer, status_text

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..engine.game_state import CellChange

logger = logging.getLogger(__name__)


class TextRenderer:
    """Headless renderer that prints the room as plain text.

    The buffer is updated from redraw instructions; a frame (room plus status
    line) is printed each time the status is refreshed, i.e. once at start
    and once after every accepted move.
    """

    def __init__(self, out: Optional[TextIO] = None, glyphs: Optional[Dict[Cell, str]] = None) -> None:
        self.out = out or sys.stdout
        self.glyphs = glyphs
        self.buffer: Optional[GlyphBuffer] = None
        self.frames: int = 0

    def start(self, width: int, height: int) -> None:
        self.buffer = GlyphBuffer(width, height, self.glyphs)

    def apply(self, changes: Iterable["CellChange"]) -> None:
        if self.buffer is None:
            raise RuntimeError("TextRenderer.apply() called before start()")
        self.buffer.apply(changes)

    def show_status(self, has_key: bool, door_open: bool) -> None:
        if self.buffer is None:
            raise RuntimeError("TextRenderer.show_status() called before start()")
        for line in self.buffer.lines():
            print(line, file=self.out)
        print(status_text(has_key, door_open), file=self.out)
        print(file=self.out)
        self.frames += 1

    def show_win(self) -> None:
        print(WIN_MESSAGE, file=self.out)

    def close(self) -> None:
        self.out.flush()


def line_action_source(stream: TextIO, mapper: InputMapper) -> Callable[[], Optional[InputAction]]:
    """Read one key name per line (``up``, ``w``, ``esc`` ...) from ``stream``.

    End of input counts as quitting so scripted sessions always terminate.
    """

    def _read() -> Optional[InputAction]:
        line = stream.readline()
        if line == "":
            logger.info("End of input; quitting")
            return InputAction.QUIT
        action = mapper.translate_key(line)
        if action is None:
            logger.debug("Ignoring input %r", line.strip())
        return action

    return _read


__all__ = ["TextRenderer", "line_action_source"]
