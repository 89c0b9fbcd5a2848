from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Optional, TextIO

from .engine.game_state import GameSession
from .engine.loop import GameLoop
from .exceptions import EscapeRoomError
from .input.mapping import InputMapper
from .prompts import read_room_size, show_instructions
from .rendering.text import TextRenderer, line_action_source
from .room.generator import RoomGenerator
from .seed import make_rng
from .settings import Settings

logger = logging.getLogger(__name__)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception as exc:
        logger.debug("Arcade unavailable: %s", exc)
        return False


def new_session(settings: Settings, width: int, height: int) -> GameSession:
    """Generate a room of the given size and open a session on it."""
    layout = RoomGenerator(make_rng(settings.seed)).generate(width, height)
    return GameSession(layout)


def run_terminal(session: GameSession, settings: Settings, mapper: Optional[InputMapper] = None) -> int:
    """Play in the current terminal with curses.

    Raises:
        RenderError: If the terminal is too small for the room.
    """
    import curses

    from .rendering.terminal import TerminalRenderer, key_action_source

    mapper = mapper or InputMapper.default()
    glyphs = settings.glyph_table()
    # Make a lone ESC register quickly instead of waiting for an escape sequence
    os.environ.setdefault("ESCDELAY", "25")

    def _play(stdscr):
        renderer = TerminalRenderer(stdscr, glyphs)
        try:
            return GameLoop(session, renderer, key_action_source(stdscr, mapper)).run()
        finally:
            renderer.close()

    state = curses.wrapper(_play)
    logger.info("Terminal session ended: %s", state.name)
    return 0


def run_headless(
    session: GameSession,
    settings: Settings,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    mapper: Optional[InputMapper] = None,
) -> int:
    """Play with one key name per line on ``stdin`` and plain-text frames on ``stdout``."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    mapper = mapper or InputMapper.default()
    renderer = TextRenderer(stdout, settings.glyph_table())
    try:
        state = GameLoop(session, renderer, line_action_source(stdin, mapper)).run()
    finally:
        renderer.close()
    print(f"Session ended: {state.name}", file=stdout)
    return 0


def run_gui(session: GameSession, settings: Settings, mapper: Optional[InputMapper] = None) -> int:
    """Play in an Arcade window if available, otherwise fall back to the terminal."""
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to terminal mode")
        return run_terminal(session, settings, mapper)

    import arcade

    from .rendering.arcade_window import ArcadeRenderer, EscapeRoomWindow

    mapper = mapper or InputMapper.default()
    renderer = ArcadeRenderer(tile_px=settings.tile_px, glyphs=settings.glyph_table())
    loop = GameLoop(session, renderer)
    window = EscapeRoomWindow(loop, renderer, mapper)
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished (state=%s)", session.state.name)
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        renderer.close()
        try:
            window.close()
        except Exception:
            logger.debug("Arcade window already closed")


def _stream_input(stream: TextIO, out: TextIO) -> Callable[[str], str]:
    """input()-like reader over an arbitrary stream."""

    def _input(prompt: str) -> str:
        print(prompt, end="", file=out)
        line = stream.readline()
        if line == "":
            raise EOFError
        return line

    return _input


def play(settings: Settings, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """Run a whole session: instructions, size prompts, then the chosen front end.

    Returns:
        Process exit code: 0 on win or quit, 1 on a game error, 130 on Ctrl+C.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    input_fn = _stream_input(stdin, stdout)
    logger.debug("Settings: %s", settings.as_dict())

    def output_fn(*args) -> None:
        print(*args, file=stdout)

    try:
        if settings.show_instructions and settings.frontend != "headless":
            show_instructions(settings.glyph_table(), input_fn, output_fn)
        size = settings.room_size or read_room_size(input_fn=input_fn, output_fn=output_fn)
    except (EOFError, KeyboardInterrupt):
        output_fn("\nGoodbye!")
        return 0

    try:
        session = new_session(settings, *size)
        if settings.frontend == "headless":
            return run_headless(session, settings, stdin, stdout)
        if settings.frontend == "gui":
            return run_gui(session, settings)
        return run_terminal(session, settings)
    except EscapeRoomError as exc:
        logger.error("Game aborted: %s", exc)
        output_fn(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        output_fn("Interrupted by user")
        return 130
