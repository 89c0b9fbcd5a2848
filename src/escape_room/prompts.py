"""
Line-based setup prompts shown before the game starts.

Both functions take ``input_fn``/``output_fn`` so they can be driven by tests
or by a script on stdin. EOFError and KeyboardInterrupt propagate to the
caller, which treats them as "the player left".
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from .config import LIMITS, RoomLimits
from .room.tiles import Cell, DEFAULT_GLYPHS

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[..., None]


def instructions_text(glyphs: Optional[Dict[Cell, str]] = None) -> str:
    g = glyphs or DEFAULT_GLYPHS
    return "\n".join(
        [
            "Escape Room",
            "",
            "Goal: collect the key, open the door, and leave the room.",
            "",
            "Controls:",
            "  Arrow keys / WASD -> move (one step per key press)",
            "  ESC / Q           -> quit",
            "",
            "Legend:",
            f"  {g[Cell.PLAYER]} = player",
            f"  {g[Cell.KEY]} = key",
            f"  {g[Cell.DOOR_CLOSED]} = closed door",
            f"  {g[Cell.DOOR_OPEN]} = open door",
            f"  {g[Cell.WALL]} = wall",
            f"  {g[Cell.FLOOR]} = floor",
            "",
        ]
    )


def show_instructions(
    glyphs: Optional[Dict[Cell, str]] = None,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> None:
    output_fn(instructions_text(glyphs))
    input_fn("Press Enter to continue...")


def read_integer(prompt: str, input_fn: InputFn = input, output_fn: OutputFn = print) -> int:
    """Ask until the answer parses as an integer."""
    while True:
        answer = input_fn(prompt)
        try:
            return int(answer.strip())
        except ValueError:
            output_fn("Please enter a valid integer.")


def read_room_size(
    limits: RoomLimits = LIMITS,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> Tuple[int, int]:
    """Ask for width and height until both describe a playable room."""
    while True:
        output_fn(
            f"Enter room size (width {limits.min_width}-{limits.max_width}, "
            f"height {limits.min_height}-{limits.max_height})\n"
        )
        width = read_integer("Width: ", input_fn, output_fn)
        height = read_integer("Height: ", input_fn, output_fn)

        if not limits.in_range(width, height):
            logger.debug("Rejected room size %dx%d: out of range", width, height)
            output_fn("\nInvalid input: out of allowed range.")
            continue
        if not limits.interior_ok(width, height):
            logger.debug("Rejected room size %dx%d: interior too small", width, height)
            output_fn("\nInvalid input: interior area is too small.")
            continue
        return width, height
