from __future__ import annotations

from enum import Enum, auto


class InputAction(Enum):
    """Logical input actions consumed by the game loop.

    Front ends translate their own key codes into these; any key that maps to
    no action is ignored and does not consume a game step.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    QUIT = auto()


__all__ = ["InputAction"]
