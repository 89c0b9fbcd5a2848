from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .actions import InputAction

logger = logging.getLogger(__name__)

DEFAULT_BINDINGS: Dict[str, InputAction] = {
    "UP": InputAction.MOVE_UP,
    "W": InputAction.MOVE_UP,
    "DOWN": InputAction.MOVE_DOWN,
    "S": InputAction.MOVE_DOWN,
    "LEFT": InputAction.MOVE_LEFT,
    "A": InputAction.MOVE_LEFT,
    "RIGHT": InputAction.MOVE_RIGHT,
    "D": InputAction.MOVE_RIGHT,
    "ESCAPE": InputAction.QUIT,
    "Q": InputAction.QUIT,
}

# Names a front end may report that mean the same key as a bound name:
# curses reports arrows as KEY_UP etc., and headless players type "esc".
DEFAULT_ALIASES: Dict[str, str] = {
    "ESC": "ESCAPE",
    "KEY_UP": "UP",
    "KEY_DOWN": "DOWN",
    "KEY_LEFT": "LEFT",
    "KEY_RIGHT": "RIGHT",
}


class InputMapper:
    """Maps key names reported by a front end to game actions.

    Names are case-insensitive and surrounding whitespace is ignored, so a
    typed ``" w\\n"`` line and an Arcade ``W`` key are the same key. Aliases
    are resolved before bindings. Keys with no binding translate to None and
    the game loop ignores them.

    Example usage:
        mapper = InputMapper.default()
        mapper.translate_key("w")       # -> InputAction.MOVE_UP
        mapper.translate_key("KEY_UP")  # -> InputAction.MOVE_UP (alias)
        mapper.translate_key("x")       # -> None (ignored)
    """

    def __init__(
        self,
        bindings: Mapping[str, InputAction],
        aliases: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.bindings: Dict[str, InputAction] = {k.upper(): v for k, v in bindings.items()}
        self.aliases: Dict[str, str] = {k.upper(): v.upper() for k, v in (aliases or {}).items()}
        dangling = sorted(v for v in self.aliases.values() if v not in self.bindings)
        if dangling:
            logger.warning("Aliases point at unbound keys: %s", ", ".join(dangling))

    def translate_key(self, name: Optional[str]) -> Optional[InputAction]:
        """Return the action bound to ``name`` or None if the key is ignored."""
        if name is None:
            return None
        key = name.strip().upper()
        key = self.aliases.get(key, key)
        return self.bindings.get(key)

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and WASD move; Escape and Q quit."""
        return cls(DEFAULT_BINDINGS, DEFAULT_ALIASES)


__all__ = ["InputMapper", "DEFAULT_BINDINGS", "DEFAULT_ALIASES"]
