from enum import Enum, auto
from typing import Dict, Mapping, Optional


class Cell(Enum):
    """Contents of a single room cell.

    - WALL: border obstacle
    - FLOOR: empty interior
    - KEY: uncollected key
    - DOOR_CLOSED: locked door on the border, blocks movement
    - DOOR_OPEN: unlocked door, walkable
    - PLAYER: player standing on floor
    - PLAYER_ON_OPEN_DOOR: player standing in the open doorway
    """

    WALL = auto()
    FLOOR = auto()
    KEY = auto()
    DOOR_CLOSED = auto()
    DOOR_OPEN = auto()
    PLAYER = auto()
    PLAYER_ON_OPEN_DOOR = auto()

    @property
    def blocks_movement(self) -> bool:
        return self in {Cell.WALL, Cell.DOOR_CLOSED}


DEFAULT_GLYPHS: Dict[Cell, str] = {
    Cell.WALL: "#",
    Cell.FLOOR: ".",
    Cell.KEY: "?",
    Cell.DOOR_CLOSED: ";",
    Cell.DOOR_OPEN: ":",
    Cell.PLAYER: "!",
    Cell.PLAYER_ON_OPEN_DOOR: "!",
}


def glyph_table(overrides: Optional[Mapping[str, str]] = None) -> Dict[Cell, str]:
    """Return the glyph for every cell, applying overrides keyed by cell name.

    Names are case-insensitive (``"wall"`` or ``"WALL"``); the override for
    ``player`` also applies to the player standing on the open door unless
    that cell is overridden itself. Unknown names and values that are not a
    single character are ignored.
    """
    table = dict(DEFAULT_GLYPHS)
    if not overrides:
        return table
    normalized = {str(k).strip().upper(): v for k, v in overrides.items()}
    for cell in Cell:
        value = normalized.get(cell.name)
        if isinstance(value, str) and len(value) == 1:
            table[cell] = value
    if "PLAYER_ON_OPEN_DOOR" not in normalized:
        table[Cell.PLAYER_ON_OPEN_DOOR] = table[Cell.PLAYER]
    return table
