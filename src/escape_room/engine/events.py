from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify UI or systems."""

    PLAYER_MOVED = auto()
    KEY_COLLECTED = auto()
    DOOR_OPENED = auto()
    WON = auto()
    QUIT = auto()
