"""
Game engine: the session state machine and the input-driven loop around it.
"""
from .events import GameEvent
from .game_state import CellChange, Direction, GameSession, MoveOutcome, MoveResult, SessionState
from .loop import GameLoop

__all__ = [
    "CellChange",
    "Direction",
    "GameEvent",
    "GameLoop",
    "GameSession",
    "MoveOutcome",
    "MoveResult",
    "SessionState",
]
