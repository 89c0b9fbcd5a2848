from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Sequence, Tuple

from ..room.generator import RoomLayout
from ..room.map import Point
from ..room.tiles import Cell
from .events import GameEvent

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class MoveOutcome(Enum):
    REJECTED = auto()
    MOVED = auto()
    WON = auto()


class SessionState(Enum):
    PLAYING = auto()
    WON = auto()
    QUIT = auto()


@dataclass(frozen=True)
class CellChange:
    """A cell whose displayed content must be redrawn."""

    position: Point
    cell: Cell


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single move request.

    Attributes:
        outcome: REJECTED, MOVED or WON
        changes: Cells to redraw, in the order they changed (empty unless MOVED)
        has_key: Whether the player holds the key after the move
        door_open: Whether the door is open after the move
    """

    outcome: MoveOutcome
    changes: Tuple[CellChange, ...]
    has_key: bool
    door_open: bool

    @property
    def moved(self) -> bool:
        return self.outcome is MoveOutcome.MOVED

    @property
    def won(self) -> bool:
        return self.outcome is MoveOutcome.WON


Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Holds the state of one play-through: grid, door, player and key.

    The session is the only owner of the grid and the entity positions.
    Every accepted move returns the list of cells that changed so a renderer
    can redraw just those cells. Rejected moves leave everything untouched.
    """

    def __init__(self, layout: RoomLayout) -> None:
        self._listeners: List[Listener] = []
        self.map = layout.map
        self.door = layout.door
        self.player: Point = layout.player
        self.key: Point = layout.key
        self.has_key: bool = False
        self.state: SessionState = SessionState.PLAYING

        self.door.is_open = False
        self.map[self.door.position] = Cell.DOOR_CLOSED
        logger.info(
            "Session started in %dx%d room; player at (%d,%d)",
            self.width, self.height, self.player.x, self.player.y,
        )

    @property
    def width(self) -> int:
        return self.map.width

    @property
    def height(self) -> int:
        return self.map.height

    @property
    def door_open(self) -> bool:
        return self.door.is_open

    @property
    def is_over(self) -> bool:
        return self.state is not SessionState.PLAYING

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events (movement, key, door, win, quit)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

    def full_redraw(self) -> List[CellChange]:
        """Every cell of the room, for the initial draw."""
        return [CellChange(p, c) for p, c in self.map.cells()]

    def _result(self, outcome: MoveOutcome, changes: Sequence[CellChange] = ()) -> MoveResult:
        return MoveResult(
            outcome=outcome,
            changes=tuple(changes),
            has_key=self.has_key,
            door_open=self.door.is_open,
        )

    def move(self, direction: Direction) -> MoveResult:
        """Attempt to move the player one cell in ``direction``.

        Stepping off the grid wins only from the open door cell. Walls and the
        closed door reject the move. Stepping onto the key collects it and
        opens the door before the player moves in.
        """
        if self.is_over:
            return self._result(MoveOutcome.REJECTED)

        dx, dy = direction.delta
        target = self.player.offset(dx, dy)

        if not self.map.in_bounds(target.x, target.y):
            # Only the player's position is checked here, not the direction.
            if self.door.is_open and self.player == self.door.position:
                self.state = SessionState.WON
                logger.info("Player escaped through the door at (%d,%d)", self.player.x, self.player.y)
                self._emit(GameEvent.WON)
                return self._result(MoveOutcome.WON)
            return self._result(MoveOutcome.REJECTED)

        if self.map[target].blocks_movement:
            return self._result(MoveOutcome.REJECTED)

        changes: List[CellChange] = []
        if self.map[target] is Cell.KEY:
            changes.extend(self._collect_key())
        changes.extend(self._relocate(target))
        self._emit(GameEvent.PLAYER_MOVED)
        return self._result(MoveOutcome.MOVED, changes)

    def quit(self) -> None:
        """End the session. Has no effect once the session is already over."""
        if self.is_over:
            return
        self.state = SessionState.QUIT
        logger.info("Player quit at (%d,%d)", self.player.x, self.player.y)
        self._emit(GameEvent.QUIT)

    def _collect_key(self) -> List[CellChange]:
        changes: List[CellChange] = []
        self.has_key = True
        logger.info("Key collected at (%d,%d)", self.key.x, self.key.y)
        self._emit(GameEvent.KEY_COLLECTED)
        if self.door.open():
            self.map[self.door.position] = Cell.DOOR_OPEN
            changes.append(CellChange(self.door.position, Cell.DOOR_OPEN))
            self._emit(GameEvent.DOOR_OPENED)
        return changes

    def _relocate(self, target: Point) -> List[CellChange]:
        on_open_door = self.door.is_open and self.player == self.door.position
        vacated = Cell.DOOR_OPEN if on_open_door else Cell.FLOOR
        self.map[self.player] = vacated
        old = self.player

        self.player = target
        occupied = Cell.PLAYER_ON_OPEN_DOOR if target == self.door.position else Cell.PLAYER
        self.map[target] = occupied
        logger.debug("Player moved to (%d,%d)", target.x, target.y)
        return [CellChange(old, vacated), CellChange(target, occupied)]
