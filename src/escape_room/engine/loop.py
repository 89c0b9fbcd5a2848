from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ..input.actions import InputAction
from ..rendering.base import Renderer
from .game_state import Direction, GameSession, SessionState

logger = logging.getLogger(__name__)

ACTION_DIRECTIONS: Dict[InputAction, Direction] = {
    InputAction.MOVE_UP: Direction.UP,
    InputAction.MOVE_DOWN: Direction.DOWN,
    InputAction.MOVE_LEFT: Direction.LEFT,
    InputAction.MOVE_RIGHT: Direction.RIGHT,
}

ActionSource = Callable[[], Optional[InputAction]]


class GameLoop:
    """Drives a GameSession with one input per iteration.

    Each action is processed to completion (state change, redraw, status)
    before the next one is read. The loop is independent of any display: the
    renderer only receives redraw instructions, and the action source is any
    blocking callable. Event-driven front ends (Arcade) skip ``run`` and call
    ``start`` once, then ``handle`` per key press.
    """

    def __init__(self, session: GameSession, renderer: Renderer, read_action: Optional[ActionSource] = None) -> None:
        self.session = session
        self.renderer = renderer
        self._read_action = read_action
        self._started: bool = False
        self._steps: int = 0

    @property
    def steps(self) -> int:
        """Number of move actions processed (ignored keys excluded)."""
        return self._steps

    @property
    def running(self) -> bool:
        return self._started and not self.session.is_over

    def start(self) -> None:
        """Draw the whole room and the status line.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._started:
            logger.debug("GameLoop.start() called while already started")
            return
        self._started = True
        self.renderer.start(self.session.width, self.session.height)
        self.renderer.apply(self.session.full_redraw())
        self.renderer.show_status(self.session.has_key, self.session.door_open)

    def handle(self, action: Optional[InputAction]) -> bool:
        """Process one action. Returns False once the session is over."""
        if self.session.is_over:
            return False
        if action is None:
            return True
        if action is InputAction.QUIT:
            self.session.quit()
            return False

        direction = ACTION_DIRECTIONS.get(action)
        if direction is None:
            logger.warning("No direction for action %s; ignored", action)
            return True

        self._steps += 1
        result = self.session.move(direction)
        if result.moved:
            self.renderer.apply(result.changes)
            self.renderer.show_status(result.has_key, result.door_open)
        elif result.won:
            self.renderer.show_win()
            return False
        return True

    def run(self) -> SessionState:
        """Block on the action source until the player wins or quits."""
        if self._read_action is None:
            raise RuntimeError("GameLoop.run() needs an action source")
        self.start()
        while True:
            action = self._read_action()
            if not self.handle(action):
                break
        logger.info("Loop complete (state=%s, steps=%d)", self.session.state.name, self._steps)
        return self.session.state
