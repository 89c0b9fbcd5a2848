from __future__ import annotations

import logging

from .map import Point

logger = logging.getLogger(__name__)


class Door:
    """The room's single exit.

    The door starts closed and opens once, when the key is picked up. It never
    closes again and never moves. A closed door blocks movement like a wall;
    an open door is walkable and is the only cell the player can leave from.
    """

    def __init__(self, position: Point) -> None:
        self.position = position
        self.is_open: bool = False

    def open(self) -> bool:
        """Open the door. Returns True only on the call that actually opened it."""
        if self.is_open:
            logger.debug("Door at %s already open", self.position)
            return False
        self.is_open = True
        logger.info("Door at (%d,%d) opened", self.position.x, self.position.y)
        return True
