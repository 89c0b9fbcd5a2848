from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..config import validate_room_size
from ..exceptions import PlacementError
from .door import Door
from .map import Point, RoomMap
from .tiles import Cell

logger = logging.getLogger(__name__)

SIDES = ("top", "bottom", "left", "right")

# Resampling cap for the key position. Any valid room has at least four
# interior cells, so this is never reached in practice.
MAX_PLACEMENT_ATTEMPTS = 1000


@dataclass
class RoomLayout:
    """A freshly built room: the grid plus the door, player and key positions."""

    map: RoomMap
    door: Door
    player: Point
    key: Point

    @property
    def width(self) -> int:
        return self.map.width

    @property
    def height(self) -> int:
        return self.map.height


def build_layout(width: int, height: int, door: Point, player: Point, key: Point) -> RoomLayout:
    """Assemble a room from explicit positions.

    Raises:
        RoomSizeError: If the dimensions are outside the allowed limits.
        PlacementError: If the door is not a non-corner border cell, or the
            player/key are not distinct interior cells.
    """
    validate_room_size(width, height)
    room = RoomMap(width, height, default=Cell.WALL)
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            room.set(x, y, Cell.FLOOR)

    if not room.is_border(door.x, door.y) or room.is_corner(door.x, door.y):
        raise PlacementError(f"Door must sit on the border away from corners, got ({door.x},{door.y})")
    if not room.is_interior(player.x, player.y):
        raise PlacementError(f"Player must start inside the room, got ({player.x},{player.y})")
    if not room.is_interior(key.x, key.y):
        raise PlacementError(f"Key must lie inside the room, got ({key.x},{key.y})")
    if player == key:
        raise PlacementError("Player and key cannot share a cell")

    room[door] = Cell.DOOR_CLOSED
    room[player] = Cell.PLAYER
    room[key] = Cell.KEY
    return RoomLayout(map=room, door=Door(door), player=player, key=key)


class RoomGenerator:
    """Randomized room builder.

    - Solid wall border with one closed door on a random side (never a corner)
    - Open interior floor
    - Player on a random interior cell
    - Key on a different random interior cell

    The random source is injected so runs are reproducible: the same seeded
    ``random.Random`` always yields the same layout.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def generate(self, width: int, height: int) -> RoomLayout:
        validate_room_size(width, height)
        logger.info("Generating %dx%d room", width, height)

        door = self._pick_door(width, height)
        player = self._random_interior(width, height)
        key = self._sample_distinct(width, height, exclude=player)

        layout = build_layout(width, height, door=door, player=player, key=key)
        logger.debug(
            "Door at (%d,%d), player at (%d,%d), key at (%d,%d)\n%s",
            door.x, door.y, player.x, player.y, key.x, key.y, layout.map,
        )
        return layout

    def _pick_door(self, width: int, height: int) -> Point:
        side = self._rng.choice(SIDES)
        if side == "top":
            return Point(self._rng.randint(1, width - 2), 0)
        if side == "bottom":
            return Point(self._rng.randint(1, width - 2), height - 1)
        if side == "left":
            return Point(0, self._rng.randint(1, height - 2))
        return Point(width - 1, self._rng.randint(1, height - 2))

    def _random_interior(self, width: int, height: int) -> Point:
        return Point(self._rng.randint(1, width - 2), self._rng.randint(1, height - 2))

    def _sample_distinct(
        self, width: int, height: int, exclude: Point, max_attempts: int = MAX_PLACEMENT_ATTEMPTS
    ) -> Point:
        """Draw interior cells until one differs from ``exclude``."""
        for _ in range(max_attempts):
            p = self._random_interior(width, height)
            if p != exclude:
                return p
        raise PlacementError(
            f"No interior cell distinct from ({exclude.x},{exclude.y}) after {max_attempts} attempts"
        )
