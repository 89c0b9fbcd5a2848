from __future__ import annotations

from dataclasses import dataclass

from .exceptions import RoomSizeError


@dataclass(frozen=True)
class RoomLimits:
    """Allowed room dimensions, border included."""

    min_width: int = 10
    max_width: int = 120
    min_height: int = 6
    max_height: int = 40

    # Interior cells per axis (border excluded)
    min_interior: int = 2

    def in_range(self, width: int, height: int) -> bool:
        return (
            self.min_width <= width <= self.max_width
            and self.min_height <= height <= self.max_height
        )

    def interior_ok(self, width: int, height: int) -> bool:
        return width - 2 >= self.min_interior and height - 2 >= self.min_interior

    def validate(self, width: int, height: int) -> None:
        """Raise RoomSizeError if (width, height) is not a playable room."""
        if not self.in_range(width, height):
            raise RoomSizeError(
                f"Room size {width}x{height} out of allowed range "
                f"(width {self.min_width}-{self.max_width}, height {self.min_height}-{self.max_height})"
            )
        if not self.interior_ok(width, height):
            raise RoomSizeError(f"Interior area of {width}x{height} room is too small")


LIMITS = RoomLimits()


def validate_room_size(width: int, height: int) -> None:
    LIMITS.validate(width, height)
