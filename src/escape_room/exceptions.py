class EscapeRoomError(Exception):
    """Base exception for the Escape Room project."""


class RoomSizeError(EscapeRoomError):
    """Raised when room dimensions fall outside the allowed limits."""


class PlacementError(EscapeRoomError):
    """Raised when a door, player or key cannot be placed as requested."""


class RenderError(EscapeRoomError):
    """Raised when a front end cannot display the room (e.g. terminal too small)."""
