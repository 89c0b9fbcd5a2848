"""
Input abstraction layer for Escape Room.

Exposes:
- InputAction: Logical actions the game loop understands.
- InputMapper: Rebindable mapping from key names to actions.
"""
from .actions import InputAction
from .mapping import InputMapper

__all__ = [
    "InputAction",
    "InputMapper",
]
