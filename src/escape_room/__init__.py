"""
Escape Room package root.

A single-room terminal game: pick up the key, the door opens, walk out.
Domain modules (``room``, ``engine``, ``input``) stay free of any terminal or
window code so they can be tested headless; front ends live in ``rendering``.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("escape-room")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
