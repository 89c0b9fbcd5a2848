import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from escape_room.room.generator import build_layout  # noqa: E402
from escape_room.room.map import Point  # noqa: E402


@pytest.fixture
def scenario_layout():
    """10x6 room with the door at top-middle, player at (2,2), key at (7,3)."""
    return build_layout(10, 6, door=Point(5, 0), player=Point(2, 2), key=Point(7, 3))
