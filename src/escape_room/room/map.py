from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .tiles import Cell, DEFAULT_GLYPHS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


class RoomMap:
    """
    Bounds-checked grid of cells. Rows are indexed by y, columns by x, with
    (0, 0) in the top-left corner. Reads outside the grid raise IndexError;
    writes outside the grid are logged and dropped.
    """

    def __init__(self, width: int, height: int, default: Cell = Cell.WALL) -> None:
        if width < 3 or height < 3:
            raise ValueError("Room must be at least 3x3 to keep a wall border")
        self.width = width
        self.height = height
        self._cells: List[List[Cell]] = [[default for _ in range(width)] for _ in range(height)]

    # ---- Bounds / geometry -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and (
            x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1
        )

    def is_corner(self, x: int, y: int) -> bool:
        return (x in (0, self.width - 1)) and (y in (0, self.height - 1))

    def is_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    # ---- Access ------------------------------------------------------------
    def get(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._cells[y][x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        if not self.in_bounds(x, y):
            logger.error("Attempt to write out-of-bounds cell at (%d,%d)", x, y)
            return
        self._cells[y][x] = cell

    def __getitem__(self, p: Point) -> Cell:
        return self.get(p.x, p.y)

    def __setitem__(self, p: Point, cell: Cell) -> None:
        self.set(p.x, p.y, cell)

    # ---- Query -------------------------------------------------------------
    def cells(self) -> Iterator[Tuple[Point, Cell]]:
        """Yield every (position, cell) pair in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Point(x, y), self._cells[y][x]

    def count(self, cell: Cell) -> int:
        return sum(row.count(cell) for row in self._cells)

    def find(self, *wanted: Cell) -> List[Point]:
        return [p for p, c in self.cells() if c in wanted]

    # ---- Export ------------------------------------------------------------
    def to_str_lines(self, glyphs: Optional[Dict[Cell, str]] = None) -> List[str]:
        table = glyphs or DEFAULT_GLYPHS
        return ["".join(table[c] for c in row) for row in self._cells]

    def snapshot(self) -> Tuple[Tuple[str, ...], ...]:
        """Hashable copy of the cell names for equality checks in tests."""
        return tuple(tuple(c.name for c in row) for row in self._cells)

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())
