from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .tiles import MazeGrid, Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world space, stored as centre plus half extents."""

    cx: float
    cy: float
    half_w: float
    half_h: float

    @classmethod
    def square(cls, cx: float, cy: float, half: float) -> "Rect":
        return cls(cx, cy, half, half)

    @property
    def left(self) -> float:
        return self.cx - self.half_w

    @property
    def right(self) -> float:
        return self.cx + self.half_w

    @property
    def top(self) -> float:
        return self.cy - self.half_h

    @property
    def bottom(self) -> float:
        return self.cy + self.half_h

    def overlaps(self, other: "Rect") -> bool:
        """Strict overlap test; rectangles that only share an edge do not overlap."""
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )


def cell_center(x: int, y: int, cell_size: float) -> tuple[float, float]:
    return (x * cell_size + cell_size / 2, y * cell_size + cell_size / 2)


def world_to_cell(px: float, py: float, cell_size: float) -> tuple[int, int]:
    return (int(px // cell_size), int(py // cell_size))


def obstacles_from_grid(grid: MazeGrid, cell_size: float) -> List[Rect]:
    """One cell-sized obstacle per wall cell, centred on the cell, in row-major order."""
    if cell_size <= 0:
        raise ValueError("cell_size must be > 0")
    half = cell_size / 2
    rects = [
        Rect.square(*cell_center(x, y, cell_size), half)
        for y in range(grid.height)
        for x in range(grid.width)
        if grid.tiles[y][x] == Tile.WALL
    ]
    logger.debug("Built %d obstacles from %dx%d grid (cell=%s)", len(rects), grid.width, grid.height, cell_size)
    return rects
