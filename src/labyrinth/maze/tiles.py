from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

WALL_CHAR = "#"
FLOOR_CHAR = "."


class Tile(IntEnum):
    WALL = 0
    FLOOR = 1


class CarveStyle(IntEnum):
    """Corridor width, in cells, used by the backtracking carver."""

    CLASSIC = 1
    WIDE = 2
    HALL = 3

    @property
    def step(self) -> int:
        """Distance between neighbouring carve nodes (corridor plus one wall)."""
        return int(self) + 1


@dataclass
class MazeGrid:
    """A Wall/Floor tile grid plus the coordinates it was carved from.

    Coordinates are (x, y) with (0,0) at top-left; x grows to the right, y grows down.
    ``tiles`` is indexed ``tiles[y][x]``. Once generation has finished the grid
    is treated as read-only; use ``copy()`` to derive a variant.
    """

    width: int
    height: int
    tiles: List[List[Tile]]
    start: Cell = (1, 1)
    corridor_width: int = 1

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_floor(self, x: int, y: int) -> bool:
        return self.tiles[y][x] == Tile.FLOOR

    def is_wall(self, x: int, y: int) -> bool:
        return self.tiles[y][x] == Tile.WALL

    def is_open(self, x: int, y: int) -> bool:
        """Bounds-safe floor check; anything outside the grid counts as closed."""
        return self.in_bounds(x, y) and self.tiles[y][x] == Tile.FLOOR

    def neighbors4(self, x: int, y: int) -> Iterator[Cell]:
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def open_neighbor_count(self, x: int, y: int) -> int:
        return sum(1 for nx, ny in self.neighbors4(x, y) if self.tiles[ny][nx] == Tile.FLOOR)

    def floor_cells(self) -> List[Cell]:
        return [(x, y) for y in range(self.height) for x in range(self.width) if self.tiles[y][x] == Tile.FLOOR]

    def copy(self) -> "MazeGrid":
        return MazeGrid(
            self.width,
            self.height,
            [row[:] for row in self.tiles],
            self.start,
            self.corridor_width,
        )

    def to_lines(self) -> List[str]:
        return ["".join(FLOOR_CHAR if t == Tile.FLOOR else WALL_CHAR for t in row) for row in self.tiles]

    def signature(self) -> str:
        """Deterministic digest of the layout, handy for comparing generations."""
        raw = "\n".join(self.to_lines()).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()

    @classmethod
    def filled(cls, width: int, height: int, tile: Tile = Tile.WALL, corridor_width: int = 1) -> "MazeGrid":
        tiles = [[tile for _ in range(width)] for _ in range(height)]
        return cls(width, height, tiles, corridor_width=corridor_width)

    @classmethod
    def from_lines(cls, rows: Sequence[str], start: Cell = (1, 1), corridor_width: int = 1) -> "MazeGrid":
        """Build a grid from ASCII rows for tests/tools. ``#`` is wall, anything else floor."""
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must have the same length")
        tiles = [[Tile.WALL if ch == WALL_CHAR else Tile.FLOOR for ch in row] for row in rows]
        logger.debug("MazeGrid built from %d ASCII rows (%dx%d)", len(rows), width, len(rows))
        return cls(width, len(rows), tiles, start, corridor_width)
