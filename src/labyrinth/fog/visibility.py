from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class RevealState(str, Enum):
    VISIBLE = "visible"         # inside the radius right now; full brightness
    REMEMBERED = "remembered"   # visited before but out of range; dim
    HIDDEN = "hidden"           # never visited; fully dark


@dataclass
class FogSettings:
    radius: int = 10
    dim_factor: float = 0.5  # brightness for remembered cells

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("radius must be >= 0")
        if not (0.0 <= self.dim_factor <= 1.0):
            raise ValueError("dim_factor must be between 0.0 and 1.0")


class VisibilityTracker:
    """
    Keeps the visited (auto-map) memory and the current reveal state of a maze.

    Responsibilities:
    - Marks every cell within the Euclidean radius of the player cell as visited.
      Visited cells are never forgotten while the level lasts.
    - Classifies cells and point entities as visible, remembered or hidden.
    - Provides brightness values for a renderer.

    Only grid dimensions are needed; walls do not block sight. This class is
    engine-agnostic: a presentation layer queries ``reveal_state_of`` or
    ``light_map`` each frame and shades accordingly:
      - HIDDEN: brightness 0.0
      - REMEMBERED: brightness = dim_factor
      - VISIBLE: brightness 1.0
    """

    def __init__(self, width: int, height: int, settings: Optional[FogSettings] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width/height must be > 0")
        self.width = width
        self.height = height
        self.settings = settings or FogSettings()
        self._visited: List[List[bool]] = [[False for _ in range(width)] for _ in range(height)]
        self._states: List[List[RevealState]] = [[RevealState.HIDDEN for _ in range(width)] for _ in range(height)]
        self._player: Optional[Coord] = None
        logger.debug(
            "VisibilityTracker initialized: %dx%d radius=%d dim=%.2f",
            width,
            height,
            self.settings.radius,
            self.settings.dim_factor,
        )

    @property
    def radius(self) -> int:
        return self.settings.radius

    @property
    def player_cell(self) -> Optional[Coord]:
        return self._player

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _within_radius(self, x: int, y: int) -> bool:
        if self._player is None:
            return False
        px, py = self._player
        return math.hypot(x - px, y - py) <= self.settings.radius

    def update(self, x: int, y: int) -> None:
        """
        Record the player standing on cell (x, y).

        Marks the radius around it as visited, then recomputes the reveal state
        of every cell. Call when the occupied cell changes; calling it every
        frame is correct but redundant.
        """
        if not self.in_bounds(x, y):
            raise ValueError("player cell out of bounds")
        self._player = (x, y)
        r = self.settings.radius

        for cy in range(max(0, y - r), min(self.height - 1, y + r) + 1):
            row = self._visited[cy]
            for cx in range(max(0, x - r), min(self.width - 1, x + r) + 1):
                if math.hypot(cx - x, cy - y) <= r:
                    row[cx] = True

        visible = 0
        for cy in range(self.height):
            visited_row = self._visited[cy]
            state_row = self._states[cy]
            for cx in range(self.width):
                if math.hypot(cx - x, cy - y) <= r:
                    state_row[cx] = RevealState.VISIBLE
                    visible += 1
                elif visited_row[cx]:
                    state_row[cx] = RevealState.REMEMBERED
                else:
                    state_row[cx] = RevealState.HIDDEN

        logger.debug("Visibility updated at (%d,%d) radius %d; %d visible cells", x, y, r, visible)

    def reveal_state_of(self, cell: Coord) -> RevealState:
        """Reveal state of a grid cell, or of a point entity sitting on that cell."""
        x, y = cell
        if not self.in_bounds(x, y):
            raise IndexError("Cell out of bounds")
        if self._within_radius(x, y):
            return RevealState.VISIBLE
        if self._visited[y][x]:
            return RevealState.REMEMBERED
        return RevealState.HIDDEN

    def reveal_strength(self, cell: Coord) -> float:
        state = self.reveal_state_of(cell)
        if state is RevealState.VISIBLE:
            return 1.0
        if state is RevealState.REMEMBERED:
            return self.settings.dim_factor
        return 0.0

    def state_map(self) -> List[List[RevealState]]:
        return [row[:] for row in self._states]

    def light_map(self) -> List[List[float]]:
        """
        Returns a matrix [height][width] of brightness multipliers suitable for rendering.
        """
        dim = self.settings.dim_factor
        lookup = {RevealState.VISIBLE: 1.0, RevealState.REMEMBERED: dim, RevealState.HIDDEN: 0.0}
        return [[lookup[state] for state in row] for row in self._states]

    def is_visited(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            raise IndexError("Cell out of bounds")
        return self._visited[y][x]

    def visited_mask(self) -> List[List[bool]]:
        return [row[:] for row in self._visited]

    def visited_count(self) -> int:
        return sum(sum(1 for v in row if v) for row in self._visited)

    def reset_memory(self) -> None:
        """Forget all visited cells (e.g., on a new level)."""
        for y in range(self.height):
            for x in range(self.width):
                self._visited[y][x] = False
                self._states[y][x] = RevealState.HIDDEN
        self._player = None
        logger.debug("Visibility memory reset")

    def mark_all_visited(self) -> None:
        """Debug/cheat: mark the whole maze as visited."""
        for y in range(self.height):
            for x in range(self.width):
                self._visited[y][x] = True
                if self._states[y][x] is RevealState.HIDDEN:
                    self._states[y][x] = RevealState.REMEMBERED
        logger.debug("Visibility marked all cells as visited")
