from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Union

from ..maze.analysis import locate_dead_ends
from ..maze.tiles import Cell, MazeGrid
from ..rng import SeedLike, make_rng

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 3


def grid_distance(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass(frozen=True)
class PlacementRules:
    """Distance thresholds (Euclidean, grid units) derived from the maze size."""

    min_dist_from_origin: float
    min_dist_between_items: float

    @classmethod
    def for_grid(cls, grid: MazeGrid) -> "PlacementRules":
        longest = max(grid.width, grid.height)
        return cls(min_dist_from_origin=longest / 3, min_dist_between_items=longest / 4)


def place_items(
    grid: MazeGrid,
    origin: Cell,
    max_items: int = DEFAULT_MAX_ITEMS,
    rng: Union[random.Random, SeedLike] = None,
    rules: Optional[PlacementRules] = None,
) -> List[Cell]:
    """Choose up to ``max_items`` well separated dead ends, farthest from ``origin`` first.

    Candidates closer to the origin than ``min_dist_from_origin`` are dropped;
    the rest are walked in descending distance order and accepted only if they
    keep ``min_dist_between_items`` from everything already accepted. Mazes that
    cannot supply enough candidates simply yield fewer positions.

    When an rng is supplied, candidates at equal distance are ordered by it;
    otherwise ties keep row-major order. Either way the result is reproducible.
    """
    if max_items < 0:
        raise ValueError("max_items must be >= 0")
    rules = rules or PlacementRules.for_grid(grid)

    candidates = [
        cell for cell in locate_dead_ends(grid) if grid_distance(cell, origin) >= rules.min_dist_from_origin
    ]
    if rng is not None:
        make_rng(rng).shuffle(candidates)
    candidates.sort(key=lambda cell: grid_distance(cell, origin), reverse=True)

    chosen: List[Cell] = []
    for cell in candidates:
        if len(chosen) >= max_items:
            break
        if all(grid_distance(cell, other) >= rules.min_dist_between_items for other in chosen):
            chosen.append(cell)

    if len(chosen) < max_items:
        logger.info(
            "Placed %d of %d items (%d candidates beyond %.2f cells)",
            len(chosen),
            max_items,
            len(candidates),
            rules.min_dist_from_origin,
        )
    else:
        logger.debug("Placed %d items at %s", len(chosen), chosen)
    return chosen
