from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple, Union

from ..errors import MazeConfigError
from ..rng import SeedLike, make_rng
from .tiles import CarveStyle, Cell, MazeGrid, Tile

logger = logging.getLogger(__name__)

MIN_SIZE = 5
DEFAULT_LOOP_CHANCE = 0.08
START: Cell = (1, 1)

_DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))


def parse_carve_style(carve_style: Union[CarveStyle, int]) -> CarveStyle:
    try:
        return CarveStyle(int(carve_style))
    except (TypeError, ValueError):
        raise MazeConfigError(f"carve_style must be one of 1, 2, 3; got {carve_style!r}") from None


def validate_dimensions(width: int, height: int, carve_style: Union[CarveStyle, int]) -> CarveStyle:
    """Check the generation preconditions and return the parsed carve style.

    Raises MazeConfigError: these are programmer errors, not runtime conditions.
    """
    style = parse_carve_style(carve_style)
    if width < MIN_SIZE or height < MIN_SIZE:
        raise MazeConfigError(f"maze must be at least {MIN_SIZE}x{MIN_SIZE}; got {width}x{height}")
    # seed block at START plus a one-cell border on the far side
    if START[0] + int(style) + 1 > width or START[1] + int(style) + 1 > height:
        raise MazeConfigError(f"{width}x{height} is too small for a {int(style)}-wide seed block")
    return style


class BacktrackerGenerator:
    """Randomized depth-first ("growing tree" with newest-first) maze carver.

    Algorithm:
    - Start from an all-wall grid and open a ``w x w`` block at (1, 1).
    - Carve nodes live on a lattice with spacing ``w + 1``; from the node on top
      of the stack pick a random neighbouring node that is still wall, lies inside
      the border, and touches at most one already-open node.
    - Open the ``w``-wide rectangle between the two nodes and push the new one;
      when no neighbour qualifies, backtrack.

    The "at most one open node" rule keeps corridors from merging into rooms, so
    the result is a perfect maze (a spanning tree over the carved nodes).
    Optional loop injection afterwards punches holes between parallel corridors.
    """

    def __init__(self, carve_style: Union[CarveStyle, int] = CarveStyle.WIDE, loop_chance: float = 0.0) -> None:
        self.carve_style = parse_carve_style(carve_style)
        if not (0.0 <= loop_chance <= 1.0):
            raise MazeConfigError("loop_chance must be between 0.0 and 1.0")
        self.loop_chance = float(loop_chance)

    def generate(
        self,
        width: int,
        height: int,
        seed: SeedLike = None,
        rng: Optional[random.Random] = None,
    ) -> MazeGrid:
        style = validate_dimensions(width, height, self.carve_style)
        rng = make_rng(rng if rng is not None else seed)
        w = int(style)
        step = style.step

        grid = MazeGrid.filled(width, height, Tile.WALL, corridor_width=w)
        grid.start = START
        self._carve_between(grid, START, START)
        stack: List[Cell] = [START]
        carved = 1

        while stack:
            cx, cy = stack[-1]
            candidates = [
                (cx + dx * step, cy + dy * step)
                for dx, dy in _DIRECTIONS
                if self._is_carve_target(grid, cx + dx * step, cy + dy * step)
            ]
            if candidates:
                nxt = rng.choice(candidates)
                self._carve_between(grid, (cx, cy), nxt)
                stack.append(nxt)
                carved += 1
            else:
                stack.pop()

        loops = 0
        if self.loop_chance > 0.0:
            loops = inject_loops(grid, self.loop_chance, rng)

        logger.debug(
            "Generated %dx%d maze (style=%d, nodes=%d, loops=%d, signature=%s)",
            width,
            height,
            w,
            carved,
            loops,
            grid.signature(),
        )
        return grid

    def _is_carve_target(self, grid: MazeGrid, x: int, y: int) -> bool:
        w = int(self.carve_style)
        if x < 1 or y < 1 or x + w - 1 > grid.width - 2 or y + w - 1 > grid.height - 2:
            return False
        if grid.tiles[y][x] != Tile.WALL:
            return False
        return self._open_nodes_around(grid, x, y) <= 1

    def _open_nodes_around(self, grid: MazeGrid, x: int, y: int) -> int:
        step = self.carve_style.step
        count = 0
        for dx, dy in _DIRECTIONS:
            nx, ny = x + dx * step, y + dy * step
            if grid.in_bounds(nx, ny) and grid.tiles[ny][nx] == Tile.FLOOR:
                count += 1
        return count

    def _carve_between(self, grid: MazeGrid, a: Cell, b: Cell) -> None:
        extra = int(self.carve_style) - 1
        min_x, max_x = min(a[0], b[0]), max(a[0], b[0]) + extra
        min_y, max_y = min(a[1], b[1]), max(a[1], b[1]) + extra
        for y in range(min_y, max_y + 1):
            row = grid.tiles[y]
            for x in range(min_x, max_x + 1):
                row[x] = Tile.FLOOR


def _loop_opening(grid: MazeGrid, x: int, y: int, dx: int, dy: int) -> Optional[Tuple[Cell, Cell]]:
    """Inclusive corners of the wall to open at (x, y) to join two corridors along (dx, dy).

    Three shapes qualify:
    - a single wall cell with Floor on both sides (1-wide corridors only);
    - the ``w``-cell gap strip between two adjacent open nodes that was never carved;
    - a node that was never carved, sitting between two open nodes, together
      with the gap strips on either side of it.
    """
    w = grid.corridor_width
    if w <= 1 and grid.is_open(x - dx, y - dy) and grid.is_open(x + dx, y + dy):
        return (x, y), (x, y)

    step = w + 1
    sx, sy = grid.start
    along, across = (x - sx, y - sy) if dx else (y - sy, x - sx)
    if along < 0 or across < 0 or across % step:
        return None

    offset = along % step
    if offset == w and w > 1:
        before = (x - dx * w, y - dy * w)
        after = (x + dx, y + dy)
        corners = (x, y), (x + dy * (w - 1), y + dx * (w - 1))
    elif offset == 0:
        if x + w - 1 > grid.width - 2 or y + w - 1 > grid.height - 2:
            return None
        before = (x - dx * step, y - dy * step)
        after = (x + dx * step, y + dy * step)
        corners = (x - dx, y - dy), (x + w - 1 + dx, y + w - 1 + dy)
    else:
        return None

    if grid.is_open(*before) and grid.is_open(*after):
        return corners
    return None


def _open_rect(grid: MazeGrid, lo: Cell, hi: Cell) -> int:
    opened = 0
    for y in range(lo[1], hi[1] + 1):
        row = grid.tiles[y]
        for x in range(lo[0], hi[0] + 1):
            if row[x] == Tile.WALL:
                row[x] = Tile.FLOOR
                opened += 1
    return opened


def inject_loops(grid: MazeGrid, chance: float, rng: Union[random.Random, SeedLike] = None) -> int:
    """Open some walls between parallel corridors to create cycles.

    The carver joins every pair of neighbouring open nodes, so the walls worth
    breaking are the ones separating two corridors that only meet somewhere
    else: a closed gap between open nodes, or an uncarved node flanked by open
    nodes. Openings keep the corridor width. On 1-wide grids any wall cell with
    Floor on both sides also qualifies.

    Two passes run over interior wall cells in row-major order: first joining
    left and right, then above and below. Every candidate gets one independent
    trial with probability ``chance`` when its turn comes; an opening can change
    which later cells qualify in the same pass. Floor is only ever added.
    Mutates ``grid`` in place and returns the number of cells opened.
    """
    if not (0.0 <= chance <= 1.0):
        raise MazeConfigError("loop chance must be between 0.0 and 1.0")
    rng = make_rng(rng)
    opened = 0
    for dx, dy in ((1, 0), (0, 1)):
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                if grid.tiles[y][x] != Tile.WALL:
                    continue
                corners = _loop_opening(grid, x, y, dx, dy)
                if corners is not None and rng.random() < chance:
                    opened += _open_rect(grid, *corners)
    logger.debug("Loop injection opened %d walls (chance=%.3f)", opened, chance)
    return opened


def generate_maze(
    width: int,
    height: int,
    carve_style: Union[CarveStyle, int] = CarveStyle.WIDE,
    rng: Union[random.Random, SeedLike] = None,
) -> MazeGrid:
    """Carve a perfect maze; ``rng`` may be a ``random.Random`` or a seed."""
    return BacktrackerGenerator(carve_style).generate(width, height, rng=make_rng(rng))


__all__ = [
    "BacktrackerGenerator",
    "DEFAULT_LOOP_CHANCE",
    "START",
    "generate_maze",
    "inject_loops",
    "parse_carve_style",
    "validate_dimensions",
]
