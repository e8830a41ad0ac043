from collections import deque
from typing import List, Optional, Set

from .tiles import Cell, MazeGrid, Tile


def find_dead_ends(grid: MazeGrid) -> List[Cell]:
    """Return floor cells with exactly one floor neighbour (4-neigh), row-major."""
    return [
        (x, y)
        for y in range(grid.height)
        for x in range(grid.width)
        if grid.tiles[y][x] == Tile.FLOOR and grid.open_neighbor_count(x, y) == 1
    ]


def find_corridor_ends(grid: MazeGrid, corridor_width: Optional[int] = None) -> List[Cell]:
    """Dead ends of a maze carved with ``w``-wide corridors.

    Inside a wide corridor every cell has two or more open neighbours, so the
    per-cell rule never fires. Instead each carve node (top-left cell of a
    ``w x w`` block on the lattice ``1 + k * (w + 1)``) is a dead end when
    exactly one of its four sides has an opening. A side is open when any of
    the ``w`` cells along it is Floor, which also counts holes punched by loop
    injection. For ``w == 1`` this matches ``find_dead_ends`` on an unlooped maze.
    """
    w = grid.corridor_width if corridor_width is None else int(corridor_width)
    step = w + 1
    sx, sy = grid.start
    ends: List[Cell] = []
    for y in range(sy, grid.height - 1, step):
        for x in range(sx, grid.width - 1, step):
            if grid.tiles[y][x] != Tile.FLOOR:
                continue
            sides = (
                [(x + i, y - 1) for i in range(w)],
                [(x + w, y + i) for i in range(w)],
                [(x + i, y + w) for i in range(w)],
                [(x - 1, y + i) for i in range(w)],
            )
            if sum(1 for side in sides if any(grid.is_open(cx, cy) for cx, cy in side)) == 1:
                ends.append((x, y))
    return ends


def locate_dead_ends(grid: MazeGrid) -> List[Cell]:
    """Pick the dead-end rule that suits the corridor width the grid was carved with."""
    if grid.corridor_width <= 1:
        return find_dead_ends(grid)
    return find_corridor_ends(grid)


def reachable_cells(grid: MazeGrid, origin: Cell) -> Set[Cell]:
    """Flood fill over floor cells from ``origin`` (4-neigh). Empty if origin is wall."""
    if not grid.in_bounds(*origin) or not grid.is_floor(*origin):
        return set()
    seen = {origin}
    q = deque([origin])
    while q:
        x, y = q.popleft()
        for nx, ny in grid.neighbors4(x, y):
            if (nx, ny) not in seen and grid.tiles[ny][nx] == Tile.FLOOR:
                seen.add((nx, ny))
                q.append((nx, ny))
    return seen


def count_floor_edges(grid: MazeGrid) -> int:
    """Number of orthogonally adjacent floor pairs. A connected tree has cells - 1."""
    edges = 0
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.tiles[y][x] != Tile.FLOOR:
                continue
            if x + 1 < grid.width and grid.tiles[y][x + 1] == Tile.FLOOR:
                edges += 1
            if y + 1 < grid.height and grid.tiles[y + 1][x] == Tile.FLOOR:
                edges += 1
    return edges

