from .analysis import find_corridor_ends, find_dead_ends, locate_dead_ends, reachable_cells
from .generator import BacktrackerGenerator, generate_maze, inject_loops
from .obstacles import Rect, obstacles_from_grid
from .tiles import CarveStyle, Cell, MazeGrid, Tile

__all__ = [
    "BacktrackerGenerator",
    "CarveStyle",
    "Cell",
    "MazeGrid",
    "Rect",
    "Tile",
    "find_corridor_ends",
    "find_dead_ends",
    "generate_maze",
    "inject_loops",
    "locate_dead_ends",
    "obstacles_from_grid",
    "reachable_cells",
]
