import itertools
import random

import pytest

from labyrinth.items.placement import PlacementRules, grid_distance, place_items
from labyrinth.maze.analysis import locate_dead_ends
from labyrinth.maze.generator import generate_maze, inject_loops
from labyrinth.maze.tiles import MazeGrid


def assert_spacing(grid, origin, cells):
    rules = PlacementRules.for_grid(grid)
    for cell in cells:
        assert grid_distance(cell, origin) >= rules.min_dist_from_origin
    for a, b in itertools.combinations(cells, 2):
        assert grid_distance(a, b) >= rules.min_dist_between_items


def test_rules_scale_with_longest_side():
    grid = MazeGrid.filled(31, 23)
    rules = PlacementRules.for_grid(grid)
    assert rules.min_dist_from_origin == pytest.approx(31 / 3)
    assert rules.min_dist_between_items == pytest.approx(31 / 4)


@pytest.mark.parametrize("style", [1, 2, 3])
@pytest.mark.parametrize("seed", [0, 3, 42, 77])
def test_items_respect_spacing_and_sit_on_dead_ends(style, seed):
    grid = generate_maze(31, 23, style, seed)
    cells = place_items(grid, grid.start, 3, rng=random.Random(seed))

    assert len(cells) <= 3
    assert len(set(cells)) == len(cells)
    dead_ends = set(locate_dead_ends(grid))
    for cell in cells:
        assert cell in dead_ends
        assert grid.is_floor(*cell)
    assert_spacing(grid, grid.start, cells)


def test_classic_maze_yields_items():
    grid = generate_maze(31, 23, 1, 42)
    assert len(place_items(grid, grid.start, 3)) >= 1


def test_farthest_dead_end_is_chosen_first():
    grid = generate_maze(31, 23, 1, 9)
    origin = grid.start
    rules = PlacementRules.for_grid(grid)
    candidates = [c for c in locate_dead_ends(grid) if grid_distance(c, origin) >= rules.min_dist_from_origin]

    cells = place_items(grid, origin, 3)

    assert cells[0] == max(candidates, key=lambda c: grid_distance(c, origin))
    distances = [grid_distance(c, origin) for c in cells]
    assert distances == sorted(distances, reverse=True)


def test_placement_is_deterministic_with_seeded_rng():
    grid = generate_maze(31, 23, 2, 42)
    inject_loops(grid, 0.08, 42)
    a = place_items(grid, grid.start, 3, rng=random.Random(5))
    b = place_items(grid, grid.start, 3, rng=random.Random(5))
    assert a == b


def test_too_few_candidates_is_not_an_error():
    rows = [
        "#####",
        "#...#",
        "#.#.#",
        "#...#",
        "#####",
    ]
    assert place_items(MazeGrid.from_lines(rows), (1, 1), 3) == []


def test_near_dead_ends_are_ignored():
    rows = [
        "#########",
        "#.......#",
        "#########",
    ]
    # dead ends at (1,1) and (7,1); origin threshold is 9/3 = 3
    grid = MazeGrid.from_lines(rows)
    assert place_items(grid, (1, 1), 3) == [(7, 1)]


def test_close_candidates_are_skipped():
    rows = [
        "#########",
        "#.#.#.#.#",
        "#.......#",
        "#########",
    ]
    # dead ends on row 1 at x=1,3,5,7; from origin (1,2) only x=5 and 7 are >= 3 away,
    # and they are 2 apart, below 9/4
    grid = MazeGrid.from_lines(rows)
    assert place_items(grid, (1, 2), 3) == [(7, 1)]


def test_max_items_bounds_result():
    grid = generate_maze(31, 23, 1, 42)
    assert place_items(grid, grid.start, 0) == []
    assert len(place_items(grid, grid.start, 1)) <= 1
    with pytest.raises(ValueError):
        place_items(grid, grid.start, -1)
