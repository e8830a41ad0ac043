import pytest

from labyrinth.maze.obstacles import Rect, cell_center, obstacles_from_grid, world_to_cell
from labyrinth.maze.tiles import MazeGrid
from labyrinth.movement.resolver import ControlledEntity, InputVector, MovementResolver

CELL = 32

ROWS = [
    "#####",
    "#.###",
    "#.###",
    "#####",
]


@pytest.fixture
def resolver():
    return MovementResolver()


@pytest.fixture
def walls():
    return obstacles_from_grid(MazeGrid.from_lines(ROWS), CELL)


def test_walking_into_a_wall_is_pushed_back(resolver, walls):
    player = ControlledEntity(48.0, 48.0, speed=4.0, half_extent=14.0)
    result = resolver.step(player, InputVector(1, 0), walls)

    assert result.moved is True
    assert result.new_pos == (48.0, 48.0)
    assert result.pushbacks_x == 1
    assert result.pushbacks_y == 0


def test_walking_left_into_a_corner_obstacle_keeps_x():
    player = ControlledEntity(48.0, 48.0, speed=4.0, half_extent=16.0)
    obstacle = Rect.square(32.0, 32.0, 16.0)

    result = MovementResolver().step(player, InputVector(-1, 0), [obstacle])

    assert result.moved is True
    assert result.new_pos[0] == 48.0
    assert result.pushbacks_x == 1


def test_free_move_down_the_corridor(resolver, walls):
    player = ControlledEntity(48.0, 48.0)
    result = resolver.step(player, InputVector(0, 1), walls)
    assert result.new_pos == (48.0, 52.0)
    assert (result.pushbacks_x, result.pushbacks_y) == (0, 0)


def test_diagonal_is_not_normalised(resolver):
    player = ControlledEntity(100.0, 100.0, speed=4.0)
    result = resolver.step(player, InputVector(1, -1), [])
    assert result.new_pos == (104.0, 96.0)


def test_diagonal_into_a_wall_cancels_both_axes(resolver):
    player = ControlledEntity(48.0, 48.0)
    wall = Rect.square(80.0, 48.0, 16.0)
    result = resolver.step(player, InputVector(1, 1), [wall])
    assert result.new_pos == (48.0, 48.0)
    assert (result.pushbacks_x, result.pushbacks_y) == (1, 1)


def test_zero_input_does_not_move(resolver, walls):
    player = ControlledEntity(48.0, 48.0)
    result = resolver.step(player, InputVector(), walls)
    assert result.moved is False
    assert result.new_pos == (48.0, 48.0)


def test_each_overlapping_obstacle_pushes_back(resolver):
    # already overlapping before the move, so the pushback does not clear it
    wall = Rect.square(70.0, 48.0, 16.0)
    player = ControlledEntity(48.0, 48.0)
    result = resolver.step(player, InputVector(1, 0), [wall, wall])
    assert result.pushbacks_x == 2
    assert result.new_pos == (44.0, 48.0)


def test_dt_scales_the_step(resolver):
    player = ControlledEntity(100.0, 100.0, speed=4.0)
    assert resolver.step(player, InputVector(-1, 0), [], dt=0.5).new_pos == (98.0, 100.0)
    with pytest.raises(ValueError):
        resolver.step(player, InputVector(-1, 0), [], dt=-1.0)


@pytest.mark.parametrize("dx,dy", [(2, 0), (0, -2), (0.5, 0)])
def test_input_axes_are_restricted(dx, dy):
    with pytest.raises(ValueError):
        InputVector(dx, dy)


def test_touching_edges_do_not_overlap():
    a = Rect.square(16.0, 16.0, 16.0)
    b = Rect.square(48.0, 16.0, 16.0)
    assert not a.overlaps(b)
    assert a.overlaps(Rect.square(47.0, 16.0, 16.0))


def test_obstacles_from_grid_cover_walls_in_row_major_order():
    grid = MazeGrid.from_lines(ROWS)
    rects = obstacles_from_grid(grid, CELL)
    wall_count = sum(row.count("#") for row in ROWS)

    assert len(rects) == wall_count
    assert rects[0] == Rect.square(16.0, 16.0, 16.0)
    assert rects[1] == Rect.square(48.0, 16.0, 16.0)
    assert all(not grid.is_floor(*world_to_cell(r.cx, r.cy, CELL)) for r in rects)
    with pytest.raises(ValueError):
        obstacles_from_grid(grid, 0)


def test_cell_conversions():
    assert cell_center(1, 1, CELL) == (48.0, 48.0)
    assert world_to_cell(48.0, 48.0, CELL) == (1, 1)
    assert world_to_cell(63.9, 32.0, CELL) == (1, 1)
    player = ControlledEntity(70.0, 10.0)
    assert player.cell(CELL) == (2, 0)
