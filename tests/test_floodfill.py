import pytest

from mazebot.floodfill import Floodfill, FloodfillStack
from mazebot.types import Map, RobotPosition, V2i


def corridor(length, undiscovered=()):
    grid = Map.create(V2i(1, length))
    for y in range(length):
        cell = grid.get_cell(V2i(0, y))
        cell.discovered = y not in undiscovered
        cell.wall_east = True
        cell.wall_west = True
    grid.get_cell(V2i(0, 0)).wall_south = True
    grid.get_cell(V2i(0, length - 1)).wall_north = True
    return grid


def assert_walkable(grid, path):
    for a, b in zip(path, path[1:]):
        step = b - a
        assert step.length_sq() == 1
        assert not grid.get_cell(a).is_wall_in_dir(step)


@pytest.mark.parametrize("finder", [Floodfill(), FloodfillStack()])
def test_leads_to_undiscovered_cell(finder):
    grid = corridor(3, undiscovered=(2,))
    path = finder.pathfind(grid, RobotPosition(), V2i(0, 0))
    assert path == [V2i(0, 0), V2i(0, 1), V2i(0, 2)]
    assert_walkable(grid, path)


@pytest.mark.parametrize("finder", [Floodfill(), FloodfillStack()])
def test_target_is_ignored(finder):
    first = finder.pathfind(corridor(3, undiscovered=(2,)), RobotPosition(), V2i(0, 0))
    second = finder.pathfind(corridor(3, undiscovered=(2,)), RobotPosition(), V2i(5, 9))
    assert first == second


@pytest.mark.parametrize("finder", [Floodfill(), FloodfillStack()])
def test_fully_explored_map_has_no_path(finder):
    assert finder.pathfind(corridor(4), RobotPosition(), V2i(0, 3)) is None


@pytest.mark.parametrize("finder", [Floodfill(), FloodfillStack()])
def test_undiscovered_start_is_its_own_path(finder):
    grid = corridor(3, undiscovered=(1,))
    assert finder.pathfind(grid, RobotPosition(V2i(0, 180), 0), V2i(0, 0)) == [V2i(0, 1)]


def test_breadth_first_tries_up_before_down():
    grid = corridor(5, undiscovered=(0, 4))
    path = Floodfill().pathfind(grid, RobotPosition(V2i(0, 360), 0), V2i(0, 0))
    assert path == [V2i(0, 2), V2i(0, 3), V2i(0, 4)]


def test_depth_first_follows_last_pushed_direction():
    grid = corridor(5, undiscovered=(0, 4))
    path = FloodfillStack().pathfind(grid, RobotPosition(V2i(0, 360), 0), V2i(0, 0))
    assert path == [V2i(0, 2), V2i(0, 1), V2i(0, 0)]


def test_breadth_first_highlights_queued_cells():
    grid = corridor(5, undiscovered=(0, 4))
    Floodfill().pathfind(grid, RobotPosition(V2i(0, 360), 0), V2i(0, 0))
    assert all(grid.get_cell(V2i(0, y)).wall_highlight for y in range(5))


def test_depth_first_highlights_only_visited_cells():
    grid = corridor(5, undiscovered=(0, 4))
    FloodfillStack().pathfind(grid, RobotPosition(V2i(0, 360), 0), V2i(0, 0))
    highlighted = [y for y in range(5) if grid.get_cell(V2i(0, y)).wall_highlight]
    assert highlighted == [0, 1, 2]


@pytest.mark.parametrize("finder", [Floodfill(), FloodfillStack()])
def test_missing_boundary_walls_do_not_leave_the_map(finder):
    grid = Map.create(V2i(2, 1))
    grid.get_cell(V2i(0, 0)).discovered = True
    grid.get_cell(V2i(1, 0)).discovered = True
    assert finder.pathfind(grid, RobotPosition(), V2i(0, 0)) is None