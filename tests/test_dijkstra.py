from collections import deque

import pytest

from mazebot.dijkstra import Dijkstra, GraphConnection, add_optimized_nodes
from mazebot.types import Map, RobotPosition, V2i


def open_grid(width, height):
    grid = Map.create(V2i(width, height))
    for y in range(height):
        for x in range(width):
            cell = grid.get_cell(V2i(x, y))
            cell.discovered = True
            cell.wall_west = x == 0
            cell.wall_east = x == width - 1
            cell.wall_south = y == 0
            cell.wall_north = y == height - 1
    return grid


def add_wall(grid, cell, direction):
    grid.get_cell(cell).set_wall_in_dir(direction, True)
    grid.get_cell(cell + direction).set_wall_in_dir(-direction, True)


def assert_straight_runs(grid, path):
    for a, b in zip(path, path[1:]):
        step = b - a
        assert (step.x == 0) != (step.y == 0)
        unit = V2i((step.x > 0) - (step.x < 0), (step.y > 0) - (step.y < 0))
        cell = a
        while cell != b:
            assert not grid.get_cell(cell).is_wall_in_dir(unit)
            cell = cell + unit


def test_corridor_is_one_straight_run():
    grid = open_grid(1, 4)
    path = Dijkstra().pathfind(grid, RobotPosition(), V2i(0, 3))
    assert path == [V2i(0, 0), V2i(0, 3)]


def test_start_equals_target():
    grid = open_grid(2, 2)
    assert Dijkstra().pathfind(grid, RobotPosition(V2i(180, 0), 0), V2i(1, 0)) == [V2i(1, 0)]


def test_heading_east_prefers_going_east_first():
    grid = open_grid(2, 2)
    path = Dijkstra().pathfind(grid, RobotPosition(V2i(0, 0), 90), V2i(1, 1))
    assert path == [V2i(0, 0), V2i(1, 0), V2i(1, 1)]


def test_heading_north_prefers_going_north_first():
    grid = open_grid(2, 2)
    path = Dijkstra().pathfind(grid, RobotPosition(V2i(0, 0), 180), V2i(1, 1))
    assert path == [V2i(0, 0), V2i(0, 1), V2i(1, 1)]


def test_path_through_walls_is_made_of_straight_runs():
    grid = open_grid(3, 3)
    add_wall(grid, V2i(0, 0), V2i.right())
    add_wall(grid, V2i(1, 1), V2i.down())
    path = Dijkstra().pathfind(grid, RobotPosition(), V2i(2, 0))
    assert path[0] == V2i(0, 0)
    assert path[-1] == V2i(2, 0)
    assert_straight_runs(grid, path)


def test_undiscovered_neighbour_is_reachable():
    grid = open_grid(1, 3)
    grid.get_cell(V2i(0, 2)).discovered = False
    path = Dijkstra().pathfind(grid, RobotPosition(), V2i(0, 2))
    assert path == [V2i(0, 0), V2i(0, 2)]


def test_walled_off_target_has_no_path():
    grid = open_grid(1, 3)
    add_wall(grid, V2i(0, 1), V2i.up())
    assert Dijkstra().pathfind(grid, RobotPosition(), V2i(0, 2)) is None


def test_target_outside_map_has_no_path():
    grid = open_grid(2, 2)
    assert Dijkstra().pathfind(grid, RobotPosition(), V2i(5, 5)) is None


def test_start_cell_is_highlighted():
    grid = open_grid(2, 2)
    Dijkstra().pathfind(grid, RobotPosition(), V2i(1, 1))
    assert grid.get_cell(V2i(0, 0)).wall_highlight


def test_add_optimized_nodes_queues_new_node():
    graph = {V2i(0, 0): []}
    queue = deque()
    add_optimized_nodes(graph, queue, V2i(0, 0), V2i(0, 3))
    assert list(queue) == [V2i(0, 3)]
    assert graph[V2i(0, 0)] == [GraphConnection(8, V2i(0, 0), V2i(0, 3))]


def test_add_optimized_nodes_skips_known_node():
    graph = {V2i(0, 0): [], V2i(1, 0): []}
    queue = deque()
    add_optimized_nodes(graph, queue, V2i(0, 0), V2i(1, 0))
    assert not queue
    assert graph[V2i(0, 0)][0].end == V2i(1, 0)


def test_add_optimized_nodes_needs_start_in_graph():
    with pytest.raises(KeyError):
        add_optimized_nodes({}, deque(), V2i(0, 0), V2i(1, 0))