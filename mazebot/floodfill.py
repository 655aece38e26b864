"""Flood fills that find the way to the nearest unexplored cell."""

from __future__ import annotations

from collections import deque
from typing import Any

from .algorithms import Pathfinder
from .microsim import Robot
from .types import CELL_SIZE_F, Map, MapCell, RobotPosition, V2i


def _neighbours(cell: MapCell) -> tuple[tuple[V2i, bool], ...]:
    return (
        (V2i.up(), cell.wall_north),
        (V2i.right(), cell.wall_east),
        (V2i.down(), cell.wall_south),
        (V2i.left(), cell.wall_west),
    )


def _explore(map: Map, start: V2i, *, depth_first: bool) -> list[V2i] | None:
    found: dict[V2i, tuple[V2i, int]] = {start: (start, 0)}
    frontier = deque([start])
    if not depth_first:
        map.get_cell(start).wall_highlight = True

    while frontier:
        position = frontier[-1] if depth_first else frontier[0]
        cell = map.get_cell(position)
        if depth_first:
            cell.wall_highlight = True
        if not cell.discovered:
            return _trace(found, position)

        if depth_first:
            frontier.pop()
        else:
            frontier.popleft()

        depth = found[position][1]
        for direction, blocked in _neighbours(cell):
            neighbour = position + direction
            if blocked or neighbour in found or not map.is_in_bounds(neighbour):
                continue
            frontier.append(neighbour)
            found[neighbour] = (position, depth + 1)
            if not depth_first:
                map.get_cell(neighbour).wall_highlight = True
    return None


def _trace(found: dict[V2i, tuple[V2i, int]], end: V2i) -> list[V2i]:
    path = [end]
    position = end
    for _ in range(found[end][1]):
        position = found[position][0]
        path.append(position)
    path.reverse()
    return path


class _FillBase(Pathfinder):
    def __init__(self) -> None:
        self.robot: Robot | None = None
        self.data: Any = None

    def _remember(self, robot: Robot, data: Any) -> None:
        self.robot = robot
        self.data = data


class Floodfill(_FillBase):
    """Breadth-first search for the closest undiscovered cell; the target is ignored."""

    def setup(self, robot: Robot, data: Any) -> None:
        """Remember the robot and setup data; the search itself needs neither."""
        self._remember(robot, data)

    def pathfind(self, map: Map, position: RobotPosition, target: V2i) -> list[V2i] | None:
        start = (position.position / CELL_SIZE_F).round_to_v2i()
        return _explore(map, start, depth_first=False)


class FloodfillStack(_FillBase):
    """Depth-first search for an undiscovered cell; the target is ignored."""

    def setup(self, robot: Robot, data: Any) -> None:
        """Remember the robot and setup data; the search itself needs neither."""
        self._remember(robot, data)

    def pathfind(self, map: Map, position: RobotPosition, target: V2i) -> list[V2i] | None:
        start = (position.position / CELL_SIZE_F).round_to_v2i()
        return _explore(map, start, depth_first=True)