"""A* search over the discovered part of a maze map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .algorithms import Pathfinder
from .microsim import Robot
from .types import CELL_SIZE_F, Map, RobotPosition, V2i


def manhattan_distance(node: V2i, target: V2i) -> int:
    return abs(node.x - target.x) + abs(node.y - target.y)


@dataclass(eq=False)
class NodeData:
    """Search state of one visited cell."""

    position: V2i
    origin: V2i
    depth: int
    cost_g: int
    cost_f: int


class Astar(Pathfinder):
    """Best-first search ordered by the heuristic distance to the target."""

    def __init__(self) -> None:
        self._heuristic: Callable[[V2i, V2i], int] = manhattan_distance
        self.robot: Robot | None = None
        self.data: Any = None

    def setup(self, robot: Robot, data: Any) -> None:
        """Remember the robot and setup data; the search itself needs neither."""
        self.robot = robot
        self.data = data

    def pathfind(self, map: Map, position: RobotPosition, target: V2i) -> list[V2i] | None:
        start = (position.position / CELL_SIZE_F).round_to_v2i()
        cost = self._heuristic(start, target)
        nodes = {start: NodeData(start, start, 0, cost, cost)}
        queue = [nodes[start]]

        while queue:
            node = queue[0]
            if node.position == target:
                break
            queue = [queued for queued in queue if queued is not node]
            for direction in (V2i.up(), V2i.right(), V2i.down(), V2i.left()):
                self._check_position(queue, nodes, node, map, direction, target)

        if not queue:
            return None

        final = queue[0]
        path = [final.position]
        current = final.position
        for _ in range(final.depth):
            current = nodes[current].origin
            path.append(current)
        path.reverse()
        return path

    def _check_position(
        self,
        queue: list[NodeData],
        nodes: dict[V2i, NodeData],
        current: NodeData,
        map: Map,
        direction: V2i,
        target: V2i,
    ) -> None:
        previous = current.position
        if map.get_cell(previous).is_wall_in_dir(direction):
            return

        position = previous + direction
        if not map.is_in_bounds(position):
            return
        cell = map.get_cell(position)
        if not cell.discovered:
            return

        known = nodes.get(position)
        if known is not None:
            new_cost_f = current.cost_f + known.cost_g
            if known.cost_f > new_cost_f:
                known.cost_f = new_cost_f
                known.origin = current.position
                known.depth = current.depth + 1
            return

        cell.wall_highlight = True
        cost_g = self._heuristic(position, target)
        node = NodeData(position, previous, current.depth + 1, cost_g, current.cost_f + cost_g)
        nodes[position] = node
        _insert_ordered(queue, node)


def _insert_ordered(queue: list[NodeData], node: NodeData) -> None:
    # A node placed by cost is also appended at the back; removal drops every copy.
    for index, queued in enumerate(queue):
        if queued.cost_g >= node.cost_g:
            queue.insert(index, node)
            break
    queue.append(node)