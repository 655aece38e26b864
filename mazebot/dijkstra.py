"""Dijkstra search over straight-line segments of a maze map."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Any, NamedTuple

from .algorithms import Pathfinder
from .microsim import Robot
from .types import CELL_SIZE_F, Map, RobotPosition, V2f, V2i

# Order in which the directions are tried from every node.
_DIRECTIONS = (V2i.down(), V2i.left(), V2i.up(), V2i.right())


@dataclass
class GraphConnection:
    """A straight run from ``start`` to ``end`` with its cost."""

    cost_g: int
    start: V2i
    end: V2i


class _NodeCost(NamedTuple):
    cost_f: int
    depth: int
    parent: V2i


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _connection_cost(start: V2i, end: V2i) -> int:
    return int((start - end).length()) * Dijkstra.CELL_COST + Dijkstra.BASE_COST


def add_optimized_nodes(
    graph: dict[V2i, list[GraphConnection]],
    nodes_to_visit: deque[V2i],
    start: V2i,
    end: V2i,
) -> None:
    """Queue ``end`` if it is new and connect ``start`` to it; ``start`` must be in the graph."""
    if end not in graph:
        nodes_to_visit.append(end)
    graph[start].append(GraphConnection(_connection_cost(start, end), start, end))


class Dijkstra(Pathfinder):
    """Shortest path where each straight run costs a fixed amount plus its length."""

    BASE_COST = 5
    CELL_COST = 1

    def __init__(self) -> None:
        self.robot: Robot | None = None
        self.data: Any = None

    def setup(self, robot: Robot, data: Any) -> None:
        """Remember the robot and setup data; the search itself needs neither."""
        self.robot = robot
        self.data = data

    def pathfind(self, map: Map, position: RobotPosition, target: V2i) -> list[V2i] | None:
        start = (position.position / CELL_SIZE_F).round_to_v2i()
        graph = self._build_graph(map, start)
        self._prefer_heading(graph[start], position.angle)
        costs = self._relax(graph, start)
        if target not in costs:
            return None

        path = [target]
        node = target
        for _ in range(costs[target].depth):
            node = costs[node].parent
            path.append(node)
        path.reverse()
        return path

    @staticmethod
    def _build_graph(map: Map, start: V2i) -> dict[V2i, list[GraphConnection]]:
        graph: dict[V2i, list[GraphConnection]] = {start: []}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            node_cell = map.get_cell(node)
            node_cell.wall_highlight = True

            for direction in _DIRECTIONS:
                if node_cell.is_wall_in_dir(direction):
                    continue
                current, cell = node, node_cell
                while cell.discovered:
                    following = current + direction
                    if not map.is_in_bounds(following):
                        break
                    following_cell = map.get_cell(following)
                    if following not in graph:
                        queue.append(following)
                        graph[following] = []
                    graph[node].append(
                        GraphConnection(_connection_cost(node, following), node, following)
                    )
                    if following_cell.is_wall_in_dir(direction):
                        break
                    current, cell = following, following_cell
        return graph

    def _prefer_heading(self, connections: list[GraphConnection], angle: int) -> None:
        """Make runs leaving the start straight ahead cheaper."""
        heading = V2f.from_angle(int(_round_half_away(angle / 90.0)) * 90).round_to_v2i()
        for connection in connections:
            run = (connection.end - connection.start).to_v2f().normalize().round_to_v2i()
            if run == heading:
                connection.cost_g -= self.BASE_COST

    @staticmethod
    def _relax(graph: dict[V2i, list[GraphConnection]], start: V2i) -> dict[V2i, _NodeCost]:
        costs = {start: _NodeCost(0, 0, start)}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            cost = costs[node]
            for connection in graph.get(node, ()):
                new_cost = _NodeCost(cost.cost_f + connection.cost_g, cost.depth + 1, node)
                known = costs.get(connection.end)
                if known is None:
                    costs[connection.end] = new_cost
                    queue.append(connection.end)
                elif new_cost.cost_f < known.cost_f:
                    costs[connection.end] = new_cost
        return costs