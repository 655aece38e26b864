"""Wall detection from three distance sensors snapped to the robot's heading."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any

from .algorithms import ObjectDetector
from .microsim import Robot, SensorI32
from .types import CELL_SIZE_F, Guid, Map, RobotPosition, V2i

WALL_THRESHOLD = 80
"""Distance in millimetres below which a reading counts as a wall."""

FORWARD_SENSOR_GUID = Guid(4764948050219179759, 13563840741769542562)
LEFT_SENSOR_GUID = Guid(5421639628147193954, 6046799433377730472)
RIGHT_SENSOR_GUID = Guid(5124586844430470358, 6050595459198776716)


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


_SENSOR_DIRECTIONS = {
    Direction.NORTH: (V2i(0, 1), V2i(-1, 0), V2i(1, 0)),
    Direction.EAST: (V2i(1, 0), V2i(0, 1), V2i(0, -1)),
    Direction.SOUTH: (V2i(0, -1), V2i(1, 0), V2i(-1, 0)),
    Direction.WEST: (V2i(-1, 0), V2i(0, -1), V2i(0, 1)),
}


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _is_wall(reading: int) -> bool:
    return reading != -1 and reading < WALL_THRESHOLD


class ObjectDetection(ObjectDetector):
    """Marks walls in the robot's cell ahead, left and right of its heading."""

    def __init__(self) -> None:
        self._forward: SensorI32 | None = None
        self._left: SensorI32 | None = None
        self._right: SensorI32 | None = None

    def setup(self, robot: Robot, data: Any) -> None:
        self._forward = robot.find_component(FORWARD_SENSOR_GUID).to_sensor_i32()
        self._left = robot.find_component(LEFT_SENSOR_GUID).to_sensor_i32()
        self._right = robot.find_component(RIGHT_SENSOR_GUID).to_sensor_i32()

    def process(self, map: Map, position: RobotPosition) -> None:
        if self._forward is None or self._left is None or self._right is None:
            raise RuntimeError("setup must be called before process")
        grid_pos = (position.position / CELL_SIZE_F).round_to_v2i()

        front = self._forward.read_value()
        left = self._left.read_value()
        right = self._right.read_value()

        normalized = position.angle % 360
        heading = _round_half_away(normalized / 90.0)
        zero = V2i.zero()
        forward_dir, left_dir, right_dir = _SENSOR_DIRECTIONS.get(heading, (zero, zero, zero))

        cell = map.get_cell(grid_pos)
        cell.set_wall_in_dir(forward_dir, _is_wall(front))
        cell.set_wall_in_dir(left_dir, _is_wall(left))
        cell.set_wall_in_dir(right_dir, _is_wall(right))