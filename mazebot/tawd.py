"""Wall detection that projects each sensor's hit point onto the cell edges."""

from __future__ import annotations

from typing import Any

from .algorithms import ObjectDetector
from .host import Host
from .microsim import Robot, SensorI32
from .objectdetection import FORWARD_SENSOR_GUID, LEFT_SENSOR_GUID, RIGHT_SENSOR_GUID
from .types import CELL_SIZE_F, DEG2RAD, Color, Map, RobotPosition, V2f, V2i, V3f


def _mark(map: Map, cell: V2i, direction: V2i, wall: bool) -> None:
    if map.is_in_bounds(cell):
        map.get_cell(cell).set_wall_in_dir(direction, wall)


def process_wall_hit(
    host: Host,
    sensor_value: float,
    sensor_offset: V2f,
    sensor_dir: V2f,
    robot_position: RobotPosition,
    map: Map,
) -> None:
    """Set or clear the wall a sensor reading points at; -1 means nothing in range."""
    angle_rad = float(-robot_position.angle) * DEG2RAD
    robot = robot_position.position.to_v2f()
    grid_pos = (robot / CELL_SIZE_F).round_to_v2i()
    hit_pos = robot + (sensor_offset + sensor_dir * sensor_value).rotated(angle_rad)
    lift = V3f(0.0, 0.1, 0.0)

    host.draw_ray_3d(
        (robot + sensor_offset.rotated(angle_rad)).to_flat_v3f() / 1000 + lift,
        (sensor_dir.rotated(angle_rad) * sensor_value).to_flat_v3f() / 1000 + lift,
        0,
        Color.green(),
    )

    if sensor_value == -1:
        sensor_pos = robot + sensor_offset.rotated(angle_rad)
        dir_rotated = sensor_dir.rotated(angle_rad)
        local_pos = sensor_pos - grid_pos.to_v2f() * CELL_SIZE_F
        dir_to_wall = dir_rotated.explode().normalize()
        dir_along_wall = V2f(dir_to_wall.y, -dir_to_wall.x)

        len_to_wall = CELL_SIZE_F / 2 - dir_to_wall.dot(local_pos)
        len_across_wall = dir_to_wall.signed_angle(dir_rotated)
        free_pos = sensor_pos + dir_to_wall * len_to_wall + dir_along_wall * len_across_wall

        host.draw_line_2d(sensor_pos / 1000, free_pos / 1000, 0, Color.green())
        host.draw_ray_3d(
            free_pos.to_flat_v3f() / 1000 + V3f(0.0, 0.2, 0.0), V3f(0.0, 1.0, 0.0), 0, Color.red()
        )
        halves = (free_pos / (CELL_SIZE_F / 2)).round_to_v2i() + V2i.one()
        idx = halves % 2
        direction = V2i(idx.y, idx.x)
        if idx.x == idx.y:
            return
        wall_dir = dir_to_wall.round_to_v2i().abs()
        _mark(map, halves // 2, -wall_dir, False)
        _mark(map, halves // 2 - direction, wall_dir, False)
        return

    halves = (hit_pos / (CELL_SIZE_F / 2)).round_to_v2i() + V2i.one()
    host.draw_line_2d(
        (robot + sensor_offset.rotated(angle_rad)) / 1000, hit_pos / 1000, 0, Color.red()
    )
    idx = halves % 2
    if idx.x == idx.y:
        return
    direction = V2i(idx.y, idx.x)
    _mark(map, halves // 2, -direction.abs(), True)
    _mark(map, halves // 2 - direction, direction.abs(), True)


_FORWARD = (V2f(0.0, 67.5), V2f(0.0, 1.0))
_LEFT = (V2f(-25.8, 58.3), V2f(-1.0, 0.0))
_RIGHT = (V2f(25.8, 58.3), V2f(1.0, 0.0))


class Tawd(ObjectDetector):
    """Object detector using the exact sensor mounting positions."""

    def __init__(self) -> None:
        self._host: Host | None = None
        self._sensors: list[tuple[SensorI32, tuple[V2f, V2f]]] = []

    def setup(self, robot: Robot, data: Any) -> None:
        self._host = robot.host
        self._sensors = [
            (robot.find_component(FORWARD_SENSOR_GUID).to_sensor_i32(), _FORWARD),
            (robot.find_component(LEFT_SENSOR_GUID).to_sensor_i32(), _LEFT),
            (robot.find_component(RIGHT_SENSOR_GUID).to_sensor_i32(), _RIGHT),
        ]

    def process(self, map: Map, position: RobotPosition) -> None:
        if self._host is None:
            raise RuntimeError("setup must be called before process")
        for sensor, (offset, direction) in self._sensors:
            process_wall_hit(
                self._host, float(sensor.read_value()), offset, direction, position, map
            )