"""Simple robot controller that wanders the maze, preferring to drive straight."""

from __future__ import annotations

import math
import random
from enum import Enum, auto
from typing import Any

from .algorithms import MoveState, RobotController, SimulatorMotorController, SimulatorPositionTracker
from .host import Host
from .microsim import Robot, SensorI32
from .objectdetection import FORWARD_SENSOR_GUID, LEFT_SENSOR_GUID, RIGHT_SENSOR_GUID
from .types import DEG2RAD, RAD2DEG, Color, RobotPosition, V2f, V2i, V3f


class State(Enum):
    START = auto()
    START_ROTATE = auto()
    START_MOVING = auto()
    ROTATING = auto()
    MOVING = auto()
    IDLE = auto()


def _round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _open(reading: int) -> bool:
    return reading == 0 or reading < 60


class WallFollowerRobotController(RobotController):
    """Moves cell by cell, turning to a random free side when blocked ahead."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.state = State.START
        self.robot_position = RobotPosition()
        self._host: Host | None = None
        self._sensors: tuple[SensorI32, SensorI32, SensorI32] | None = None
        self._motor: SimulatorMotorController | None = None
        self._tracker: SimulatorPositionTracker | None = None
        self._target_grid_pos = V2f(0.0, 0.0)

    def setup(self, robot: Robot, data: Any) -> None:
        self._host = robot.host
        self._sensors = (
            robot.find_component(FORWARD_SENSOR_GUID).to_sensor_i32(),
            robot.find_component(LEFT_SENSOR_GUID).to_sensor_i32(),
            robot.find_component(RIGHT_SENSOR_GUID).to_sensor_i32(),
        )
        self._motor = SimulatorMotorController(robot.host, "DefaultMotorController")
        self._tracker = SimulatorPositionTracker(robot.host, "DefaultPositionTracker")
        self._motor.setup(robot, None)
        self._tracker.setup(robot, None)
        self._motor.set_gyro_null()
        self._motor.set_rpm(40)
        self.state = State.START

    def close(self) -> None:
        """Release the simulator-side algorithms."""
        for part in (self._motor, self._tracker):
            if part is not None:
                part.close()

    def loop(self, dtf: float) -> None:
        if self._motor is None or self._tracker is None or self._host is None:
            raise RuntimeError("setup must be called before loop")
        motor, host = self._motor, self._host
        self._tracker.process(self.robot_position)
        motor.update_movement(dtf, self.robot_position)
        position = self.robot_position.position
        angle = self.robot_position.angle
        idle = motor.move_state == MoveState.IDLE

        if self.state is State.START:
            self._target_grid_pos = (position / 180.0).round()
            target_dir = (self._target_grid_pos * 180).round_to_v2i() - position
            motor.rotate_degrees(_round(math.atan2(target_dir.y, target_dir.x) * DEG2RAD))
            host.log("StartRotate")
            self.state = State.START_ROTATE
        elif self.state is State.START_ROTATE:
            if idle:
                target_dir = (self._target_grid_pos * 180).round_to_v2i() - position
                motor.move_distance(target_dir.length())
                host.log("StartMoving")
                self.state = State.START_MOVING
        elif self.state is State.START_MOVING:
            if idle:
                motor.rotate_to_angle(_trunc_div(angle, 90) * 90)
                host.log("Moving")
                self.state = State.MOVING
        elif self.state is State.ROTATING:
            if idle:
                grid_pos = (position / 180.0).round()
                target_pos = ((grid_pos + V2f.from_angle(angle)) * 180).round_to_v2i()
                motor.move_distance((target_pos - position).length())
                host.log("Moving")
                self.state = State.MOVING
        elif self.state is State.MOVING:
            if idle:
                host.log("Idle")
                self.state = State.IDLE
        elif self.state is State.IDLE:
            self._choose_next_cell(host, position, angle)

    def _choose_next_cell(self, host: Host, position: V2i, angle: int) -> None:
        assert self._sensors is not None and self._motor is not None
        forward, left, right = (sensor.read_value() for sensor in self._sensors)
        grid_pos = (position / 180.0).round()

        def towards(offset: int) -> V2i:
            step = V2f.from_angle(angle + offset).explode().normalize()
            return (grid_pos + step).round_to_v2i() * 180

        if forward == 0 or forward > 60:
            target_pos = towards(0)
            host.log("Forward")
        else:
            sides = [(left, -90, "-90"), (right, 90, "+90")]
            if _round(self._rng.random()) == 1:
                sides.reverse()
            for reading, offset, label in sides:
                if _open(reading):
                    break
            else:
                offset, label = 180, "+180"
            target_pos = towards(offset)
            host.log(label)

        target_dir = target_pos - position
        host.draw_ray_2d(position.to_v2f() / 1000.0, target_dir.to_v2f() / 1000.0, 2, Color.green())
        host.draw_ray_3d(
            target_pos.to_v2f().to_flat_v3f() / 1000.0, V3f(0.0, 1.0, 0.0), 2, Color.red()
        )
        self._motor.rotate_degrees(_round(math.atan2(target_dir.y, target_dir.x) * RAD2DEG))
        host.log_v2i("Target Dir:", target_dir)
        host.log("Rotating")
        self.state = State.ROTATING