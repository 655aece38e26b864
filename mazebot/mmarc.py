"""Maze-solving robot controller: explore, return, then speed-run to the goal."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from .algorithms import (
    MotorController,
    MoveState,
    ObjectDetector,
    Pathfinder,
    PositionTracker,
    RobotController,
    SimulatorMotorController,
    SimulatorPositionTracker,
)
from .dijkstra import Dijkstra
from .floodfill import Floodfill
from .host import Host
from .microsim import Robot
from .tawd import Tawd
from .types import CELL_SIZE_F, Map, RobotPosition, V2i


class RobotState(Enum):
    RESET_MEMORY = auto()
    EXPLORE = auto()
    RETURN = auto()
    RESET_POSITION = auto()
    WAIT_SPEEDRUN = auto()
    SPEEDRUN = auto()
    WAIT_END_SPEEDRUN = auto()
    RETURN_AFTER_SPEEDRUN = auto()
    RESET_AFTER_SPEEDRUN = auto()
    WAIT_FOR_RESET = auto()


_WAIT_SECONDS = 3.0


class MMarc(RobotController):
    """State machine driving a robot through a 6x6 maze."""

    TARGET_POS = V2i(5, 5)
    MAZE_SIZE = V2i(6, 6)

    def __init__(self) -> None:
        self.map = Map.create(self.MAZE_SIZE)
        self.robot_position = RobotPosition()
        self.state = RobotState.RESET_MEMORY
        self._host: Host | None = None
        self._detector: ObjectDetector | None = None
        self._motor: SimulatorMotorController | None = None
        self._tracker: SimulatorPositionTracker | None = None
        self._pathfinder: Pathfinder = Dijkstra()
        self._floodfill: Pathfinder = Floodfill()
        self._path: list[V2i] = []
        self._path_index = 0
        self._timer = -1.0

    def setup(self, robot: Robot, data: Any) -> None:
        self._host = robot.host
        self._detector = Tawd()
        self._motor = SimulatorMotorController(robot.host, "DefaultMotorController")
        self._tracker = SimulatorPositionTracker(robot.host, "DefaultPositionTracker")
        self.map = Map.create(self.MAZE_SIZE)

        for part in (self._detector, self._motor, self._tracker, self._pathfinder, self._floodfill):
            part.setup(robot, None)

        self._path = []
        self._path_index = 0
        self.state = RobotState.RESET_MEMORY
        self._motor.set_gyro_null()
        self._motor.set_rpm(40)

    @property
    def _motor_controller(self) -> MotorController:
        if self._motor is None:
            raise RuntimeError("setup must be called before loop")
        return self._motor

    def loop(self, dtf: float) -> None:
        motor = self._motor_controller
        assert self._tracker is not None and self._detector is not None
        self._tracker.process(self.robot_position)
        self._detector.process(self.map, self.robot_position)

        state = self.state
        if state is RobotState.RESET_MEMORY:
            self._reset_memory()
            self.state = RobotState.EXPLORE
        elif state is RobotState.EXPLORE:
            if not self._explore_loop():
                self.state = RobotState.RETURN
        elif state is RobotState.RETURN:
            if not self._move_to_point_loop(V2i.zero()):
                self.state = RobotState.RESET_POSITION
        elif state is RobotState.RESET_POSITION:
            if not self._reset_angle_loop():
                motor.stop()
                self.state = RobotState.WAIT_SPEEDRUN
        elif state is RobotState.WAIT_SPEEDRUN:
            if not self._timed_wait(dtf):
                self.state = RobotState.SPEEDRUN
        elif state is RobotState.SPEEDRUN:
            if not self._move_to_point_loop(self.TARGET_POS):
                self.state = RobotState.WAIT_END_SPEEDRUN
        elif state is RobotState.WAIT_END_SPEEDRUN:
            if not self._timed_wait(dtf):
                self.state = RobotState.RETURN_AFTER_SPEEDRUN
        elif state is RobotState.RETURN_AFTER_SPEEDRUN:
            if not self._move_to_point_loop(V2i.zero()):
                self.state = RobotState.RESET_AFTER_SPEEDRUN
        elif state is RobotState.RESET_AFTER_SPEEDRUN:
            if not self._reset_angle_loop():
                self.state = RobotState.WAIT_FOR_RESET
        elif state is RobotState.WAIT_FOR_RESET:
            if not self._timed_wait(dtf):
                self.state = RobotState.RESET_MEMORY

        motor.update_movement(dtf, self.robot_position)

    def close(self) -> None:
        """Release the simulator-side algorithms."""
        for part in (self._motor, self._tracker):
            if part is not None:
                part.close()

    def _grid_pos(self) -> V2i:
        return (self.robot_position.position / CELL_SIZE_F).round_to_v2i()

    def _busy(self) -> bool:
        return self._motor_controller.move_state != MoveState.IDLE

    def _follow_path(self, grid_pos: V2i) -> bool:
        if self._path_index >= len(self._path) or self._path[self._path_index - 1] != grid_pos:
            self._path = []
            self._path_index = 0
            return True
        self._motor_controller.move_to_grid_pos(self._path[self._path_index], CELL_SIZE_F)
        self._path_index += 1
        return True

    def _explore_loop(self) -> bool:
        if self._busy():
            return True
        grid_pos = self._grid_pos()
        self.map.get_cell(grid_pos).discovered = True

        if self._path_index >= len(self._path):
            self.map.reset_highlights()
            path = self._floodfill.pathfind(self.map, self.robot_position, V2i.zero())
            assert self._host is not None
            self._host.display_map(self.map)
            self._path = path or []
            self._path_index = 1
            if path is None:
                return False
        return self._follow_path(grid_pos)

    def _reset_angle_loop(self) -> bool:
        if self._busy():
            return True
        if abs(abs(180 - self.robot_position.angle) % 360 - 180) < 3:
            return False
        self._motor_controller.rotate_to_angle(0)
        return True

    def _timed_wait(self, dtf: float) -> bool:
        if self._timer == -1:
            self._timer = _WAIT_SECONDS
        if self._timer > 0:
            self._timer -= dtf
            return True
        self._timer = -1.0
        return False

    def _move_to_point_loop(self, point: V2i) -> bool:
        if self._busy():
            return True
        if self._path_index >= len(self._path):
            self.map.reset_highlights()
            path = self._pathfinder.pathfind(self.map, self.robot_position, point)
            self._path = path or []
            self._path_index = 1
            if len(self._path) <= 1:
                return False
        return self._follow_path(self._grid_pos())

    def _reset_memory(self) -> None:
        self.robot_position = RobotPosition()
        self._path = []
        self._path_index = 0
        self.map.clear()
        start = self.map.get_cell(V2i.zero())
        start.discovered = True
        start.wall_north = False
        start.wall_east = False
        start.wall_south = True
        start.wall_west = True