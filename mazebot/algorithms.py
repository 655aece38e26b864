"""Algorithm interfaces and the simulator's built-in motor controller and position tracker."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any

from .host import Host
from .microsim import Robot
from .types import Map, RobotPosition, V2i


class RobotController(ABC):
    """Drives a robot from one simulation tick to the next."""

    @abstractmethod
    def setup(self, robot: Robot, data: Any) -> None:
        """Prepare the controller for the given robot."""

    @abstractmethod
    def loop(self, dtf: float) -> None:
        """Advance the controller by ``dtf`` seconds."""


class MoveState(IntEnum):
    IDLE = 0
    TURNING = 1
    MOVING = 2
    MOVING_GRID_POS = 3


class MotorController(ABC):
    """Turns movement commands into motor output."""

    @abstractmethod
    def setup(self, robot: Robot, data: Any) -> None:
        """Prepare the controller for the given robot."""

    @abstractmethod
    def update_movement(self, dt: float, position: RobotPosition) -> None:
        """Advance the current movement by ``dt`` seconds."""

    @property
    @abstractmethod
    def move_state(self) -> MoveState:
        """What the controller is currently doing."""

    @property
    @abstractmethod
    def distance_covered(self) -> float:
        """Distance travelled in the current move."""

    @property
    @abstractmethod
    def target_distance(self) -> float:
        """Distance the current move aims to travel."""

    @abstractmethod
    def set_gyro_null(self) -> None:
        """Take the current heading as the zero angle."""

    @abstractmethod
    def set_rpm(self, rpm: int) -> None:
        """Set the wheel speed."""

    @abstractmethod
    def stop(self) -> None:
        """Stop all movement."""

    @abstractmethod
    def move_distance(self, distance: float) -> None:
        """Drive straight ahead over ``distance``."""

    @abstractmethod
    def move_to_grid_pos(self, target: V2i, cell_size: float) -> None:
        """Drive to the centre of grid cell ``target``."""

    @abstractmethod
    def rotate_to_angle(self, angle: int) -> None:
        """Turn to an absolute heading in degrees."""

    @abstractmethod
    def rotate_degrees(self, degrees: int) -> None:
        """Turn by a relative number of degrees."""


class PositionTracker(ABC):
    """Keeps track of where the robot is."""

    @abstractmethod
    def setup(self, robot: Robot, data: Any) -> None:
        """Prepare the tracker for the given robot."""

    @abstractmethod
    def process(self, position: RobotPosition) -> None:
        """Update ``position`` in place."""


class ObjectDetector(ABC):
    """Records walls found by the robot's sensors in a map."""

    @abstractmethod
    def setup(self, robot: Robot, data: Any) -> None:
        """Prepare the detector for the given robot."""

    @abstractmethod
    def process(self, map: Map, position: RobotPosition) -> None:
        """Update ``map`` from the current sensor readings."""


class Pathfinder(ABC):
    """Plans a route through a maze map."""

    @abstractmethod
    def setup(self, robot: Robot, data: Any) -> None:
        """Prepare the pathfinder for the given robot."""

    @abstractmethod
    def pathfind(self, map: Map, position: RobotPosition, target: V2i) -> list[V2i] | None:
        """Return the grid cells from the robot's cell to the goal, or None if there is no route."""


class _SimulatorAlgorithm:
    """An algorithm instance that lives inside the simulator host."""

    def __init__(self, host: Host, algorithm: str) -> None:
        self._host = host
        self._handle = host.create_simulator_algorithm(algorithm)
        self._closed = False

    @property
    def handle(self) -> int:
        return self._handle

    def close(self) -> None:
        """Release the host-side algorithm; further calls do nothing."""
        if not self._closed:
            self._closed = True
            self._host.free_simulator_algorithm(self._handle)

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class SimulatorMotorController(_SimulatorAlgorithm, MotorController):
    """Motor controller implemented by the simulator host."""

    def __init__(self, host: Host, algorithm: str) -> None:
        super().__init__(host, algorithm)

    def setup(self, robot: Robot, data: Any) -> None:
        self._host.sim_motor_setup(self._handle, robot.handle, data)

    def update_movement(self, dt: float, position: RobotPosition) -> None:
        self._host.sim_motor_update_movement(self._handle, dt, position)

    @property
    def move_state(self) -> MoveState:
        return MoveState(self._host.sim_motor_current_state(self._handle))

    @property
    def distance_covered(self) -> float:
        return self._host.sim_motor_distance_covered(self._handle)

    @property
    def target_distance(self) -> float:
        return self._host.sim_motor_target_distance(self._handle)

    def set_gyro_null(self) -> None:
        self._host.sim_motor_set_gyro_null(self._handle)

    def set_rpm(self, rpm: int) -> None:
        self._host.sim_motor_set_rpm(self._handle, rpm)

    def stop(self) -> None:
        self._host.sim_motor_stop(self._handle)

    def move_distance(self, distance: float) -> None:
        self._host.sim_motor_move_distance(self._handle, distance)

    def move_to_grid_pos(self, target: V2i, cell_size: float) -> None:
        self._host.sim_motor_move_to_grid_pos(self._handle, target, cell_size)

    def rotate_to_angle(self, angle: int) -> None:
        self._host.log_int("Wanted Angle:", angle)
        self._host.sim_motor_rotate_to_angle(self._handle, angle)

    def rotate_degrees(self, degrees: int) -> None:
        self._host.sim_motor_rotate_degrees(self._handle, degrees)

    def close(self) -> None:
        super().close()

    def __enter__(self) -> SimulatorMotorController:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class SimulatorPositionTracker(_SimulatorAlgorithm, PositionTracker):
    """Position tracker implemented by the simulator host."""

    def __init__(self, host: Host, algorithm: str) -> None:
        super().__init__(host, algorithm)

    def setup(self, robot: Robot, data: Any) -> None:
        self._host.sim_position_tracker_setup(self._handle, robot.handle, data)

    def process(self, position: RobotPosition) -> None:
        self._host.sim_position_tracker_process(self._handle, position)

    def close(self) -> None:
        super().close()

    def __enter__(self) -> SimulatorPositionTracker:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()