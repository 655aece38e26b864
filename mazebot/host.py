"""Access to the functions the simulator host provides to algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from .types import Color, Guid, Map, RobotPosition, V2f, V2i, V3f, V3i


class HostError(RuntimeError):
    """The host did not provide a required function."""


class NativeObjectType(IntEnum):
    OBJECT_DETECTOR = 0
    ROBOT_CONTROLLER = 1
    PATHFINDER = 2


@dataclass(frozen=True)
class NativeObjectFactory:
    """Describes one algorithm the plugin offers to the host."""

    type: NativeObjectType
    idx: int
    class_name: str
    name: str


_FUNCTION_NAMES = (
    "Plugin::RegisterData",
    "Plugin::RegisterType",
    "Debug::Log",
    "Debug::Logi",
    "Debug::Logf",
    "Debug::LogV2f",
    "Debug::LogV2i",
    "Debug::DrawLine2D",
    "Debug::DrawLine3D",
    "Debug::DrawRay2D",
    "Debug::DrawRay3D",
    "Debug::DisplayMap",
    "Debug::ClearMap",
    "Microsim::Sensor_i32_ReadValue",
    "Microsim::Sensor_f32_ReadValue",
    "Microsim::Sensor_v3i_ReadValue",
    "Microsim::Motor_CurrentThrottle",
    "Microsim::Motor_SetThrottle",
    "Microsim::Robot_FindComponent",
    "Microsim::SimMotorController_Setup",
    "Microsim::SimMotorController_UpdateMovement",
    "Microsim::SimMotorController_GetCurrentState",
    "Microsim::SimMotorController_GetDistanceCovered",
    "Microsim::SimMotorController_GetTargetDistance",
    "Microsim::SimMotorController_SetGyroNull",
    "Microsim::SimMotorController_Stop",
    "Microsim::SimMotorController_SetRpm",
    "Microsim::SimMotorController_MoveDistance",
    "Microsim::SimMotorController_MoveToGridPos",
    "Microsim::SimMotorController_RotateToAngle",
    "Microsim::SimMotorController_RotateDegrees",
    "Microsim::SimPositionTracker_Setup",
    "Microsim::SimPositionTracker_Process",
    "Microsim::CreateSimulatorAlgorithm",
    "Microsim::FreeSimulatorAlgorithm",
)


class Host:
    """Resolves every host function by name up front and forwards calls to them."""

    def __init__(self, get_function: Callable[[str], Callable[..., Any]]) -> None:
        self._functions: dict[str, Callable[..., Any]] = {}
        for name in _FUNCTION_NAMES:
            try:
                function = get_function(name)
            except LookupError as exc:
                raise HostError(f"host does not provide {name!r}") from exc
            if function is None or not callable(function):
                raise HostError(f"host does not provide a callable {name!r}")
            self._functions[name] = function

    def _call(self, name: str, *args: Any) -> Any:
        return self._functions[name](*args)

    # Engine: logging and debug drawing

    def log(self, message: str) -> None:
        self._call("Debug::Log", message)

    def log_int(self, message: str, value: int) -> None:
        self._call("Debug::Logi", message, value)

    def log_float(self, message: str, value: float) -> None:
        self._call("Debug::Logf", message, value)

    def log_v2i(self, message: str, value: V2i) -> None:
        self._call("Debug::LogV2i", message, value)

    def log_v2f(self, message: str, value: V2f) -> None:
        self._call("Debug::LogV2f", message, value)

    def draw_ray_2d(self, start: V2f, target: V2f, time: float, color: Color) -> None:
        self._call("Debug::DrawRay2D", start, target, time, color)

    def draw_ray_3d(self, start: V3f, target: V3f, time: float, color: Color) -> None:
        self._call("Debug::DrawRay3D", start, target, time, color)

    def draw_line_2d(self, start: V2f, end: V2f, time: float, color: Color) -> None:
        self._call("Debug::DrawLine2D", start, end, time, color)

    def draw_line_3d(self, start: V3f, end: V3f, time: float, color: Color) -> None:
        self._call("Debug::DrawLine3D", start, end, time, color)

    def display_map(self, map: Map) -> None:
        self._call("Debug::DisplayMap", map)

    def clear_map(self) -> None:
        self._call("Debug::ClearMap")

    # Plugin registration

    def register_data(self, name: str, version: str) -> None:
        self._call("Plugin::RegisterData", name, version)

    def register_type(self, factory: NativeObjectFactory) -> None:
        self._call("Plugin::RegisterType", factory)

    # World: sensors, motors and components

    def sensor_i32_read(self, handle: int) -> int:
        return int(self._call("Microsim::Sensor_i32_ReadValue", handle))

    def sensor_f32_read(self, handle: int) -> float:
        return float(self._call("Microsim::Sensor_f32_ReadValue", handle))

    def sensor_v3i_read(self, handle: int) -> V3i:
        return self._call("Microsim::Sensor_v3i_ReadValue", handle)

    def motor_current_throttle(self, handle: int) -> int:
        return int(self._call("Microsim::Motor_CurrentThrottle", handle))

    def motor_set_throttle(self, handle: int, throttle: int) -> None:
        self._call("Microsim::Motor_SetThrottle", handle, throttle)

    def robot_find_component(self, handle: int, guid: Guid) -> int:
        return int(self._call("Microsim::Robot_FindComponent", handle, guid))

    # Simulator-provided motor controller

    def sim_motor_setup(self, handle: int, robot_handle: int, data: Any) -> None:
        self._call("Microsim::SimMotorController_Setup", handle, robot_handle, data)

    def sim_motor_update_movement(self, handle: int, dt: float, position: RobotPosition) -> None:
        self._call("Microsim::SimMotorController_UpdateMovement", handle, dt, position)

    def sim_motor_current_state(self, handle: int) -> int:
        return int(self._call("Microsim::SimMotorController_GetCurrentState", handle))

    def sim_motor_distance_covered(self, handle: int) -> float:
        return float(self._call("Microsim::SimMotorController_GetDistanceCovered", handle))

    def sim_motor_target_distance(self, handle: int) -> float:
        return float(self._call("Microsim::SimMotorController_GetTargetDistance", handle))

    def sim_motor_set_gyro_null(self, handle: int) -> None:
        self._call("Microsim::SimMotorController_SetGyroNull", handle)

    def sim_motor_stop(self, handle: int) -> None:
        self._call("Microsim::SimMotorController_Stop", handle)

    def sim_motor_set_rpm(self, handle: int, rpm: int) -> None:
        self._call("Microsim::SimMotorController_SetRpm", handle, rpm)

    def sim_motor_move_distance(self, handle: int, distance: float) -> None:
        self._call("Microsim::SimMotorController_MoveDistance", handle, distance)

    def sim_motor_move_to_grid_pos(self, handle: int, target: V2i, cell_size: float) -> None:
        self._call("Microsim::SimMotorController_MoveToGridPos", handle, target, cell_size)

    def sim_motor_rotate_to_angle(self, handle: int, angle: int) -> None:
        self._call("Microsim::SimMotorController_RotateToAngle", handle, angle)

    def sim_motor_rotate_degrees(self, handle: int, degrees: int) -> None:
        self._call("Microsim::SimMotorController_RotateDegrees", handle, degrees)

    # Simulator-provided position tracker

    def sim_position_tracker_setup(self, handle: int, robot_handle: int, data: Any) -> None:
        self._call("Microsim::SimPositionTracker_Setup", handle, robot_handle, data)

    def sim_position_tracker_process(self, handle: int, position: RobotPosition) -> None:
        """Ask the host to update ``position`` in place."""
        self._call("Microsim::SimPositionTracker_Process", handle, position)

    # Simulator algorithm lifetime

    def create_simulator_algorithm(self, name: str) -> int:
        return int(self._call("Microsim::CreateSimulatorAlgorithm", name))

    def free_simulator_algorithm(self, handle: int) -> None:
        self._call("Microsim::FreeSimulatorAlgorithm", handle)