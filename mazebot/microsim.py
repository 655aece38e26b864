"""Handles to simulated robot parts: sensors, motors and the robot itself."""

from __future__ import annotations

from dataclasses import dataclass, field

from .host import Host
from .types import Guid, V3i


@dataclass(frozen=True)
class _Component:
    host: Host = field(repr=False, compare=False)
    handle: int


@dataclass(frozen=True)
class SensorI32(_Component):
    """Sensor reporting a 32-bit integer, such as a distance in millimetres."""

    def read_value(self) -> int:
        return self.host.sensor_i32_read(self.handle)


@dataclass(frozen=True)
class SensorF32(_Component):
    """Sensor reporting a float."""

    def read_value(self) -> float:
        return self.host.sensor_f32_read(self.handle)


@dataclass(frozen=True)
class SensorV3i(_Component):
    """Sensor reporting an integer 3D vector."""

    def read_value(self) -> V3i:
        return self.host.sensor_v3i_read(self.handle)


@dataclass(frozen=True)
class Motor(_Component):
    """Motor driven by a signed throttle."""

    def current_throttle(self) -> int:
        return self.host.motor_current_throttle(self.handle)

    def set_throttle(self, throttle: int) -> None:
        self.host.motor_set_throttle(self.handle, throttle)


@dataclass(frozen=True)
class FindableComponent(_Component):
    """A component found on a robot, to be viewed as a concrete part."""

    def to_sensor_i32(self) -> SensorI32:
        return SensorI32(self.host, self.handle)

    def to_sensor_f32(self) -> SensorF32:
        return SensorF32(self.host, self.handle)

    def to_sensor_v3i(self) -> SensorV3i:
        return SensorV3i(self.host, self.handle)

    def to_motor(self) -> Motor:
        return Motor(self.host, self.handle)


@dataclass(frozen=True)
class ComponentReference:
    """Reference to a component by its serialisable identifier."""

    serializable_guid: Guid


@dataclass(frozen=True)
class Robot(_Component):
    """The simulated robot an algorithm is attached to."""

    def find_component(self, guid: Guid) -> FindableComponent:
        return FindableComponent(self.host, self.host.robot_find_component(self.handle, guid))