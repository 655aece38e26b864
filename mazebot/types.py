"""Vector, colour and maze-map value types shared by the robot algorithms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

PI = 3.14159265358979323846
DEG2RAD = PI / 180
RAD2DEG = 180 / PI
CELL_SIZE = 180
CELL_SIZE_F = float(CELL_SIZE)
CELL_WALL = 1


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _trunc_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _trunc_div(a, b)


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class V2i:
    """Integer 2D vector."""

    x: int
    y: int

    @classmethod
    def up(cls) -> V2i:
        return cls(0, 1)

    @classmethod
    def right(cls) -> V2i:
        return cls(1, 0)

    @classmethod
    def down(cls) -> V2i:
        return cls(0, -1)

    @classmethod
    def left(cls) -> V2i:
        return cls(-1, 0)

    @classmethod
    def zero(cls) -> V2i:
        return cls(0, 0)

    @classmethod
    def one(cls) -> V2i:
        return cls(1, 1)

    def to_v2f(self) -> V2f:
        return V2f(float(self.x), float(self.y))

    def length_sq(self) -> int:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def explode(self) -> V2i:
        """Keep only the strictly dominant axis; ties give the zero vector."""
        x_abs, y_abs = abs(self.x), abs(self.y)
        return V2i(self.x * (x_abs > y_abs), self.y * (y_abs > x_abs))

    def abs(self) -> V2i:
        return V2i(abs(self.x), abs(self.y))

    def rotated90deg(self, steps: int) -> V2i:
        """Rotate clockwise; every non-multiple of four applies one quarter turn."""
        if steps % 4 == 0:
            return V2i(self.x, self.y)
        return V2i(self.y, -self.x)

    def __add__(self, other: V2i) -> V2i:
        if not isinstance(other, V2i):
            return NotImplemented
        return V2i(self.x + other.x, self.y + other.y)

    def __neg__(self) -> V2i:
        return V2i(-self.x, -self.y)

    def __sub__(self, other: V2i) -> V2i:
        if not isinstance(other, V2i):
            return NotImplemented
        return V2i(self.x - other.x, self.y - other.y)

    def __mul__(self, other: int) -> V2i:
        if not isinstance(other, int):
            return NotImplemented
        return V2i(self.x * other, self.y * other)

    def __floordiv__(self, other: int) -> V2i:
        """Component-wise integer division, truncating toward zero."""
        if not isinstance(other, int):
            return NotImplemented
        return V2i(_trunc_div(self.x, other), _trunc_div(self.y, other))

    def __truediv__(self, other: float) -> V2f:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return V2f(self.x / other, self.y / other)

    def __mod__(self, other: int) -> V2i:
        """Component-wise remainder with the sign of each component."""
        if not isinstance(other, int):
            return NotImplemented
        return V2i(_trunc_mod(self.x, other), _trunc_mod(self.y, other))


@dataclass(frozen=True)
class V2f:
    """Floating-point 2D vector."""

    x: float
    y: float

    @classmethod
    def from_angle(cls, angle: int) -> V2f:
        """Unit vector for a heading in degrees, as the simulator measures it."""
        rads = float(angle) * DEG2RAD
        return cls(math.sin(rads), -math.cos(rads))

    def to_flat_v3f(self) -> V3f:
        return V3f(self.x, 0.0, self.y)

    def round(self) -> V2f:
        return V2f(_round_half_away(self.x), _round_half_away(self.y))

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def round_to_v2i(self) -> V2i:
        return V2i(int(_round_half_away(self.x)), int(_round_half_away(self.y)))

    def explode(self) -> V2f:
        x_abs, y_abs = abs(self.x), abs(self.y)
        return V2f(self.x * (x_abs > y_abs), self.y * (y_abs > x_abs))

    def normalize(self) -> V2f:
        length = self.length()
        if length == 0:
            return V2f(0.0, 0.0)
        return V2f(self.x / length, self.y / length)

    def dot(self, other: V2f) -> float:
        return self.x * other.x + self.y * other.y

    def det(self, other: V2f) -> float:
        return self.x * other.y - self.y * other.x

    def signed_angle(self, other: V2f) -> float:
        return math.atan2(self.det(other), self.dot(other))

    def __add__(self, other: Union[V2f, V2i]) -> V2f:
        if not isinstance(other, (V2f, V2i)):
            return NotImplemented
        return V2f(self.x + other.x, self.y + other.y)

    def __sub__(self, other: V2f) -> V2f:
        if not isinstance(other, V2f):
            return NotImplemented
        return V2f(self.x - other.x, self.y - other.y)

    def __mul__(self, other: float) -> V2f:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return V2f(self.x * other, self.y * other)

    def __truediv__(self, other: float) -> V2f:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return V2f(self.x / other, self.y / other)

    def rotated(self, angle_rad: float) -> V2f:
        cos, sin = math.cos(angle_rad), math.sin(angle_rad)
        return V2f(self.x * cos - self.y * sin, self.x * sin + self.y * cos)


@dataclass(frozen=True)
class V3i:
    """Integer 3D vector."""

    x: int
    y: int
    z: int


@dataclass(frozen=True)
class V3f:
    """Floating-point 3D vector."""

    x: float
    y: float
    z: float

    def __truediv__(self, other: float) -> V3f:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return V3f(self.x / other, self.y / other, self.z / other)

    def __add__(self, other: V3f) -> V3f:
        if not isinstance(other, V3f):
            return NotImplemented
        return V3f(self.x + other.x, self.y + other.y, self.z + other.z)


@dataclass(frozen=True)
class Guid:
    """128-bit identifier split into two 64-bit halves."""

    a: int
    b: int


@dataclass(frozen=True)
class Color:
    """RGBA colour with components in 0..1."""

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0, 1.0)

    @classmethod
    def red(cls) -> Color:
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def green(cls) -> Color:
        return cls(0.0, 1.0, 0.0, 1.0)

    @classmethod
    def blue(cls) -> Color:
        return cls(0.0, 0.0, 1.0, 1.0)


@dataclass
class RobotPosition:
    """Robot position in millimetres and heading in degrees."""

    position: V2i = field(default_factory=V2i.zero)
    angle: int = 0


_DISCOVERED = 1 << 0
_WALL_NORTH = 1 << 1
_WALL_EAST = 1 << 2
_WALL_SOUTH = 1 << 3
_WALL_WEST = 1 << 4
_WALL_HIGHLIGHT = 1 << 5


def _flag(mask: int, doc: str) -> property:
    def getter(cell: MapCell) -> bool:
        return cell.value & mask == mask

    def setter(cell: MapCell, on: bool) -> None:
        cell.value = (cell.value & ~mask & 0xFF) | (mask if on else 0)

    return property(getter, setter, doc=doc)


def _axis_bits(component: int, shift: int) -> int:
    if component == 0:
        return 0
    base = (1 - _trunc_div(component + 1, 2)) + 1
    return ((base & 3) ** 2) << shift


def _wall_mask(direction: V2i) -> int:
    return _axis_bits(direction.x, 2) + _axis_bits(direction.y, 1)


@dataclass
class MapCell:
    """One maze cell packed into a byte of flags."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= 0xFF

    discovered = _flag(_DISCOVERED, "Whether the robot has visited the cell.")
    wall_north = _flag(_WALL_NORTH, "Wall on the +y side.")
    wall_east = _flag(_WALL_EAST, "Wall on the +x side.")
    wall_south = _flag(_WALL_SOUTH, "Wall on the -y side.")
    wall_west = _flag(_WALL_WEST, "Wall on the -x side.")
    wall_highlight = _flag(_WALL_HIGHLIGHT, "Display highlight used while searching.")

    def is_wall_in_dir(self, direction: V2i) -> bool:
        mask = _wall_mask(direction)
        return self.value & mask == mask

    def set_wall_in_dir(self, direction: V2i, value: bool) -> None:
        mask = _wall_mask(direction)
        self.value = ((self.value & ~mask) | (mask if value else 0)) & 0xFF

    def wall_count(self) -> int:
        return sum((self.wall_north, self.wall_east, self.wall_south, self.wall_west))


@dataclass
class Map:
    """Row-major grid of maze cells."""

    cells: list[MapCell]
    size: V2i

    @classmethod
    def create(cls, size: V2i) -> Map:
        if size.x < 0 or size.y < 0:
            raise ValueError(f"map size must not be negative: {size}")
        return cls([MapCell() for _ in range(size.x * size.y)], size)

    def is_in_bounds(self, position: V2i) -> bool:
        return 0 <= position.x < self.size.x and 0 <= position.y < self.size.y

    def get_cell(self, position: V2i) -> MapCell:
        if not self.is_in_bounds(position):
            raise IndexError(f"cell {position} lies outside a map of size {self.size}")
        return self.cells[position.y * self.size.x + position.x]

    def set_cell(self, position: V2i, value: int) -> None:
        """Overwrite a cell's flags; positions outside the map are ignored."""
        if self.is_in_bounds(position):
            self.get_cell(position).value = value & 0xFF

    def reset_highlights(self) -> None:
        for cell in self.cells:
            cell.wall_highlight = False

    def clear(self) -> None:
        for cell in self.cells:
            cell.value = 0