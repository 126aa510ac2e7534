"""Integer point and rotation matrix primitives.

Coordinates are integer microns. Python integers never overflow, so every
difference, dot and cross product computed here is exact.

This module defines:
- Point: An immutable integer 2D coordinate with vector arithmetic
- PointMatrix: A 2x2 rotation matrix applied to points
- POINT_MIN / POINT_MAX: Sentinels used for empty extrema
"""

import math
from dataclasses import dataclass
from typing import Any

POINT_MIN = -(2**63)
POINT_MAX = 2**63 - 1

# Integer units per millimetre
UNITS_PER_MM = 1000


def int2mm(value: int | float) -> float:
    """Convert integer units to millimetres."""
    return value / UNITS_PER_MM


def mm2int(value: float) -> int:
    """Convert millimetres to integer units, rounding to the nearest unit."""
    return int(round(value * UNITS_PER_MM))


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) with integer coordinates.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in microns
        y: Y coordinate in microns
    """

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __mul__(self, factor: int) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def __floordiv__(self, divisor: int) -> "Point":
        return Point(self.x // divisor, self.y // divisor)

    def dot(self, other: "Point") -> int:
        """Dot product of two vectors."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> int:
        """Z component of the cross product of two vectors."""
        return self.x * other.y - self.y * other.x

    def size2(self) -> int:
        """Exact squared length."""
        return self.x * self.x + self.y * self.y

    def size(self) -> int:
        """Length truncated to an integer."""
        return math.isqrt(self.size2())

    def size_mm(self) -> float:
        """Length in millimetres."""
        fx = int2mm(self.x)
        fy = int2mm(self.y)
        return math.sqrt(fx * fx + fy * fy)

    def shorter_than(self, length: int) -> bool:
        """Check whether this vector is no longer than ``length``.

        The per-axis check rejects long vectors without squaring them.
        """
        if self.x > length or self.x < -length:
            return False
        if self.y > length or self.y < -length:
            return False
        return self.size2() <= length * length

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=int(data["x"]), y=int(data["y"]))


@dataclass(frozen=True)
class PointMatrix:
    """A 2x2 rotation matrix stored row-major as (m00, m01, m10, m11).

    Results of ``apply``/``unapply`` are truncated toward zero, so applying a
    non-trivial rotation is lossy at the unit scale.
    """

    matrix: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_degrees(cls, rotation: float) -> "PointMatrix":
        """Create a counter-clockwise rotation by ``rotation`` degrees."""
        radians = math.radians(rotation)
        cos_r = math.cos(radians)
        sin_r = math.sin(radians)
        return cls((cos_r, -sin_r, sin_r, cos_r))

    @classmethod
    def from_direction(cls, direction: Point) -> "PointMatrix":
        """Create the matrix that maps ``direction`` onto the positive X axis.

        Args:
            direction: Non-zero vector

        Returns:
            PointMatrix instance (identity for a zero vector)
        """
        length = math.hypot(direction.x, direction.y)
        if length == 0:
            return cls()
        m00 = direction.x / length
        m01 = direction.y / length
        return cls((m00, m01, -m01, m00))

    def apply(self, p: Point) -> Point:
        """Rotate a point."""
        m = self.matrix
        return Point(int(p.x * m[0] + p.y * m[1]), int(p.x * m[2] + p.y * m[3]))

    def unapply(self, p: Point) -> Point:
        """Apply the inverse (transposed) rotation to a point."""
        m = self.matrix
        return Point(int(p.x * m[0] + p.y * m[2]), int(p.x * m[1] + p.y * m[3]))
