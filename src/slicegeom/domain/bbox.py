"""Axis-aligned bounding box."""

from dataclasses import dataclass, field

from slicegeom.domain.contour_set import ContourSet
from slicegeom.domain.point import POINT_MAX, POINT_MIN, Point


@dataclass
class AxisAlignedBox:
    """Min/max corner pair.

    The empty box has ``min`` at the positive extreme and ``max`` at the
    negative extreme, so it never hits anything.

    Attributes:
        min: Lower-left corner
        max: Upper-right corner
    """

    min: Point = field(default_factory=lambda: Point(POINT_MAX, POINT_MAX))
    max: Point = field(default_factory=lambda: Point(POINT_MIN, POINT_MIN))

    @classmethod
    def from_contours(cls, contours: ContourSet) -> "AxisAlignedBox":
        box = cls()
        box.calculate(contours)
        return box

    def calculate(self, contours: ContourSet) -> None:
        """Recompute the box from every point in ``contours``."""
        min_x = min_y = POINT_MAX
        max_x = max_y = POINT_MIN
        for contour in contours:
            for p in contour:
                min_x = min(min_x, p.x)
                min_y = min(min_y, p.y)
                max_x = max(max_x, p.x)
                max_y = max(max_y, p.y)
        self.min = Point(min_x, min_y)
        self.max = Point(max_x, max_y)

    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y

    def hit(self, other: "AxisAlignedBox") -> bool:
        """Check overlap on both axes; touching edges count as a hit."""
        if self.max.x < other.min.x:
            return False
        if self.min.x > other.max.x:
            return False
        if self.max.y < other.min.y:
            return False
        if self.min.y > other.max.y:
            return False
        return True
