"""Single closed contour and its geometric algorithms.

A contour is an ordered list of integer points. The last point connects back
to the first; the closing edge is never stored explicitly.

Every algorithm here runs in exact integer arithmetic wherever the result is
compared or counted, and returns a default value instead of raising on
degenerate input (empty contours, zero area).
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from slicegeom.domain.operations import WindingDirection
from slicegeom.domain.point import POINT_MAX, POINT_MIN, Point


@dataclass
class Contour:
    """A closed polygon boundary.

    Attributes:
        points: List of points forming the contour, owned by this contour
    """

    points: list[Point] = field(default_factory=list)

    @classmethod
    def from_tuples(cls, coords: Iterable[tuple[int, int]]) -> "Contour":
        """Build a contour from (x, y) pairs.

        Args:
            coords: Iterable of integer coordinate pairs

        Returns:
            Contour instance
        """
        return cls(points=[Point(int(x), int(y)) for x, y in coords])

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> Point:
        assert -len(self.points) <= index < len(self.points), "contour index out of range"
        return self.points[index]

    def __setitem__(self, index: int, point: Point) -> None:
        assert -len(self.points) <= index < len(self.points), "contour index out of range"
        self.points[index] = point

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def add(self, point: Point) -> None:
        self.points.append(point)

    def remove(self, index: int) -> None:
        assert 0 <= index < len(self.points), "contour index out of range"
        del self.points[index]

    def pop(self) -> Point:
        return self.points.pop()

    def back(self) -> Point:
        return self.points[-1]

    def clear(self) -> None:
        self.points.clear()

    def reverse(self) -> None:
        """Reverse the winding direction in place."""
        self.points.reverse()

    def copy(self) -> "Contour":
        return Contour(points=list(self.points))

    def translate(self, offset: Point) -> None:
        """Move every point by ``offset``."""
        self.points = [p + offset for p in self.points]

    def to_tuples(self) -> list[tuple[int, int]]:
        return [p.to_tuple() for p in self.points]

    def _twice_area(self) -> int:
        n = len(self.points)
        total = 0
        for i in range(n):
            p0 = self.points[i - 1]
            p1 = self.points[i]
            total += p0.x * p1.y - p1.x * p0.y
        return total

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Returns:
            Signed area in square units (0.0 for fewer than 3 points)
        """
        return self._twice_area() / 2

    def orientation(self) -> bool:
        """Return True for counter-clockwise (non-negative area) contours."""
        return self._twice_area() >= 0

    def direction(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.orientation():
            return WindingDirection.COUNTER_CLOCKWISE
        return WindingDirection.CLOCKWISE

    def perimeter_length(self) -> int:
        """Sum of truncated edge lengths, closing edge included."""
        if not self.points:
            return 0
        length = 0
        p0 = self.points[-1]
        for p1 in self.points:
            length += (p0 - p1).size()
            p0 = p1
        return length

    def bounding_min(self) -> Point:
        """Per-axis minimum; ``(POINT_MAX, POINT_MAX)`` when empty."""
        min_x = POINT_MAX
        min_y = POINT_MAX
        for p in self.points:
            min_x = min(min_x, p.x)
            min_y = min(min_y, p.y)
        return Point(min_x, min_y)

    def bounding_max(self) -> Point:
        """Per-axis maximum; ``(POINT_MIN, POINT_MIN)`` when empty."""
        max_x = POINT_MIN
        max_y = POINT_MIN
        for p in self.points:
            max_x = max(max_x, p.x)
            max_y = max(max_y, p.y)
        return Point(max_x, max_y)

    def centroid(self) -> Point:
        """Area-weighted centre of mass.

        Returns:
            Centroid truncated to integer coordinates, or ``Point(0, 0)``
            for empty and zero-area contours
        """
        twice_area = self._twice_area()
        if not self.points or twice_area == 0:
            return Point(0, 0)

        x = 0
        y = 0
        p0 = self.points[-1]
        for p1 in self.points:
            second_factor = p0.x * p1.y - p1.x * p0.y
            x += (p0.x + p1.x) * second_factor
            y += (p0.y + p1.y) * second_factor
            p0 = p1

        # area = twice_area / 2, so x / (6 * area) == x / (3 * twice_area)
        return Point(int(x / (3 * twice_area)), int(y / (3 * twice_area)))

    def closest_point_to(self, query: Point) -> Point:
        """Find the vertex nearest to ``query``.

        Only vertices are considered, not points along edges. Ties keep the
        first vertex found.

        Args:
            query: Point to measure from

        Returns:
            Closest vertex, or ``query`` itself for an empty contour
        """
        best = query
        best_dist2: int | None = None
        for p in self.points:
            dist2 = (query - p).size2()
            if best_dist2 is None or dist2 < best_dist2:
                best = p
                best_dist2 = dist2
        return best

    def contains(self, query: Point, border_result: bool = False) -> bool:
        """Check if a point is inside the contour.

        Traces a ray from ``query`` towards positive X and counts edge
        crossings. An edge is only a candidate when its lower endpoint is at
        or below ``query.y`` and its upper endpoint strictly above it, so a
        vertex shared by two edges is never counted twice. The sign of an
        integer determinant tells on which side of the edge the crossing lies;
        a zero determinant means ``query`` is on the edge.

        Args:
            query: The point to test
            border_result: Value returned when ``query`` is exactly on the border

        Returns:
            True if inside, False if outside, ``border_result`` on the border
        """
        if not self.points:
            return False

        crossings = 0
        p0 = self.points[-1]
        for p1 in self.points:
            # Segments entirely left of the query point cannot be crossed
            if max(p0.x, p1.x) >= query.x:
                pd_y = p1.y - p0.y
                if pd_y < 0:
                    # Falling edge
                    if p1.y <= query.y < p0.y:
                        dx = (p1.x - p0.x) * (p1.y - query.y) - (p1.x - query.x) * pd_y
                        if dx == 0:
                            return border_result
                        if dx > 0:
                            crossings += 1
                elif query.y >= p0.y:
                    if query.y < p1.y:
                        # Rising edge
                        dx = (p1.x - p0.x) * (query.y - p0.y) - (query.x - p0.x) * pd_y
                        if dx == 0:
                            return border_result
                        if dx > 0:
                            crossings += 1
                    elif query.y == p1.y:
                        # Query matches the upper vertex, or sits on a horizontal edge
                        if query.x == p1.x or (pd_y == 0 and min(p0.x, p1.x) <= query.x):
                            return border_result
            p0 = p1

        return crossings % 2 == 1

    def smooth(self, remove_length: int) -> "Contour":
        """Drop points attached to edges shorter than ``remove_length``.

        When an edge is too short, the point after it is kept instead and one
        extra point is skipped, so removals never cascade along a run of short
        edges. This is a single pass and is not idempotent.

        Args:
            remove_length: Edge length (units) below which a point is removed

        Returns:
            New smoothed contour
        """
        result = Contour()
        n = len(self.points)
        if n > 0:
            result.add(self.points[0])

        idx = 1
        while idx < n:
            if (self.points[idx - 1] - self.points[idx]).shorter_than(remove_length):
                idx += 1
                if idx < n:
                    result.add(self.points[idx])
            else:
                result.add(self.points[idx])
            idx += 1
        return result

    def simplify(self, allowed_error_distance_squared: int) -> "Contour":
        """Remove vertices that barely change the contour's shape.

        For a candidate vertex ``cur`` between the last kept vertex ``last``
        and the following vertex ``next``, the perpendicular error is
        approximated from the triangle they form::

               /|
            c / | a
             /__|
             \\ b|
            e \\ | d
               \\|

            a^2 ~= c^2 * (a + d)^2 / (c + e)^2   (asymptotically, d -> 0)

        and the vertex is dropped when ``|next - cur|^2 - a^2`` stays under the
        allowed error. Vertices closer than the allowed error to ``last`` are
        dropped outright.

        Args:
            allowed_error_distance_squared: Squared tolerance in square units

        Returns:
            New simplified contour. Contours with fewer than 4 points, and
            contours that would shrink below a triangle, are copied unchanged.
        """
        n = len(self.points)
        if n < 4:
            return self.copy()

        result = Contour()
        last = self.points[0]
        result.add(last)
        for idx in range(1, n):
            cur = self.points[idx]
            if (cur - last).size2() < allowed_error_distance_squared:
                continue

            nxt = self.points[(idx + 1) % n]
            denominator = int(((nxt - last).size_mm() + (cur - last).size_mm()) ** 2 * 1000 * 1000)
            a2 = 0
            if denominator > 0:
                a2 = (nxt - cur).size2() * (nxt - last).size2() // denominator

            error2 = (nxt - cur).size2() - a2
            if error2 >= allowed_error_distance_squared:
                result.add(cur)
                last = cur

        if len(result) < 3:
            return self.copy()
        return result

    def remove_degenerate_verts(self) -> "Contour":
        """Remove vertices where the contour doubles back on itself.

        A vertex is degenerate when the incoming and outgoing edges point in
        exactly opposite directions (or one of them has zero length), i.e.
        ``dot(a, b) == -|a| * |b|``. Dropping a vertex can make the previously
        kept vertex degenerate against the new successor, so removal walks
        backwards until the condition clears.

        Returns:
            New contour; callers discard results with fewer than 3 points
        """
        result = Contour()
        n = len(self.points)
        for idx in range(n):
            last = result.back() if result.points else self.points[-1]
            if idx + 1 == n and not result.points:
                break
            nxt = result[0] if idx + 1 == n else self.points[idx + 1]
            if _is_degenerate(last, self.points[idx], nxt):
                while len(result) > 1 and _is_degenerate(result[-2], result[-1], nxt):
                    result.pop()
            else:
                result.add(self.points[idx])
        return result

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with the point list as [x, y] pairs
        """
        return {"points": [[p.x, p.y] for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls.from_tuples(data["points"])


def _is_degenerate(last: Point, now: Point, nxt: Point) -> bool:
    last_line = now - last
    next_line = nxt - now
    # dot == -|a||b| holds exactly when the vectors are collinear and not
    # pointing the same way; zero-length edges satisfy it trivially
    return last_line.cross(next_line) == 0 and last_line.dot(next_line) <= 0
