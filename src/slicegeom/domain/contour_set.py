"""Collection of contours describing one planar region.

A ContourSet owns its contours: adding a contour stores a copy, and
``copy()`` duplicates all coordinate data. By convention a *part* is a
ContourSet whose first contour is the outer boundary and whose remaining
contours are the holes directly inside it.

Boolean operations and offsetting are delegated to a clipping engine (see
``slicegeom.clipping``); the engine defaults to the pyclipper implementation.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from slicegeom.domain.contour import Contour
from slicegeom.domain.operations import ClipOperation, FillRule, JoinStyle
from slicegeom.domain.point import POINT_MAX, POINT_MIN, Point, PointMatrix, int2mm

if TYPE_CHECKING:
    from slicegeom.clipping.base import ClippingEngine


@dataclass
class ContourSet:
    """An ordered collection of closed contours.

    Attributes:
        contours: Contours in insertion order
    """

    contours: list[Contour] = field(default_factory=list)

    @classmethod
    def from_tuples(cls, paths: Iterable[Iterable[tuple[int, int]]]) -> "ContourSet":
        """Build a set from nested (x, y) coordinate lists."""
        return cls(contours=[Contour.from_tuples(path) for path in paths])

    def __len__(self) -> int:
        return len(self.contours)

    def __getitem__(self, index: int) -> Contour:
        assert -len(self.contours) <= index < len(self.contours), "contour set index out of range"
        return self.contours[index]

    def __iter__(self) -> Iterator[Contour]:
        return iter(self.contours)

    def add(self, other: "Contour | ContourSet") -> None:
        """Append a copy of a contour, or copies of every contour in a set."""
        if isinstance(other, ContourSet):
            self.contours.extend(c.copy() for c in other.contours)
        else:
            self.contours.append(other.copy())

    def new_contour(self) -> Contour:
        """Append an empty contour and return it for filling in."""
        contour = Contour()
        self.contours.append(contour)
        return contour

    def remove(self, index: int) -> None:
        assert 0 <= index < len(self.contours), "contour set index out of range"
        del self.contours[index]

    def back(self) -> Contour:
        return self.contours[-1]

    def clear(self) -> None:
        self.contours.clear()

    def copy(self) -> "ContourSet":
        return ContourSet(contours=[c.copy() for c in self.contours])

    def to_tuples(self) -> list[list[tuple[int, int]]]:
        return [c.to_tuples() for c in self.contours]

    def point_count(self) -> int:
        return sum(len(c) for c in self.contours)

    # Measurement

    def total_perimeter_length(self) -> int:
        return sum(c.perimeter_length() for c in self.contours)

    def total_area(self) -> float:
        """Sum of signed areas (holes subtract when oppositely wound)."""
        return sum(c.signed_area() for c in self.contours)

    def bounding_min(self) -> Point:
        """Per-axis minimum over all contours; sentinel when empty."""
        min_x = POINT_MAX
        min_y = POINT_MAX
        for contour in self.contours:
            for p in contour:
                min_x = min(min_x, p.x)
                min_y = min(min_y, p.y)
        return Point(min_x, min_y)

    def bounding_max(self) -> Point:
        """Per-axis maximum over all contours; sentinel when empty."""
        max_x = POINT_MIN
        max_y = POINT_MIN
        for contour in self.contours:
            for p in contour:
                max_x = max(max_x, p.x)
                max_y = max(max_y, p.y)
        return Point(max_x, max_y)

    def contains(self, query: Point) -> bool:
        """Check if a point lies inside this part.

        The set must be arranged as one outline followed by its holes: the
        point is inside when it is inside the first contour and outside every
        other contour. Any other arrangement gives an unspecified answer;
        overlapping holes are not special-cased.

        Args:
            query: The point to test

        Returns:
            True if the point is in the filled region of the part
        """
        if not self.contours:
            return False
        if not self.contours[0].contains(query):
            return False
        for hole in self.contours[1:]:
            if hole.contains(query):
                return False
        return True

    # In-place transforms

    def apply_matrix(self, matrix: PointMatrix) -> None:
        """Rotate every point of every contour in place."""
        for contour in self.contours:
            contour.points = [matrix.apply(p) for p in contour.points]

    def translate(self, offset: Point) -> None:
        for contour in self.contours:
            contour.translate(offset)

    def remove_small_areas(self, min_area_mm2: float) -> None:
        """Drop contours whose absolute area is below ``min_area_mm2``.

        Args:
            min_area_mm2: Threshold in square millimetres
        """
        self.contours = [
            c for c in self.contours
            if int2mm(int2mm(abs(c.signed_area()))) >= min_area_mm2
        ]

    # Cleanup producing new sets

    def remove_degenerate_verts(self) -> "ContourSet":
        """Remove back-tracking vertices from every contour.

        Returns:
            New set holding only the contours that keep at least 3 points
        """
        result = ContourSet()
        for contour in self.contours:
            cleaned = contour.remove_degenerate_verts()
            if len(cleaned) > 2:
                result.contours.append(cleaned)
        return result

    def smooth(self, remove_length: int, min_area: int) -> "ContourSet":
        """Smooth every contour large enough to survive it.

        Contours with an absolute area below ``min_area`` (square units) or
        with 5 points or fewer are copied as-is: removing points from a
        pentagon already leaves only a triangle.

        Args:
            remove_length: Edge length below which points are removed
            min_area: Area in square units below which a contour is left alone

        Returns:
            New smoothed set
        """
        result = ContourSet()
        for contour in self.contours:
            if abs(contour.signed_area()) < min_area or len(contour) <= 5:
                result.contours.append(contour.copy())
            else:
                result.contours.append(contour.smooth(remove_length))
        return result

    def simplify(self, allowed_error_distance: int) -> "ContourSet":
        """Simplify every contour with the given deviation tolerance.

        Args:
            allowed_error_distance: Tolerance in units (squared internally)

        Returns:
            New simplified set
        """
        allowed_error_distance_squared = allowed_error_distance * allowed_error_distance
        return ContourSet(
            contours=[c.simplify(allowed_error_distance_squared) for c in self.contours]
        )

    def remove_matching(self, to_be_removed: "ContourSet", same_distance: int = 0) -> "ContourSet":
        """Return the contours that have no geometric twin in ``to_be_removed``.

        Two contours are twins when they have the same number of points and
        every point lies within ``same_distance`` of its counterpart. The
        counterpart alignment is found once: the vertex of the candidate
        closest to the first point of the kept contour is assumed to match it,
        and the remaining points follow cyclically from there.

        Args:
            to_be_removed: Contours to remove from this set
            same_distance: Maximum point distance (inclusive) to count as equal

        Returns:
            New set with copies of the surviving contours
        """
        max_dist2 = same_distance * same_distance
        result = ContourSet()
        for keep in self.contours:
            should_be_removed = False
            if len(keep) > 0:
                for candidate in to_be_removed:
                    if len(candidate) != len(keep):
                        continue
                    if _matches(keep, candidate, max_dist2):
                        should_be_removed = True
                        break
            if not should_be_removed:
                result.contours.append(keep.copy())
        return result

    # Clipping collaborator

    def _engine(self, engine: "ClippingEngine | None") -> "ClippingEngine":
        if engine is not None:
            return engine
        from slicegeom.clipping import get_default_engine

        return get_default_engine()

    def difference(self, other: "ContourSet", engine: "ClippingEngine | None" = None) -> "ContourSet":
        return self._engine(engine).combine(self, other, ClipOperation.DIFFERENCE, None)

    def union(
        self,
        other: "ContourSet | None" = None,
        fill_rule: FillRule | None = None,
        engine: "ClippingEngine | None" = None,
    ) -> "ContourSet":
        """Union with ``other`` (or just resolve overlaps within this set)."""
        clip = other if other is not None else ContourSet()
        return self._engine(engine).combine(self, clip, ClipOperation.UNION, fill_rule)

    def intersection(self, other: "ContourSet", engine: "ClippingEngine | None" = None) -> "ContourSet":
        return self._engine(engine).combine(self, other, ClipOperation.INTERSECTION, None)

    def xor(self, other: "ContourSet", engine: "ClippingEngine | None" = None) -> "ContourSet":
        return self._engine(engine).combine(self, other, ClipOperation.XOR, None)

    def offset(
        self,
        distance: int,
        join_style: JoinStyle | None = None,
        miter_limit: float | None = None,
        engine: "ClippingEngine | None" = None,
    ) -> "ContourSet":
        """Grow (positive ``distance``) or shrink (negative) the region."""
        return self._engine(engine).offset(self, distance, join_style, miter_limit)

    def process_even_odd(self, engine: "ClippingEngine | None" = None) -> "ContourSet":
        """Resolve the set with the even-odd rule into clean outlines and holes."""
        return self.union(fill_rule=FillRule.EVEN_ODD, engine=engine)

    def split_into_parts(
        self, union_all: bool = False, engine: "ClippingEngine | None" = None
    ) -> list["ContourSet"]:
        """Split into parts of one outline followed by its holes.

        Args:
            union_all: Use the non-zero rule instead of even-odd, so that
                overlapping contours merge instead of cancelling out
            engine: Clipping engine override

        Returns:
            List of parts
        """
        from slicegeom.core.parts import split_into_parts

        return split_into_parts(self, union_all=union_all, engine=engine)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"contours": [c.to_dict() for c in self.contours]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContourSet":
        """Deserialize from dictionary."""
        return cls(contours=[Contour.from_dict(c) for c in data["contours"]])


def _matches(keep: Contour, candidate: Contour, max_dist2: int) -> bool:
    first = keep[0]
    closest_idx = 0
    smallest_dist2: int | None = None
    for idx, p in enumerate(candidate):
        dist2 = (p - first).size2()
        if smallest_dist2 is None or dist2 < smallest_dist2:
            smallest_dist2 = dist2
            closest_idx = idx

    if smallest_dist2 is None or smallest_dist2 > max_dist2:
        return False

    n = len(candidate)
    for idx in range(n):
        if (candidate[(closest_idx + idx) % n] - keep[idx]).size2() > max_dist2:
            return False
    return True
