"""Shared fixtures for slicegeom tests."""

import pytest

from slicegeom.domain import (
    ClipOperation,
    Contour,
    ContourNode,
    ContourSet,
    FillRule,
    JoinStyle,
)


class NestingEngine:
    """Clipping engine stand-in that nests by winding instead of clipping.

    Counter-clockwise contours become outlines; each clockwise contour
    becomes a hole of the most recent outline. Every call is recorded.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def combine(
        self,
        subject: ContourSet,
        clip: ContourSet,
        operation: ClipOperation,
        fill_rule: FillRule | None,
    ) -> ContourSet:
        self.calls.append(("combine", operation, fill_rule))
        return subject.copy()

    def offset(
        self,
        contours: ContourSet,
        distance: int,
        join_style: JoinStyle | None,
        miter_limit: float | None,
    ) -> ContourSet:
        self.calls.append(("offset", distance, join_style, miter_limit))
        return contours.copy()

    def union_to_forest(self, contours: ContourSet, fill_rule: FillRule) -> ContourNode:
        self.calls.append(("union_to_forest", fill_rule))
        root = ContourNode()
        outline: ContourNode | None = None
        for contour in contours:
            if contour.orientation() or outline is None:
                outline = root.add_child(contour.copy())
            else:
                outline.add_child(contour.copy())
        return root


@pytest.fixture
def nesting_engine() -> NestingEngine:
    """Create a recording clipping engine that needs no clipping library."""
    return NestingEngine()


@pytest.fixture
def unit_square() -> Contour:
    """Create the 1000x1000 counter-clockwise square."""
    return Contour.from_tuples([(0, 0), (1000, 0), (1000, 1000), (0, 1000)])


@pytest.fixture
def square_with_hole() -> ContourSet:
    """Create a 3000x3000 CCW outline with a 1000x1000 CW hole in the middle."""
    return ContourSet.from_tuples([
        [(0, 0), (3000, 0), (3000, 3000), (0, 3000)],
        [(1000, 1000), (1000, 2000), (2000, 2000), (2000, 1000)],
    ])
