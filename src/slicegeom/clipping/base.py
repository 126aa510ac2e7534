"""Interface to the polygon clipping/offsetting collaborator.

The kernel never clips polygons itself. Anything that can combine two
contour sets, offset a set and build a nested-contour forest can serve as the
engine; conversion to and from the engine's own path representation happens
inside the engine.
"""

from typing import Protocol, runtime_checkable

from slicegeom.domain.contour_set import ContourSet
from slicegeom.domain.forest import ContourNode
from slicegeom.domain.operations import ClipOperation, FillRule, JoinStyle


@runtime_checkable
class ClippingEngine(Protocol):
    """Boolean combination, offsetting and forest construction."""

    def combine(
        self,
        subject: ContourSet,
        clip: ContourSet,
        operation: ClipOperation,
        fill_rule: FillRule | None,
    ) -> ContourSet:
        """Apply a boolean operation between ``subject`` and ``clip``.

        A ``None`` fill rule selects the engine default for ``operation``.
        """
        ...

    def offset(
        self,
        contours: ContourSet,
        distance: int,
        join_style: JoinStyle | None,
        miter_limit: float | None,
    ) -> ContourSet:
        """Offset closed contours outward (positive) or inward (negative)."""
        ...

    def union_to_forest(self, contours: ContourSet, fill_rule: FillRule) -> ContourNode:
        """Union ``contours`` and return the nesting forest of the result."""
        ...
