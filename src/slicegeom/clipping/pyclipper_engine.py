"""Clipping engine backed by pyclipper.

pyclipper wraps Angus Johnson's Clipper library, which works on integer
coordinates natively, so kernel points are passed through without scaling.
"""

import pyclipper

from slicegeom.config import ClippingConfig
from slicegeom.domain.contour import Contour
from slicegeom.domain.contour_set import ContourSet
from slicegeom.domain.forest import ContourNode
from slicegeom.domain.operations import ClipOperation, FillRule, JoinStyle
from slicegeom.exceptions import ClippingError

_CLIP_TYPES = {
    ClipOperation.UNION: pyclipper.CT_UNION,
    ClipOperation.DIFFERENCE: pyclipper.CT_DIFFERENCE,
    ClipOperation.INTERSECTION: pyclipper.CT_INTERSECTION,
    ClipOperation.XOR: pyclipper.CT_XOR,
}

_FILL_TYPES = {
    FillRule.EVEN_ODD: pyclipper.PFT_EVENODD,
    FillRule.NON_ZERO: pyclipper.PFT_NONZERO,
}

_JOIN_TYPES = {
    JoinStyle.MITER: pyclipper.JT_MITER,
    JoinStyle.ROUND: pyclipper.JT_ROUND,
    JoinStyle.SQUARE: pyclipper.JT_SQUARE,
}


def to_clipper_paths(contours: ContourSet) -> list[list[tuple[int, int]]]:
    """Convert a contour set to pyclipper integer paths."""
    return [c.to_tuples() for c in contours if len(c) > 0]


def from_clipper_paths(paths: list) -> ContourSet:
    """Convert pyclipper output paths to a contour set."""
    return ContourSet(contours=[Contour.from_tuples(path) for path in paths])


def _add_paths(clipper: pyclipper.Pyclipper, paths: list, poly_type: int) -> bool:
    """Add closed paths, skipping the ones Clipper rejects.

    Clipper drops paths with fewer than three distinct points on its own and
    only complains when *every* path was rejected, which for our purposes is
    the same as adding nothing.
    """
    if not paths:
        return False
    try:
        return bool(clipper.AddPaths(paths, poly_type, True))
    except pyclipper.ClipperException:
        return False


class PyclipperEngine:
    """ClippingEngine implementation using pyclipper.

    Example:
        engine = PyclipperEngine()
        merged = engine.combine(a, b, ClipOperation.UNION, FillRule.NON_ZERO)
    """

    def __init__(self, config: ClippingConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            config: Clipping settings (defaults used if None)
        """
        self.config = config or ClippingConfig()

    def combine(
        self,
        subject: ContourSet,
        clip: ContourSet,
        operation: ClipOperation,
        fill_rule: FillRule | None = None,
    ) -> ContourSet:
        """Apply a boolean operation.

        For a union both sets are added as subjects, so overlaps between and
        within them are resolved with the same fill rule.

        Args:
            subject: Subject contours
            clip: Clip contours
            operation: Boolean operation to apply
            fill_rule: Fill rule for both subject and clip (None uses the
                configured union or default fill rule)

        Returns:
            Resulting contour set

        Raises:
            ClippingError: If Clipper fails to execute the operation
        """
        if fill_rule is None:
            if operation == ClipOperation.UNION:
                fill_rule = self.config.union_fill_rule
            else:
                fill_rule = self.config.default_fill_rule

        clipper = pyclipper.Pyclipper()
        _add_paths(clipper, to_clipper_paths(subject), pyclipper.PT_SUBJECT)
        clip_type = pyclipper.PT_SUBJECT if operation == ClipOperation.UNION else pyclipper.PT_CLIP
        _add_paths(clipper, to_clipper_paths(clip), clip_type)

        fill_type = _FILL_TYPES[fill_rule]
        try:
            paths = clipper.Execute(_CLIP_TYPES[operation], fill_type, fill_type)
        except pyclipper.ClipperException as e:
            raise ClippingError(operation.value, str(e)) from e
        return from_clipper_paths(paths)

    def offset(
        self,
        contours: ContourSet,
        distance: int,
        join_style: JoinStyle | None = None,
        miter_limit: float | None = None,
    ) -> ContourSet:
        """Offset closed contours by ``distance`` units.

        Args:
            contours: Contours to offset
            distance: Positive to grow, negative to shrink
            join_style: Corner style (config value if None)
            miter_limit: Miter limit override (config value if None)

        Returns:
            Offset contour set

        Raises:
            ClippingError: If Clipper fails to execute the offset
        """
        if join_style is None:
            join_style = self.config.join_style
        limit = miter_limit if miter_limit is not None else self.config.miter_limit
        offsetter = pyclipper.PyclipperOffset(limit, self.config.arc_tolerance)
        paths = to_clipper_paths(contours)
        if not paths:
            return ContourSet()
        offsetter.AddPaths(paths, _JOIN_TYPES[join_style], pyclipper.ET_CLOSEDPOLYGON)
        try:
            result = offsetter.Execute(distance)
        except pyclipper.ClipperException as e:
            raise ClippingError("offset", str(e)) from e
        return from_clipper_paths(result)

    def union_to_forest(self, contours: ContourSet, fill_rule: FillRule) -> ContourNode:
        """Union the contours and return the nesting tree of the result.

        Args:
            contours: Contours to union
            fill_rule: Fill rule used to resolve overlaps

        Returns:
            Root ContourNode (empty contour) whose children are outlines

        Raises:
            ClippingError: If Clipper fails to execute the union
        """
        clipper = pyclipper.Pyclipper()
        _add_paths(clipper, to_clipper_paths(contours), pyclipper.PT_SUBJECT)
        fill_type = _FILL_TYPES[fill_rule]
        try:
            tree = clipper.Execute2(pyclipper.CT_UNION, fill_type, fill_type)
        except pyclipper.ClipperException as e:
            raise ClippingError("union", str(e)) from e

        root = ContourNode()
        _copy_poly_node(tree, root)
        return root


def _copy_poly_node(poly_node, node: ContourNode) -> None:
    for child in poly_node.Childs:
        child_node = node.add_child(Contour.from_tuples(child.Contour))
        _copy_poly_node(child, child_node)
