"""Decomposition of a contour forest into independent parts.

A part is a ContourSet holding one outline followed by the holes directly
inside it. Islands sitting inside a hole do not belong to the enclosing part;
they start parts of their own, so every part can be processed on its own.
"""

from typing import TYPE_CHECKING

from slicegeom.domain.contour_set import ContourSet
from slicegeom.domain.forest import ContourNode
from slicegeom.domain.operations import FillRule

if TYPE_CHECKING:
    from slicegeom.clipping.base import ClippingEngine


def forest_to_parts(root: ContourNode) -> list[ContourSet]:
    """Flatten a nesting forest into outline+holes parts.

    Depth-1 nodes are outlines and their children are holes. Each hole's
    children (islands) are handled recursively as a new forest root; parts
    found inside the holes are emitted before the part that encloses them.

    Args:
        root: Forest root (its own contour is ignored)

    Returns:
        List of parts, outline first in each
    """
    parts: list[ContourSet] = []
    _collect_parts(root, parts)
    return parts


def _collect_parts(node: ContourNode, parts: list[ContourSet]) -> None:
    for outline in node.children:
        part = ContourSet()
        part.add(outline.contour)
        for hole in outline.children:
            part.add(hole.contour)
            _collect_parts(hole, parts)
        parts.append(part)


def split_into_parts(
    contours: ContourSet,
    union_all: bool = False,
    engine: "ClippingEngine | None" = None,
) -> list[ContourSet]:
    """Union ``contours`` and split the result into parts.

    Args:
        contours: Contours to split
        union_all: Merge overlapping contours with the non-zero rule instead
            of applying even-odd
        engine: Clipping engine (default engine if None)

    Returns:
        List of parts, outline first in each
    """
    if engine is None:
        from slicegeom.clipping import get_default_engine

        engine = get_default_engine()

    fill_rule = FillRule.NON_ZERO if union_all else FillRule.EVEN_ODD
    forest = engine.union_to_forest(contours, fill_rule)
    return forest_to_parts(forest)
