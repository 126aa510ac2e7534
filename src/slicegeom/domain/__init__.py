"""Domain models for slicegeom.

This module contains the geometric value types of the kernel. All models are
designed to be:

- Exact (integer coordinates, integer arithmetic for every decision)
- Serializable for inter-process communication (parallel processing)
- Independent of the clipping library's representation

Key classes:
- Point / PointMatrix: Integer coordinates and rotations
- Contour: A closed polygon with measurement and cleanup algorithms
- ContourSet: A collection of contours; a part when outline-first
- AxisAlignedBox: Bounding box with overlap test
- ContourNode: Node of the nested-contour forest
- Layer / LayerParts: One slice before and after processing
"""

from slicegeom.domain.bbox import AxisAlignedBox
from slicegeom.domain.contour import Contour
from slicegeom.domain.contour_set import ContourSet
from slicegeom.domain.forest import ContourNode
from slicegeom.domain.layer import Layer, LayerParts
from slicegeom.domain.operations import ClipOperation, FillRule, JoinStyle, WindingDirection
from slicegeom.domain.point import (
    POINT_MAX,
    POINT_MIN,
    UNITS_PER_MM,
    Point,
    PointMatrix,
    int2mm,
    mm2int,
)

__all__: list[str] = [
    # Enums
    "WindingDirection",
    "ClipOperation",
    "FillRule",
    "JoinStyle",
    # Core types
    "Point",
    "PointMatrix",
    "Contour",
    "ContourSet",
    "ContourNode",
    "AxisAlignedBox",
    "Layer",
    "LayerParts",
    # Constants and helpers
    "POINT_MAX",
    "POINT_MIN",
    "UNITS_PER_MM",
    "int2mm",
    "mm2int",
]
