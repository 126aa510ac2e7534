"""Enumerations shared by the kernel and the clipping collaborator."""

from enum import Enum, auto


class WindingDirection(Enum):
    """Contour winding direction.

    With the Y axis pointing up:
    - Outer boundaries produced by a union wind counter-clockwise
    - Holes wind clockwise
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


class ClipOperation(str, Enum):
    """Boolean operation between a subject and a clip contour set."""

    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"
    XOR = "xor"


class FillRule(str, Enum):
    """Interior classification rule for overlapping contours."""

    EVEN_ODD = "even_odd"
    NON_ZERO = "non_zero"


class JoinStyle(str, Enum):
    """Corner style used when offsetting contours."""

    MITER = "miter"
    ROUND = "round"
    SQUARE = "square"
