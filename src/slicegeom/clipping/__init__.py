"""Polygon clipping collaborator for slicegeom.

Boolean set operations, offsetting and nested-contour forests come from an
external clipping library. This package defines the interface the kernel
depends on and the pyclipper-backed implementation used by default.

Key classes:
- ClippingEngine: Protocol with combine / offset / union_to_forest
- PyclipperEngine: Implementation on top of pyclipper
"""

from slicegeom.clipping.base import ClippingEngine
from slicegeom.clipping.pyclipper_engine import PyclipperEngine

_default_engine: ClippingEngine | None = None


def get_default_engine() -> ClippingEngine:
    """Return the engine used when callers do not pass one."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PyclipperEngine()
    return _default_engine


def set_default_engine(engine: ClippingEngine | None) -> None:
    """Replace the default engine (None restores the pyclipper engine)."""
    global _default_engine
    _default_engine = engine


__all__ = [
    "ClippingEngine",
    "PyclipperEngine",
    "get_default_engine",
    "set_default_engine",
]
