"""Core processing algorithms for slicegeom.

This module contains the algorithms that sit on top of the domain types:

- Part decomposition (nesting forest to outline+holes parts)
- Layer cleanup (degenerate vertices, smoothing, simplification, small areas)
- Parallel per-layer orchestration

All services are designed to be:
- Stateless (safe for use in worker processes)
- Free of shared mutable state between layers

Key functions:
- forest_to_parts: Flatten a ContourNode forest into parts
- split_into_parts: Union a contour set and split it into parts
- process_layer: Picklable per-layer worker function

Key classes:
- LayerCleaner: Runs the configured cleanup steps on one layer
- LayerProcessor: Cleans many layers in parallel
"""

from slicegeom.core.cleanup import LayerCleaner
from slicegeom.core.parts import forest_to_parts, split_into_parts
from slicegeom.core.processor import LayerProcessor, process_layer

__all__ = [
    "LayerCleaner",
    "LayerProcessor",
    "forest_to_parts",
    "process_layer",
    "split_into_parts",
]
