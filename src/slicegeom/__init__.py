"""slicegeom - Planar polygon-set geometry for 3D-printing slicers.

slicegeom represents layer cross-sections as sets of closed integer-coordinate
contours and provides the queries and cleanup algorithms a slicer needs:
exact point-in-polygon tests, area/perimeter/centroid measurement, smoothing,
simplification, degenerate-vertex and small-area removal, and decomposition
of a region into independent outline+holes parts. Boolean operations and
offsetting are delegated to pyclipper.

Example:
    $ slicegeom clean model.layers.json --min-area 0.1

This will create model.layers-parts.json with every layer split into parts.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
