"""Layer file I/O for slicegeom.

This module handles reading and writing layer files and rendering debug
views. It keeps file formats out of the domain models.

Key responsibilities:
- Load JSON layer files into Layer models
- Write cleaned layers and decomposed parts
- Render an HTML/SVG debug dump of a contour set

Key classes:
- LayerReader: Load layer files
- LayerWriter: Save layers and parts
"""

from slicegeom.io.debug_html import render_debug_svg, write_debug_html
from slicegeom.io.reader import LayerReader
from slicegeom.io.writer import LayerWriter

__all__ = [
    "LayerReader",
    "LayerWriter",
    "render_debug_svg",
    "write_debug_html",
]
