"""HTML/SVG debug dump of a contour set.

Draws every part of the set into a 500x500 SVG: outlines filled gray,
holes filled red. Only meant for eyeballing slicer output.
"""

from pathlib import Path

from slicegeom.clipping.base import ClippingEngine
from slicegeom.domain import ContourSet, Point
from slicegeom.exceptions import LayerSaveError

CANVAS_SIZE = 500


def render_debug_svg(
    contours: ContourSet,
    dot_the_vertices: bool = False,
    engine: ClippingEngine | None = None,
) -> str:
    """Render the parts of ``contours`` as an SVG element.

    Coordinates are scaled by the larger of the model's width and height so
    the aspect ratio is kept.

    Args:
        contours: Contours to draw
        dot_the_vertices: Also draw a dot on every vertex
        engine: Clipping engine used for the part split

    Returns:
        SVG markup
    """
    lines = [
        '<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'style="width: {CANVAS_SIZE}px; height:{CANVAS_SIZE}px">'
    ]
    if len(contours) == 0:
        lines.append("</svg>")
        return "\n".join(lines)

    model_min = contours.bounding_min()
    model_size = contours.bounding_max() - model_min
    extent = max(model_size.x, model_size.y, 1)

    def project(p: Point) -> tuple[float, float]:
        return (
            (p.x - model_min.x) / extent * CANVAS_SIZE,
            (p.y - model_min.y) / extent * CANVAS_SIZE,
        )

    for part in contours.split_into_parts(engine=engine):
        for idx, contour in enumerate(part):
            coords = " ".join(f"{x:f},{y:f}" for x, y in map(project, contour))
            fill = "gray" if idx == 0 else "red"
            lines.append(
                f'<polygon points="{coords}" style="fill:{fill}; stroke:black;stroke-width:1" />'
            )
            if dot_the_vertices:
                for x, y in map(project, contour):
                    lines.append(
                        f'<circle cx="{x:f}" cy="{y:f}" r="2" stroke="black" '
                        'stroke-width="3" fill="black" />'
                    )

    lines.append("</svg>")
    return "\n".join(lines)


def write_debug_html(
    contours: ContourSet,
    path: Path,
    dot_the_vertices: bool = False,
    engine: ClippingEngine | None = None,
) -> None:
    """Write an HTML page containing the debug SVG.

    Args:
        contours: Contours to draw
        path: Output HTML path
        dot_the_vertices: Also draw a dot on every vertex
        engine: Clipping engine used for the part split

    Raises:
        LayerSaveError: If the file cannot be written
    """
    svg = render_debug_svg(contours, dot_the_vertices=dot_the_vertices, engine=engine)
    try:
        path.write_text(f"<!DOCTYPE html><html><body>{svg}\n</body></html>", encoding="utf-8")
    except OSError as e:
        raise LayerSaveError(str(path), str(e)) from e
