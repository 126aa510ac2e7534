"""Contour cleanup pipeline for one layer.

Raw slicer output contains backtracking spikes, runs of tiny edges, nearly
collinear vertices and specks of area too small to print. The cleaner runs
the kernel's cleanup algorithms in a fixed order and then decomposes the
result into outline+holes parts:

1. Remove degenerate vertices
2. Smooth away short edges
3. Simplify nearly-collinear vertices
4. Drop small areas
5. Union and split into parts
"""

from collections.abc import Callable

from slicegeom.clipping.base import ClippingEngine
from slicegeom.config import CleanupConfig
from slicegeom.core.parts import split_into_parts
from slicegeom.domain import ContourSet, Layer, LayerParts

StepCallback = Callable[[str, ContourSet], None]


class LayerCleaner:
    """Runs the cleanup steps configured in a CleanupConfig.

    The cleaner holds no per-layer state and is safe to reuse across layers.

    Example:
        cleaner = LayerCleaner(CleanupConfig(min_area_mm2=0.1))
        result = cleaner.process(layer)
    """

    def __init__(self, config: CleanupConfig, engine: ClippingEngine | None = None) -> None:
        """Initialize the cleaner.

        Args:
            config: Cleanup settings
            engine: Clipping engine for the part split (default engine if None)
        """
        self.config = config
        self.engine = engine

    def clean(self, contours: ContourSet, on_step: StepCallback | None = None) -> ContourSet:
        """Apply the enabled cleanup steps.

        Args:
            contours: Input contours (left untouched)
            on_step: Optional callback(step_name, contours) after each step

        Returns:
            Cleaned contour set
        """
        result = contours.copy()

        if self.config.remove_degenerate:
            result = result.remove_degenerate_verts()
            if on_step is not None:
                on_step("remove_degenerate", result)

        if self.config.smooth_remove_length > 0:
            result = result.smooth(self.config.smooth_remove_length, self.config.smooth_min_area)
            if on_step is not None:
                on_step("smooth", result)

        if self.config.simplify_error_distance > 0:
            result = result.simplify(self.config.simplify_error_distance)
            if on_step is not None:
                on_step("simplify", result)

        if self.config.min_area_mm2 > 0:
            result.remove_small_areas(self.config.min_area_mm2)
            if on_step is not None:
                on_step("remove_small_areas", result)

        return result

    def split(self, contours: ContourSet) -> list[ContourSet]:
        """Decompose cleaned contours into parts."""
        return split_into_parts(contours, union_all=self.config.union_all, engine=self.engine)

    def process(self, layer: Layer, on_step: StepCallback | None = None) -> LayerParts:
        """Clean a layer and split it into parts.

        Args:
            layer: Layer to process
            on_step: Optional callback(step_name, contours) after each step

        Returns:
            LayerParts for the layer's Z height
        """
        cleaned = self.clean(layer.contours, on_step=on_step)
        return LayerParts(z=layer.z, parts=self.split(cleaned))
