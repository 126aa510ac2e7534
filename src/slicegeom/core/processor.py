"""Parallel processing orchestration for the layer cleanup pipeline.

Layers are independent of each other, so they are cleaned in worker
processes. Each worker rebuilds its own contour objects from a serialized
layer; no kernel object is ever shared between processes.

Key components:
- process_layer: Top-level picklable function for parallel execution
- LayerProcessor: Main orchestrator class for layer processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from slicegeom.clipping import PyclipperEngine
from slicegeom.config import CleanupConfig, ClippingConfig, SliceGeomSettings, get_default_settings
from slicegeom.core.cleanup import LayerCleaner
from slicegeom.domain import Layer, LayerParts
from slicegeom.exceptions import LayerProcessingError, ProcessingCancelledError
from slicegeom.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_layer(
    layer_dict: dict[str, Any],
    cleanup_dict: dict[str, Any],
    clipping_dict: dict[str, Any],
) -> dict[str, Any]:
    """Clean and split a single layer.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the layer, runs the cleanup pipeline, and returns the result.

    Args:
        layer_dict: Serialized layer (from Layer.to_dict())
        cleanup_dict: Serialized cleanup configuration
        clipping_dict: Serialized clipping configuration

    Returns:
        Dictionary containing either:
        - Success: {"layer": layer_parts_dict, "contours_in": int, "steps": list, "duration_ms": float}
        - Error: {"error": str, "z": int, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        layer = Layer.from_dict(layer_dict)
        cleaner = LayerCleaner(
            config=CleanupConfig(**cleanup_dict),
            engine=PyclipperEngine(ClippingConfig(**clipping_dict)),
        )

        steps: list[tuple[str, int, int]] = []

        def record_step(name: str, contours) -> None:
            steps.append((name, len(contours), contours.point_count()))

        result = cleaner.process(layer, on_step=record_step)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "layer": result.to_dict(),
            "contours_in": len(layer.contours),
            "steps": steps,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "z": layer_dict.get("z", 0),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class LayerProcessor:
    """Orchestrates parallel layer cleanup.

    Manages the complete workflow:
    1. Skip empty layers
    2. Process layers in worker processes (or inline for one worker)
    3. Collect results and update statistics

    Example:
        processor = LayerProcessor(SliceGeomSettings())
        results, stats = processor.process(layers, max_workers=4)
    """

    def __init__(self, config: SliceGeomSettings | None = None) -> None:
        """Initialize layer processor with configuration.

        Args:
            config: Settings containing cleanup, clipping and processing config
                (defaults if None)
        """
        config = config or get_default_settings()
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        layers: list[Layer],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> tuple[list[LayerParts], ProcessingStats]:
        """Clean every layer and split it into parts.

        Args:
            layers: Layers to process
            max_workers: Maximum worker processes (None = config value / auto)
            progress_callback: Optional callback(completed, total, z, success)
                for progress updates

        Returns:
            Tuple of (results sorted by z, ProcessingStats). Skipped empty
            layers are included with no parts; failed layers are not.

        Raises:
            ProcessingCancelledError: If processing is cancelled by user
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting layer processing",
            layer_count=len(layers),
            max_workers=max_workers,
        )

        to_process: list[Layer] = []
        skipped: list[LayerParts] = []
        for layer in layers:
            if self.config.processing.skip_empty and layer.is_empty():
                self.processing_logger.log_layer_skipped(layer.z, "empty layer")
                skipped.append(LayerParts(z=layer.z))
                continue
            to_process.append(layer)

        results: list[LayerParts] = []
        try:
            if to_process:
                if max_workers == 1:
                    results = self._process_layers_inline(to_process, progress_callback)
                else:
                    results = self._process_layers_parallel(
                        to_process, max_workers, progress_callback
                    )
            else:
                self.logger.info("No layers to process")
        except KeyboardInterrupt:
            stats.end_time = time.time()
            if not stats.was_cancelled:
                stats.was_cancelled = True
                stats.cancelled_count = (
                    len(to_process) - stats.processed_count - stats.error_count
                )
            raise ProcessingCancelledError(stats.processed_count, stats.cancelled_count) from None

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            parts=stats.parts_created,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        # Skipped layers are written with no parts
        results.extend(skipped)
        results.sort(key=lambda r: r.z)
        return results, stats

    def _task_args(self) -> tuple[dict[str, Any], dict[str, Any]]:
        return (
            self.config.cleanup.model_dump(),
            self.config.clipping.model_dump(),
        )

    def _handle_result(self, z: int, result: dict[str, Any]) -> LayerParts | None:
        if "error" in result:
            self.processing_logger.log_layer_error(
                z=result["z"],
                error=LayerProcessingError(result["z"], result["error"]),
                traceback=result.get("traceback"),
            )
            return None

        for step, contours, points in result["steps"]:
            self.processing_logger.log_cleanup_step(z, step, contours, points)

        layer_parts = LayerParts.from_dict(result["layer"])
        self.processing_logger.log_layer_complete(
            z=z,
            contours_in=result["contours_in"],
            contours_out=layer_parts.contour_count,
            parts=len(layer_parts.parts),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return layer_parts

    def _process_layers_inline(
        self,
        layers: list[Layer],
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> list[LayerParts]:
        """Process layers one after another in this process."""
        cleanup_dict, clipping_dict = self._task_args()
        results: list[LayerParts] = []
        total = len(layers)

        for completed, layer in enumerate(layers, start=1):
            self.processing_logger.log_layer_start(layer.z)
            result = process_layer(layer.to_dict(), cleanup_dict, clipping_dict)
            layer_parts = self._handle_result(layer.z, result)
            if layer_parts is not None:
                results.append(layer_parts)
            if progress_callback is not None:
                progress_callback(completed, total, layer.z, layer_parts is not None)

        return results

    def _process_layers_parallel(
        self,
        layers: list[Layer],
        max_workers: int | None,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> list[LayerParts]:
        """Process layers in parallel using ProcessPoolExecutor.

        Args:
            layers: Layers to process
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, z, success)

        Returns:
            Results of the successfully processed layers
        """
        cleanup_dict, clipping_dict = self._task_args()
        stats = self.processing_logger.stats
        results: list[LayerParts] = []

        self.logger.info(
            "Starting parallel processing",
            layer_count=len(layers),
            max_workers=max_workers,
        )

        total = len(layers)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for layer in layers:
                future = executor.submit(process_layer, layer.to_dict(), cleanup_dict, clipping_dict)
                pending_futures[future] = layer.z

            try:
                for future in as_completed(list(pending_futures)):
                    z = pending_futures.pop(future)
                    layer_parts = None

                    try:
                        layer_parts = self._handle_result(z, future.result())
                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_layer_error(
                            z=z,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    if layer_parts is not None:
                        results.append(layer_parts)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, z, layer_parts is not None)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results
