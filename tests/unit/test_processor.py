"""Tests for parallel processing orchestration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from slicegeom.config import (
    CleanupConfig,
    ClippingConfig,
    LoggingConfig,
    ProcessingConfig,
    SliceGeomSettings,
)
from slicegeom.core.processor import LayerProcessor, process_layer
from slicegeom.domain import ContourSet, Layer, LayerParts
from slicegeom.exceptions import ProcessingCancelledError
from slicegeom.utils import ProcessingStats


@pytest.fixture
def settings(tmp_path: Path) -> SliceGeomSettings:
    """Create settings that log into the test's temp directory."""
    return SliceGeomSettings(
        processing=ProcessingConfig(max_workers=1),
        logging=LoggingConfig(log_file=tmp_path / "slicegeom.log"),
    )


@pytest.fixture
def layers(square_with_hole: ContourSet) -> list[Layer]:
    """Create an unordered stack of layers, one of them empty."""
    speck_and_square = ContourSet.from_tuples([
        [(0, 0), (2000, 0), (2000, 2000), (0, 2000)],
        [(5000, 0), (5100, 0), (5100, 100), (5000, 100)],
    ])
    return [
        Layer(z=600, contours=speck_and_square),
        Layer(z=200, contours=square_with_hole),
        Layer(z=400),
    ]


class TestProcessLayer:
    """Tests for the picklable worker function."""

    def test_success(self, square_with_hole: ContourSet) -> None:
        """Test processing a layer with a hole."""
        result = process_layer(
            Layer(z=200, contours=square_with_hole).to_dict(),
            CleanupConfig().model_dump(),
            ClippingConfig().model_dump(),
        )

        assert "error" not in result
        assert result["contours_in"] == 2
        assert [step[0] for step in result["steps"]] == ["remove_degenerate", "simplify"]
        assert result["duration_ms"] >= 0

        layer_parts = LayerParts.from_dict(result["layer"])
        assert layer_parts.z == 200
        assert len(layer_parts.parts) == 1
        assert len(layer_parts.parts[0]) == 2

    def test_error_is_returned(self) -> None:
        """Test that a malformed layer comes back as an error result."""
        result = process_layer({"z": 800}, CleanupConfig().model_dump(), ClippingConfig().model_dump())

        assert result["z"] == 800
        assert "contours" in result["error"]
        assert "Traceback" in result["traceback"]


class TestLayerProcessor:
    """Tests for LayerProcessor class."""

    def test_inline_processing(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test processing in this process with one worker."""
        processor = LayerProcessor(settings)
        results, stats = processor.process(layers)

        assert [r.z for r in results] == [200, 400, 600]
        assert results[1].parts == []
        assert stats.processed_count == 2
        assert stats.skipped_count == 1
        assert stats.error_count == 0
        assert stats.contours_in == 4
        assert stats.contours_out == 4
        assert stats.parts_created == 3
        assert len(stats.layer_timings_ms) == 2

    def test_min_area_drops_specks(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test that cleanup settings reach the workers."""
        settings.cleanup = CleanupConfig(min_area_mm2=0.1)
        results, stats = LayerProcessor(settings).process(layers)

        by_z = {r.z: r for r in results}
        assert len(by_z[600].parts) == 1
        assert stats.contours_out == 3

    def test_progress_callback(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test progress reporting for every processed layer."""
        calls = []
        LayerProcessor(settings).process(
            layers, progress_callback=lambda *args: calls.append(args)
        )
        assert calls == [(1, 2, 600, True), (2, 2, 200, True)]

    def test_keep_empty_layers(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test that empty layers are processed when skipping is off."""
        settings.processing = ProcessingConfig(max_workers=1, skip_empty=False)
        results, stats = LayerProcessor(settings).process(layers)

        assert [r.z for r in results] == [200, 400, 600]
        assert results[1].parts == []
        assert stats.skipped_count == 0

    def test_no_layers(self, settings: SliceGeomSettings) -> None:
        """Test processing nothing."""
        results, stats = LayerProcessor(settings).process([])
        assert results == []
        assert stats.processed_count == 0

    def test_parallel_processing(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test processing in worker processes."""
        results, stats = LayerProcessor(settings).process(layers, max_workers=2)

        assert [r.z for r in results] == [200, 400, 600]
        assert stats.processed_count == 2
        assert stats.parts_created == 3

    def test_worker_error_recorded(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test that a failed layer is logged and counted, not raised."""
        failure = {"error": "boom", "z": 600, "traceback": "Traceback", "duration_ms": 1.0}
        with patch("slicegeom.core.processor.process_layer", return_value=failure):
            results, stats = LayerProcessor(settings).process(layers)

        assert [r.z for r in results] == [400]
        assert stats.error_count == 2
        assert stats.errors[0] == (600, "Error processing layer z=600: boom")

    def test_cancellation(self, settings: SliceGeomSettings, layers: list[Layer]) -> None:
        """Test that Ctrl+C becomes ProcessingCancelledError with counts."""

        def interrupt(*_: object) -> None:
            raise KeyboardInterrupt

        processor = LayerProcessor(settings)
        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.process(layers, progress_callback=interrupt)

        assert exc_info.value.processed_count == 1
        assert exc_info.value.pending_count == 1
        assert processor.processing_logger.stats.was_cancelled

    def test_log_file_written(
        self, settings: SliceGeomSettings, layers: list[Layer], tmp_path: Path
    ) -> None:
        """Test that processing logs to the configured file."""
        LayerProcessor(settings).process(layers)
        assert "Layer processed" in (tmp_path / "slicegeom.log").read_text(encoding="utf-8")


class TestProcessingStats:
    """Tests for ProcessingStats timing helpers."""

    def test_empty_stats(self) -> None:
        """Test defaults before any layer is processed."""
        stats = ProcessingStats()
        assert stats.duration_seconds == 0.0
        assert stats.avg_layer_time_ms is None
        assert stats.min_layer_time_ms is None

    def test_timings(self) -> None:
        """Test aggregate timings."""
        stats = ProcessingStats(layer_timings_ms=[1.0, 3.0], start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == 2.5
        assert stats.avg_layer_time_ms == 2.0
        assert stats.min_layer_time_ms == 1.0
        assert stats.max_layer_time_ms == 3.0
