"""Logging utilities for slicegeom."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    contours_in: int = 0
    contours_out: int = 0
    parts_created: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    layer_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_layer_time_ms(self) -> float | None:
        if not self.layer_timings_ms:
            return None
        return sum(self.layer_timings_ms) / len(self.layer_timings_ms)

    @property
    def min_layer_time_ms(self) -> float | None:
        return min(self.layer_timings_ms) if self.layer_timings_ms else None

    @property
    def max_layer_time_ms(self) -> float | None:
        return max(self.layer_timings_ms) if self.layer_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"slicegeom_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("slicegeom")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_layer_start(self, z: int) -> None:
        """Log start of layer processing."""
        self._logger.debug("Processing layer", z=z)

    def log_layer_complete(
        self,
        z: int,
        contours_in: int,
        contours_out: int,
        parts: int,
        duration_ms: float,
    ) -> None:
        """Log successful layer processing."""
        self._logger.info(
            "Layer processed",
            z=z,
            contours_in=contours_in,
            contours_out=contours_out,
            parts=parts,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.contours_in += contours_in
        self._stats.contours_out += contours_out
        self._stats.parts_created += parts
        self._stats.layer_timings_ms.append(duration_ms)

    def log_layer_skipped(self, z: int, reason: str) -> None:
        """Log skipped layer."""
        self._logger.debug("Layer skipped", z=z, reason=reason)
        self._stats.skipped_count += 1

    def log_layer_error(
        self,
        z: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log layer processing error."""
        self._logger.error(
            "Layer processing failed",
            z=z,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((z, str(error)))

    def log_cleanup_step(self, z: int, step: str, contours: int, points: int) -> None:
        """Log the contour and point count after a cleanup step."""
        self._logger.debug(
            "Cleanup step",
            z=z,
            step=step,
            contours=contours,
            points=points,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
