"""Configuration settings for slicegeom."""

from pathlib import Path

from pydantic import BaseModel, Field

from slicegeom.domain.operations import FillRule, JoinStyle


class CleanupConfig(BaseModel):
    """Configuration for the per-layer cleanup pipeline.

    Lengths are integer units (microns); a zero value disables the step.
    """

    remove_degenerate: bool = Field(
        default=True,
        description="Remove vertices where a contour doubles back on itself",
    )
    smooth_remove_length: int = Field(
        default=0,
        ge=0,
        description="Remove points attached to edges shorter than this",
    )
    smooth_min_area: int = Field(
        default=0,
        ge=0,
        description="Contours with a smaller area (square units) are not smoothed",
    )
    simplify_error_distance: int = Field(
        default=10,
        ge=0,
        description="Maximum deviation allowed when simplifying contours",
    )
    min_area_mm2: float = Field(
        default=0.0,
        ge=0.0,
        description="Drop contours smaller than this area (square millimetres)",
    )
    union_all: bool = Field(
        default=False,
        description="Merge overlapping contours (non-zero) instead of even-odd when splitting parts",
    )


class ClippingConfig(BaseModel):
    """Configuration for the clipping engine."""

    miter_limit: float = Field(
        default=1.2,
        ge=1.0,
        description="Miter limit for offsetting, as a multiple of the offset distance",
    )
    arc_tolerance: float = Field(
        default=10.0,
        gt=0.0,
        description="Maximum deviation of round joins from a true arc (units)",
    )
    join_style: JoinStyle = Field(
        default=JoinStyle.MITER,
        description="Default corner style for offsets",
    )
    union_fill_rule: FillRule = Field(
        default=FillRule.NON_ZERO,
        description="Fill rule for unions",
    )
    default_fill_rule: FillRule = Field(
        default=FillRule.EVEN_ODD,
        description="Fill rule for difference, intersection and xor",
    )


class ProcessingConfig(BaseModel):
    """Configuration for layer processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    skip_empty: bool = Field(
        default=True,
        description="Pass layers without contours through without cleanup",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SliceGeomSettings(BaseModel):
    """Main application settings."""

    cleanup: CleanupConfig = Field(default_factory=CleanupConfig)
    clipping: ClippingConfig = Field(default_factory=ClippingConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SliceGeomSettings:
    """Get default application settings."""
    return SliceGeomSettings()
