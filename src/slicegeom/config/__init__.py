"""Configuration management for slicegeom.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CleanupConfig: Contour cleanup pipeline settings
- ClippingConfig: Clipping/offsetting engine settings
- ProcessingConfig: Layer processing settings
- LoggingConfig: Logging settings
- SliceGeomSettings: Main application settings
"""

from slicegeom.config.settings import (
    CleanupConfig,
    ClippingConfig,
    LoggingConfig,
    ProcessingConfig,
    SliceGeomSettings,
    get_default_settings,
)

__all__ = [
    "CleanupConfig",
    "ClippingConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "SliceGeomSettings",
    "get_default_settings",
]
