"""Utility functions for slicegeom.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics reporting helpers
"""

from slicegeom.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
