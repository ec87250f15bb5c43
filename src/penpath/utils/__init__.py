"""Utility functions for penpath.

This module provides utility functions including:

- Logging setup and configuration
- Pen tool session statistics
"""

from penpath.utils.logging import (
    EditLogger,
    EditStats,
    configure_logging,
)

__all__ = [
    "EditLogger",
    "EditStats",
    "configure_logging",
]
