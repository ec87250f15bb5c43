"""Configuration management for penpath.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ThresholdConfig: Hit-testing, snapping and click thresholds
- HandleConfig: Generated control point sizes
- BoundsConfig: Padding and renormalization settings
- SamplingConfig: Curve flattening and numerical settings
- EditorConfig: State machine behaviour switches
- LoggingConfig: Logging settings
- PenPathSettings: Main application settings
"""

from penpath.config.settings import (
    BoundsConfig,
    EditorConfig,
    HandleConfig,
    LoggingConfig,
    PenPathSettings,
    SamplingConfig,
    ThresholdConfig,
    get_default_settings,
)

__all__ = [
    "BoundsConfig",
    "EditorConfig",
    "HandleConfig",
    "LoggingConfig",
    "PenPathSettings",
    "SamplingConfig",
    "ThresholdConfig",
    "get_default_settings",
]
