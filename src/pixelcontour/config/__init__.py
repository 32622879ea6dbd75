"""Configuration management for pixelcontour.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- DetectionConfig: Threshold and simplification settings
- ExpansionConfig: Contour offset settings
- RegionConfig: Sprite sub-rectangle
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- PixelContourSettings: Main application settings
"""

from pixelcontour.config.settings import (
    DetectionConfig,
    ExpansionConfig,
    ExpansionMode,
    LoggingConfig,
    PixelContourSettings,
    ProcessingConfig,
    RegionConfig,
    get_default_settings,
)

__all__ = [
    "DetectionConfig",
    "ExpansionConfig",
    "ExpansionMode",
    "LoggingConfig",
    "PixelContourSettings",
    "ProcessingConfig",
    "RegionConfig",
    "get_default_settings",
]
