"""Configuration settings for pixelcontour."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from pixelcontour.domain import DEFAULT_ALPHA_THRESHOLD


class ExpansionMode(str, Enum):
    """How a detected contour is offset."""

    NONE = "none"
    CONTINUOUS = "continuous"
    STEPPED = "stepped"


class DetectionConfig(BaseModel):
    """Configuration for contour detection."""

    alpha_threshold: float = Field(
        default=DEFAULT_ALPHA_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Alpha values less than or equal to this are transparent",
    )
    auto_simplify: bool = Field(
        default=True,
        description="Remove collinear vertices after tracing",
    )


class ExpansionConfig(BaseModel):
    """Configuration for offsetting a detected contour.

    Continuous expansion moves vertices by ``amount`` along their
    pixel-normals. Stepped expansion moves them one pixel at a time for
    ``steps`` iterations, merging vertices that collide.
    """

    mode: ExpansionMode = Field(
        default=ExpansionMode.NONE,
        description="Expansion mode",
    )
    amount: float = Field(
        default=0.0,
        ge=-64.0,
        le=64.0,
        description="Continuous expansion distance in pixels (negative shrinks)",
    )
    steps: int = Field(
        default=0,
        ge=-64,
        le=64,
        description="Number of whole-pixel expansion steps (negative shrinks)",
    )

    @model_validator(mode="after")
    def _check_mode(self) -> "ExpansionConfig":
        if self.amount != 0.0 and self.mode != ExpansionMode.CONTINUOUS:
            raise ValueError("amount requires mode 'continuous'")
        if self.steps != 0 and self.mode != ExpansionMode.STEPPED:
            raise ValueError("steps requires mode 'stepped'")
        return self


class RegionConfig(BaseModel):
    """Sub-rectangle of an image to detect in (e.g. one sprite of a sheet).

    Coordinates are in texture space: the origin is the bottom-left pixel.
    """

    x: int = Field(default=0, ge=0, description="Left column")
    y: int = Field(default=0, ge=0, description="Bottom row")
    width: int = Field(ge=1, description="Region width in pixels")
    height: int = Field(ge=1, description="Region height in pixels")

    def as_box(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
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


class PixelContourSettings(BaseModel):
    """Main application settings."""

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    region: RegionConfig | None = Field(default=None)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PixelContourSettings:
    """Get default application settings."""
    return PixelContourSettings()
