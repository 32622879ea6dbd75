"""Unit tests for settings, CLI option parsing and logging utilities."""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from pixelcontour.cli.app import build_expansion, parse_region
from pixelcontour.config import (
    DetectionConfig,
    ExpansionConfig,
    ExpansionMode,
    RegionConfig,
    get_default_settings,
)
from pixelcontour.utils import ProcessingLogger, ProcessingStats


class TestSettings:
    """Tests for pydantic settings models."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = get_default_settings()
        assert settings.detection.alpha_threshold == 0.1
        assert settings.detection.auto_simplify is True
        assert settings.expansion.mode == ExpansionMode.NONE
        assert settings.region is None
        assert settings.processing.max_workers is None

    def test_threshold_range(self) -> None:
        """Test the alpha threshold must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            DetectionConfig(alpha_threshold=1.5)

    def test_amount_requires_continuous_mode(self) -> None:
        """Test a continuous amount with the wrong mode is rejected."""
        with pytest.raises(ValidationError, match="continuous"):
            ExpansionConfig(mode=ExpansionMode.STEPPED, amount=1.0)

    def test_steps_require_stepped_mode(self) -> None:
        """Test steps without stepped mode are rejected."""
        with pytest.raises(ValidationError, match="stepped"):
            ExpansionConfig(steps=2)

    def test_negative_steps_allowed(self) -> None:
        """Test shrinking is a valid configuration."""
        assert ExpansionConfig(mode=ExpansionMode.STEPPED, steps=-2).steps == -2

    def test_region_as_box(self) -> None:
        """Test region conversion to a box tuple."""
        assert RegionConfig(x=1, y=2, width=3, height=4).as_box() == (1, 2, 3, 4)

    def test_region_needs_positive_size(self) -> None:
        """Test empty regions are rejected."""
        with pytest.raises(ValidationError):
            RegionConfig(width=0, height=1)


class TestOptionParsing:
    """Tests for CLI option helpers."""

    def test_parse_region(self) -> None:
        """Test X,Y,W,H parsing."""
        assert parse_region("0, 16,16,16") == RegionConfig(x=0, y=16, width=16, height=16)
        assert parse_region(None) is None

    def test_parse_region_wrong_arity(self) -> None:
        """Test a region must have four parts."""
        with pytest.raises(ValueError, match="X,Y,W,H"):
            parse_region("1,2,3")

    def test_build_expansion(self) -> None:
        """Test each option selects its mode."""
        assert build_expansion(None, None).mode == ExpansionMode.NONE
        assert build_expansion(0.5, None) == ExpansionConfig(mode=ExpansionMode.CONTINUOUS, amount=0.5)
        assert build_expansion(None, -1) == ExpansionConfig(mode=ExpansionMode.STEPPED, steps=-1)

    def test_build_expansion_conflict(self) -> None:
        """Test --expand and --steps are mutually exclusive."""
        with pytest.raises(ValueError, match="not both"):
            build_expansion(1.0, 1)


class TestProcessingLogger:
    """Tests for ProcessingLogger statistics."""

    def test_counts(self) -> None:
        """Test each log call updates its counter."""
        processing_logger = ProcessingLogger(Mock())
        processing_logger.log_sprite_complete("a.png", vertex_count=4, duration_ms=2.0)
        processing_logger.log_sprite_complete("b.png", vertex_count=6, duration_ms=4.0)
        processing_logger.log_sprite_skipped("c", "not a file")
        processing_logger.log_sprite_error("d.png", ValueError("bad"))

        stats = processing_logger.stats
        assert stats.processed_count == 2
        assert stats.vertices_total == 10
        assert stats.skipped_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("d.png", "bad")]
        assert stats.avg_sprite_time_ms == 3.0
        assert stats.min_sprite_time_ms == 2.0
        assert stats.max_sprite_time_ms == 4.0

    def test_empty_stats(self) -> None:
        """Test timing properties without any sprites."""
        stats = ProcessingStats()
        assert stats.duration_seconds == 0.0
        assert stats.avg_sprite_time_ms is None

    def test_duration(self) -> None:
        """Test duration from start and end times."""
        stats = ProcessingStats(start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == 2.5

