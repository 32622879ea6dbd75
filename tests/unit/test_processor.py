"""Tests for parallel processing orchestration."""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from PIL import Image

from pixelcontour.config import (
    DetectionConfig,
    ExpansionConfig,
    ExpansionMode,
    PixelContourSettings,
)
from pixelcontour.core.processor import SpriteProcessor, process_sprite, transform_contour
from pixelcontour.domain import Contour, Point


@pytest.fixture
def bar_sprite(tmp_path: Path) -> Path:
    """Create a 4x3 sprite with an opaque 2x1 bar on the bottom row."""
    image = Image.new("RGBA", (4, 3), (0, 0, 0, 0))
    image.putpixel((1, 2), (255, 255, 255, 255))
    image.putpixel((2, 2), (255, 255, 255, 255))
    path = tmp_path / "bar.png"
    image.save(path)
    return path


@pytest.fixture
def square_contour() -> Contour:
    """Create a clockwise unit square contour."""
    return Contour.from_points([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])


@pytest.fixture
def settings() -> PixelContourSettings:
    """Create test settings."""
    return PixelContourSettings()


class TestTransformContour:
    """Tests for transform_contour function."""

    def test_none_is_identity(self, square_contour: Contour):
        """Test that no expansion returns the input."""
        assert transform_contour(square_contour, ExpansionConfig()) is square_contour

    def test_continuous(self, square_contour: Contour):
        """Test continuous expansion."""
        config = ExpansionConfig(mode=ExpansionMode.CONTINUOUS, amount=1.0)
        result = transform_contour(square_contour, config)
        assert result.bounds.min == Point(-1, -1)
        assert result.bounds.max == Point(2, 2)

    def test_stepped(self, square_contour: Contour):
        """Test stepped expansion."""
        config = ExpansionConfig(mode=ExpansionMode.STEPPED, steps=1)
        result = transform_contour(square_contour, config)
        assert result == square_contour.step_expand(1)


class TestProcessSprite:
    """Tests for process_sprite function."""

    def test_process_sprite(self, bar_sprite: Path, settings: PixelContourSettings):
        """Test detecting a sprite returns a picklable contour."""
        config_dict = settings.model_dump(include={"detection", "expansion", "region"})

        result = process_sprite(str(bar_sprite), config_dict)

        assert "error" not in result
        assert result["edge_count"] == 6
        assert result["duration_ms"] >= 0
        contour = result["contour"]
        assert [p.to_tuple() for p in contour.points] == [(1, 0), (1, 1), (3, 1), (3, 0)]

    def test_process_sprite_without_simplify(self, bar_sprite: Path):
        """Test auto_simplify can be turned off."""
        settings = PixelContourSettings(detection=DetectionConfig(auto_simplify=False))
        config_dict = settings.model_dump(include={"detection", "expansion", "region"})

        result = process_sprite(str(bar_sprite), config_dict)

        assert result["contour"].vertex_count == 6

    def test_process_sprite_with_region(self, bar_sprite: Path):
        """Test a region shifts the contour into region coordinates."""
        config_dict = {"region": {"x": 2, "y": 0, "width": 2, "height": 1}}

        result = process_sprite(str(bar_sprite), config_dict)

        assert [p.to_tuple() for p in result["contour"].points] == [(0, 0), (0, 1), (1, 1), (1, 0)]

    def test_process_sprite_handles_error(self, tmp_path: Path):
        """Test that process_sprite reports errors instead of raising."""
        path = tmp_path / "empty.png"
        Image.new("RGBA", (2, 2), (0, 0, 0, 0)).save(path)

        result = process_sprite(str(path), {})

        assert "error" in result
        assert "No non-transparent pixels" in result["error"]
        assert result["path"] == str(path)
        assert "traceback" in result


class TestSpriteProcessor:
    """Tests for SpriteProcessor class."""

    def test_init(self, settings: PixelContourSettings):
        """Test SpriteProcessor initialization."""
        with patch('pixelcontour.core.processor.configure_logging') as mock_logging:
            mock_logging.return_value = Mock()
            processor = SpriteProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    @patch('pixelcontour.core.processor.configure_logging')
    def test_process_skips_missing_files(
        self,
        mock_logging,
        settings: PixelContourSettings,
        tmp_path: Path,
    ):
        """Test that paths which are not files are skipped."""
        mock_logging.return_value = Mock()

        processor = SpriteProcessor(settings)
        contours, stats = processor.process([tmp_path / "missing.png", tmp_path])

        assert contours == {}
        assert stats.processed_count == 0
        assert stats.skipped_count == 2
        assert stats.duration_seconds >= 0

    @patch('pixelcontour.core.processor.configure_logging')
    @patch('pixelcontour.core.processor.ProcessPoolExecutor')
    def test_process_with_sprites(
        self,
        mock_executor_class,
        mock_logging,
        settings: PixelContourSettings,
        bar_sprite: Path,
        square_contour: Contour,
    ):
        """Test processing collects contours and statistics."""
        mock_logging.return_value = Mock()

        # Mock executor
        mock_executor = MagicMock()
        mock_future = MagicMock()
        mock_future.result.return_value = {
            "contour": square_contour,
            "edge_count": 4,
            "duration_ms": 2.5,
        }
        mock_executor.submit.return_value = mock_future
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        progress = Mock()

        # Mock as_completed to return futures immediately
        with patch('pixelcontour.core.processor.as_completed') as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = SpriteProcessor(settings)
            contours, stats = processor.process(
                [bar_sprite], max_workers=1, progress_callback=progress
            )

            assert contours == {str(bar_sprite): square_contour}
            assert stats.processed_count == 1
            assert stats.vertices_total == 4
            assert stats.error_count == 0
            assert stats.avg_sprite_time_ms == 2.5
            progress.assert_called_once_with(1, 1, str(bar_sprite), True)

    @patch('pixelcontour.core.processor.configure_logging')
    @patch('pixelcontour.core.processor.ProcessPoolExecutor')
    def test_process_handles_errors(
        self,
        mock_executor_class,
        mock_logging,
        settings: PixelContourSettings,
        bar_sprite: Path,
    ):
        """Test that processing errors are handled gracefully."""
        mock_logging.return_value = Mock()

        # Mock executor to return error
        mock_executor = MagicMock()
        mock_future = MagicMock()
        mock_future.result.return_value = {
            "error": "Test error",
            "path": str(bar_sprite),
            "traceback": "Traceback...",
        }
        mock_executor.submit.return_value = mock_future
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        with patch('pixelcontour.core.processor.as_completed') as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = SpriteProcessor(settings)
            contours, stats = processor.process([bar_sprite], max_workers=1)

            assert contours == {}
            assert stats.processed_count == 0
            assert stats.error_count == 1
            assert stats.errors == [(str(bar_sprite), "Test error")]

    @patch('pixelcontour.core.processor.configure_logging')
    @patch('pixelcontour.core.processor.ProcessPoolExecutor')
    def test_process_uses_configured_workers(
        self,
        mock_executor_class,
        mock_logging,
        bar_sprite: Path,
    ):
        """Test max_workers falls back to the processing config."""
        mock_logging.return_value = Mock()
        settings = PixelContourSettings()
        settings.processing.max_workers = 3

        mock_executor = MagicMock()
        mock_executor.__enter__.return_value = mock_executor
        mock_executor_class.return_value = mock_executor

        with patch('pixelcontour.core.processor.as_completed') as mock_as_completed:
            mock_as_completed.return_value = []

            processor = SpriteProcessor(settings)
            processor.process([bar_sprite])

        mock_executor_class.assert_called_once_with(max_workers=3)
