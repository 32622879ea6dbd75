"""Unit tests for the sprite I/O layer.

Tests for SpriteReader and read_alpha_mask.
"""

from pathlib import Path

import pytest
from PIL import Image

from pixelcontour.domain import Coordinate
from pixelcontour.exceptions import MaskError, MaskLoadError
from pixelcontour.io.reader import SpriteReader, read_alpha_mask


@pytest.fixture
def sprite_path(tmp_path: Path) -> Path:
    """A 3x2 RGBA sprite with an opaque top-left pixel and a half-alpha bottom-right pixel."""
    image = Image.new("RGBA", (3, 2), (0, 0, 0, 0))
    image.putpixel((0, 0), (255, 0, 0, 255))
    image.putpixel((2, 1), (0, 255, 0, 128))
    path = tmp_path / "hero.png"
    image.save(path)
    return path


class TestSpriteReader:
    """Tests for SpriteReader class."""

    def test_init(self):
        """Test SpriteReader initialization."""
        path = Path("hero.png")
        reader = SpriteReader(path)
        assert reader._sprite_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = SpriteReader(Path("nonexistent.png"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_size_before_load(self):
        """Test accessing size before loading raises RuntimeError."""
        reader = SpriteReader(Path("hero.png"))
        with pytest.raises(RuntimeError, match="Sprite not loaded"):
            _ = reader.size

    def test_alpha_mask_before_load(self):
        """Test extracting a mask before loading raises RuntimeError."""
        reader = SpriteReader(Path("hero.png"))
        with pytest.raises(RuntimeError, match="Sprite not loaded"):
            reader.alpha_mask()

    def test_load_invalid_image(self, tmp_path: Path):
        """Test a file that is not an image raises MaskLoadError."""
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        reader = SpriteReader(path)
        with pytest.raises(MaskLoadError) as exc_info:
            reader.load()
        assert exc_info.value.path == str(path)

    def test_size_and_name(self, sprite_path: Path):
        """Test size and name after loading."""
        reader = SpriteReader(sprite_path)
        reader.load()
        assert reader.size == (3, 2)
        assert reader.mode == "RGBA"
        assert reader.name == "hero"
        reader.close()

    def test_rows_flipped_to_bottom_origin(self, sprite_path: Path):
        """Test the top image row becomes the last mask row."""
        reader = SpriteReader(sprite_path)
        reader.load()
        mask = reader.alpha_mask(threshold=0.1)
        reader.close()

        assert (mask.width, mask.height) == (3, 2)
        assert mask.opacity(0, 1) == 1.0
        assert mask.opacity(2, 0) == pytest.approx(128 / 255)
        assert mask.opacity(0, 0) == 0.0
        assert mask.name == "hero"

    def test_threshold_applied(self, sprite_path: Path):
        """Test the half-alpha pixel depends on the threshold."""
        reader = SpriteReader(sprite_path)
        reader.load()
        assert reader.alpha_mask(threshold=0.1).opaque_count() == 2
        assert reader.alpha_mask(threshold=0.6).opaque_count() == 1
        reader.close()

    def test_region_uses_texture_coordinates(self, sprite_path: Path):
        """Test a region is measured from the bottom-left pixel."""
        reader = SpriteReader(sprite_path)
        reader.load()
        mask = reader.alpha_mask(threshold=0.1, region=(0, 1, 1, 1))
        reader.close()

        assert (mask.width, mask.height) == (1, 1)
        assert not mask.is_transparent(Coordinate(0, 0))

    def test_region_out_of_range(self, sprite_path: Path):
        """Test a region larger than the image raises MaskError."""
        reader = SpriteReader(sprite_path)
        reader.load()
        with pytest.raises(MaskError, match="does not fit"):
            reader.alpha_mask(region=(2, 0, 2, 1))
        reader.close()

    def test_close_releases_image(self, sprite_path: Path):
        """Test close drops the loaded image."""
        reader = SpriteReader(sprite_path)
        reader.load()
        reader.close()
        assert reader._image is None


class TestReadAlphaMask:
    """Tests for read_alpha_mask."""

    def test_without_alpha_is_opaque(self, tmp_path: Path):
        """Test an RGB image is fully opaque."""
        path = tmp_path / "tile.png"
        Image.new("RGB", (2, 2), (10, 20, 30)).save(path)

        mask = read_alpha_mask(path)
        assert mask.opaque_count() == 4

    def test_accepts_string_path(self, sprite_path: Path):
        """Test a plain string path works."""
        mask = read_alpha_mask(str(sprite_path), threshold=0.6)
        assert mask.opaque_count() == 1
        assert mask.name == "hero"
