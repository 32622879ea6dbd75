"""Sprite reader for loading alpha masks from image files.

This module provides the SpriteReader class for loading images with Pillow
and extracting their alpha channel as an AlphaMask.
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from pixelcontour.domain import DEFAULT_ALPHA_THRESHOLD, AlphaMask
from pixelcontour.exceptions import MaskError, MaskLoadError


class SpriteReader:
    """Loads sprite images and extracts alpha masks.

    Images store rows top-down, while masks use a bottom-left origin; the
    reader flips rows so that mask row 0 is the bottom row of the image.
    Images without an alpha channel are treated as fully opaque.

    Example:
        reader = SpriteReader(Path("hero.png"))
        reader.load()
        mask = reader.alpha_mask(threshold=0.1)
        reader.close()
    """

    def __init__(self, sprite_path: Path) -> None:
        """Initialize the sprite reader.

        Args:
            sprite_path: Path to the image file
        """
        self._sprite_path = sprite_path
        self._image: Image.Image | None = None
        self._mode: str | None = None

    def load(self) -> None:
        """Load the image file.

        Raises:
            FileNotFoundError: If the image file does not exist
            MaskLoadError: If the file is not a readable image
        """
        if not self._sprite_path.exists():
            raise FileNotFoundError(f"Sprite file not found: {self._sprite_path}")

        try:
            with Image.open(self._sprite_path) as image:
                self._mode = image.mode
                self._image = image.convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            raise MaskLoadError(str(self._sprite_path), str(e)) from e

    def _require_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Sprite not loaded. Call load() first.")
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height) of the image.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        return self._require_image().size

    @property
    def mode(self) -> str:
        """Return the Pillow mode of the file before RGBA conversion (e.g. "P", "RGB").

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        if self._mode is None:
            raise RuntimeError("Sprite not loaded. Call load() first.")
        return self._mode

    @property
    def name(self) -> str:
        """Return the sprite's file name without extension."""
        return self._sprite_path.stem

    def alpha_mask(
        self,
        threshold: float = DEFAULT_ALPHA_THRESHOLD,
        region: tuple[int, int, int, int] | None = None,
    ) -> AlphaMask:
        """Extract the alpha channel as a mask.

        Args:
            threshold: Transparency threshold for the mask
            region: Optional (x, y, width, height) sub-rectangle in texture
                coordinates (origin at the bottom-left pixel)

        Returns:
            AlphaMask with opacities scaled to [0, 1]

        Raises:
            RuntimeError: If the image has not been loaded yet
            MaskError: If the region does not fit inside the image
        """
        image = self._require_image()
        img_width, img_height = image.size

        if region is None:
            x, y, width, height = 0, 0, img_width, img_height
        else:
            x, y, width, height = region
            if x < 0 or y < 0 or width < 1 or height < 1 or x + width > img_width or y + height > img_height:
                raise MaskError(
                    f"Region {region} does not fit inside {img_width}x{img_height} sprite '{self.name}'"
                )

        # Pillow boxes are top-down: (left, upper, right, lower)
        upper = img_height - (y + height)
        box = (x, upper, x + width, upper + height)
        alpha = image.getchannel("A").crop(box)

        top_down = alpha.tobytes()
        flat: list[float] = []
        for row in range(height - 1, -1, -1):
            flat.extend(v / 255.0 for v in top_down[row * width : (row + 1) * width])

        return AlphaMask(
            width=width,
            height=height,
            opacities=tuple(flat),
            threshold=threshold,
            name=self.name,
        )

    def close(self) -> None:
        """Release the loaded image."""
        if self._image is not None:
            self._image.close()
            self._image = None
            self._mode = None


def read_alpha_mask(
    sprite_path: str | Path,
    threshold: float = DEFAULT_ALPHA_THRESHOLD,
    region: tuple[int, int, int, int] | None = None,
) -> AlphaMask:
    """Load an image file and return its alpha mask.

    Args:
        sprite_path: Path to the image file
        threshold: Transparency threshold for the mask
        region: Optional (x, y, width, height) sub-rectangle in texture coordinates

    Returns:
        AlphaMask of the image (or region)

    Raises:
        FileNotFoundError: If the image file does not exist
        MaskLoadError: If the file is not a readable image
        MaskError: If the region does not fit inside the image
    """
    reader = SpriteReader(Path(sprite_path))
    reader.load()
    try:
        return reader.alpha_mask(threshold=threshold, region=region)
    finally:
        reader.close()
