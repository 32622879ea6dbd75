"""Alpha mask: the read-only opacity grid that contours are traced from."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from pixelcontour.domain.edge import Coordinate
from pixelcontour.exceptions import MaskError

DEFAULT_ALPHA_THRESHOLD = 0.1


@dataclass(frozen=True)
class AlphaMask:
    """A 2D grid of opacity samples with a transparency threshold.

    Samples are stored in a single flat row-major buffer, addressed as
    ``y * width + x``. Row 0 is the bottom row of the image.

    A coordinate is transparent if it is out of bounds or if its opacity is
    less than or equal to the threshold. Treating out-of-bounds positions as
    transparent lets the tracer walk past the mask edge without bounds checks.

    Attributes:
        width: Number of columns (>= 1)
        height: Number of rows (>= 1)
        opacities: Flat row-major opacity buffer of length width * height
        threshold: Opacity at or below which a sample is transparent
        name: Label used in error messages
    """

    width: int
    height: int
    opacities: tuple[float, ...]
    threshold: float = DEFAULT_ALPHA_THRESHOLD
    name: str = "mask"

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise MaskError(
                f"Mask '{self.name}' must be at least 1x1, got {self.width}x{self.height}"
            )
        if not isinstance(self.opacities, tuple):
            object.__setattr__(self, "opacities", tuple(self.opacities))
        expected = self.width * self.height
        if len(self.opacities) != expected:
            raise MaskError(
                f"Mask '{self.name}' expects {expected} samples, got {len(self.opacities)}"
            )

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[float]],
        threshold: float = DEFAULT_ALPHA_THRESHOLD,
        top_down: bool = False,
        name: str = "mask",
    ) -> "AlphaMask":
        """Build a mask from nested rows of opacity values.

        Args:
            rows: Rows of equal length. By default rows[0] is the bottom row.
            threshold: Transparency threshold
            top_down: If True, rows[0] is the top row (image order)
            name: Label used in error messages

        Returns:
            AlphaMask instance

        Raises:
            MaskError: If rows are empty or ragged
        """
        if not rows or not rows[0]:
            raise MaskError(f"Mask '{name}' has no rows")

        width = len(rows[0])
        ordered = list(reversed(rows)) if top_down else list(rows)
        flat: list[float] = []
        for row in ordered:
            if len(row) != width:
                raise MaskError(
                    f"Mask '{name}' has ragged rows: expected width {width}, got {len(row)}"
                )
            flat.extend(float(v) for v in row)

        return cls(width=width, height=len(rows), opacities=tuple(flat), threshold=threshold, name=name)

    @classmethod
    def from_opaque(
        cls,
        width: int,
        height: int,
        coordinates: Iterable[tuple[int, int]],
        threshold: float = DEFAULT_ALPHA_THRESHOLD,
        name: str = "mask",
    ) -> "AlphaMask":
        """Build a mask where the given (x, y) pixels are fully opaque.

        Every other pixel has an opacity of 0.0.
        """
        buffer = [0.0] * (width * height)
        for x, y in coordinates:
            if not (0 <= x < width and 0 <= y < height):
                raise MaskError(f"Pixel ({x}, {y}) lies outside {width}x{height} mask '{name}'")
            buffer[y * width + x] = 1.0
        return cls(width=width, height=height, opacities=tuple(buffer), threshold=threshold, name=name)

    def with_threshold(self, threshold: float) -> "AlphaMask":
        """Return a copy of this mask using a different threshold."""
        return replace(self, threshold=threshold)

    def contains(self, coord: Coordinate) -> bool:
        """Check if a coordinate lies within the mask."""
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def opacity(self, x: int, y: int) -> float:
        """Get the opacity sample at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the mask
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside {self.width}x{self.height} mask")
        return self.opacities[y * self.width + x]

    def is_transparent(self, coord: Coordinate) -> bool:
        """Check if a coordinate is transparent (or out of bounds)."""
        if not self.contains(coord):
            return True
        return self.opacities[coord.y * self.width + coord.x] <= self.threshold

    def opaque_count(self) -> int:
        """Count samples above the threshold."""
        return sum(1 for v in self.opacities if v > self.threshold)
