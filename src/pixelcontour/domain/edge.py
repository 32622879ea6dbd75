"""Lattice types used while tracing a mask.

- Coordinate: An integer 2D position (pixel index or pixel corner)
- Edge: A directed unit segment between two pixel corners
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coordinate:
    """An integer position on the pixel lattice.

    Used both for pixel indices and for pixel-corner positions. The origin is
    the bottom-left texel, with x increasing right and y increasing up.

    Attributes:
        x: Column index
        y: Row index (0 is the bottom row)
    """

    x: int
    y: int

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x - other.x, self.y - other.y)

    def is_cardinal(self) -> bool:
        """Check if this offset is a unit step along exactly one axis."""
        return abs(self.x) + abs(self.y) == 1

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, unit-length, axis-aligned segment between pixel corners.

    Edges never lie on pixel centers. The direction encodes traversal order,
    so two edges covering the same segment in opposite directions are
    distinct.

    Attributes:
        start: Corner where the edge begins
        end: Corner where the edge ends
    """

    start: Coordinate
    end: Coordinate
