"""Core geometric types for contour representation.

This module defines the polygon types produced by contour detection:
- Point: A 2D floating point position or direction
- Vertex: A contour point paired with its pixel-normal
- Bounds: Axis-aligned bounding box of a contour
- Contour: An immutable, closed, clockwise sequence of vertices
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

# Vectors shorter than this normalize to zero
NORMALIZE_EPSILON = 1e-10


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or direction) in 2D space.

    Immutable and hashable for use in sets/dicts. Equality is exact.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def length(self) -> float:
        """Euclidean length of this vector."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Point":
        """Return the unit vector in this direction.

        Vectors of (near) zero length normalize to the zero vector.
        """
        length = self.length()
        if length < NORMALIZE_EPSILON:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def perpendicular(self) -> "Point":
        """Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)."""
        return Point(-self.y, self.x)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Vertex:
    """A contour vertex and its pixel-normal.

    The pixel-normal is the outward normal rounded to the best-fit pixel
    direction: its dominant component has a magnitude of exactly 1. A 45
    degree normal of (0.707, 0.707) becomes (1, 1), while (1, 0) is unchanged.
    Expanding by 1 along a (1, 1) pixel-normal moves the vertex one pixel up
    and one pixel right.

    A vertex at the tip of a one-pixel spur, where the outline doubles back on
    itself, has a pixel-normal of (0, 0) and does not move when expanded.

    Attributes:
        position: Vertex position in pixels
        pixel_normal: Outward direction snapped to the pixel grid
    """

    position: Point
    pixel_normal: Point


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounds of a contour.

    Note:
        ``center`` is ``size / 2``, which only matches the geometric center
        ``(min + max) / 2`` when ``min`` is the origin.

    Attributes:
        min: Component-wise minimum
        max: Component-wise maximum
    """

    min: Point
    max: Point

    @property
    def size(self) -> Point:
        return self.max - self.min

    @property
    def center(self) -> Point:
        return self.size / 2


@dataclass(frozen=True)
class Contour:
    """A closed contour around the opaque region of a mask.

    Vertices are stored in clockwise order (in a y-up frame); the last vertex
    connects back to the first. Contours are immutable: simplify, expand and
    step_expand all return new instances.

    Attributes:
        vertices: Vertices in clockwise order
        bounds: Bounding box of the vertex positions (computed on creation)

    Raises:
        DegenerateContourError: If fewer than 3 vertices are supplied
    """

    vertices: tuple[Vertex, ...]
    bounds: Bounds = field(init=False, compare=False)

    def __post_init__(self) -> None:
        from pixelcontour.core.geometry import get_bounds

        if not isinstance(self.vertices, tuple):
            object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "bounds", get_bounds([v.position for v in self.vertices]))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Contour":
        """Create a contour from clockwise points, computing pixel-normals.

        Args:
            points: Positions in clockwise order

        Returns:
            Contour instance
        """
        from pixelcontour.core.geometry import points_to_vertices

        return cls(tuple(points_to_vertices(list(points))))

    @property
    def points(self) -> Iterator[Point]:
        """Lazily iterate over vertex positions."""
        return (v.position for v in self.vertices)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Clockwise contours (as produced by tracing) have negative area.
        """
        from pixelcontour.core.geometry import signed_area

        return signed_area(list(self.points))

    def simplify(self) -> "Contour":
        """Return a copy without redundant collinear vertices.

        Only vertices lying on a straight run between their neighbours are
        removed. Corners and diagonal transitions are kept.
        """
        from pixelcontour.core.geometry import simplify

        return Contour.from_points(simplify(list(self.points)))

    def expand(self, amount: float) -> "Contour":
        """Return a copy offset along each vertex's pixel-normal.

        Large amounts can make edges cross each other, especially around
        narrow features. Negative amounts shrink the contour.

        Args:
            amount: Distance to expand by (negative to shrink)
        """
        from pixelcontour.core.geometry import expand

        return Contour(tuple(expand(self.vertices, amount)))

    def step_expand(self, steps: int) -> "Contour":
        """Return a copy expanded in whole-pixel steps.

        Each step moves vertices one pixel-normal and merges vertices that
        land on the same position, which avoids some of the overlapping
        edges a single large expand can produce.

        Args:
            steps: Number of steps (negative to shrink)
        """
        from pixelcontour.core.geometry import step_expand

        return Contour(tuple(step_expand(self.vertices, steps)))
