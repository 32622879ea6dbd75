"""Polygon operations for traced contours.

This module provides the pure functions that turn a traced edge loop into a
contour and transform existing contours:
- Edge loop to point sequence conversion
- Pixel-normal computation (points to vertices)
- Collinear simplification
- Continuous and stepped expansion along pixel-normals
- Bounding box and signed area calculation

All functions are pure, stateless, and assume points are ordered clockwise.
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from typing import TypeVar

from pixelcontour.domain import Bounds, Coordinate, Edge, Point, Vertex
from pixelcontour.exceptions import DegenerateContourError

T = TypeVar("T")

# Absolute tolerance for treating a float as zero
EPSILON = 1e-9


def approximately_zero(value: float) -> bool:
    """Check if a value is zero within EPSILON."""
    return math.isclose(value, 0.0, abs_tol=EPSILON)


def cross(a: Point, b: Point) -> float:
    """Return the 2D cross product (z component) of two vectors."""
    return a.x * b.y - a.y * b.x


def iter_triads(items: Sequence[T]) -> Iterator[tuple[T, T, T]]:
    """Yield (prev, current, next) for every item, wrapping at both ends.

    The previous item of the first element is the last element, and the next
    item of the last element is the first.

    Examples:
        >>> list(iter_triads([1, 2, 3]))
        [(3, 1, 2), (1, 2, 3), (2, 3, 1)]
    """
    n = len(items)
    for i in range(n):
        yield items[(i - 1) % n], items[i], items[(i + 1) % n]


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction in a y-up frame:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square pixels. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]
        >>> signed_area(square)  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def edges_to_points(edges: Iterable[Edge]) -> list[Coordinate]:
    """Convert a traced edge loop into an ordered list of corner points.

    Duplicate edges are removed (first occurrence wins) and the start corner
    of every remaining edge is returned in order. The end of the last edge is
    the start of the first, so it is not repeated.

    Args:
        edges: Edges in traversal order

    Returns:
        Corner coordinates in traversal order
    """
    unique_edges = list(dict.fromkeys(edges))
    return [edge.start for edge in unique_edges]


def points_to_vertices(points: Sequence[Point]) -> list[Vertex]:
    """Convert clockwise points into vertices with pixel-normals.

    For each point the two adjacent edge normals are averaged. The result is
    then scaled so that its dominant component has a magnitude of 1.

    Points whose previous and next neighbours coincide (a dangling spur) are
    dropped. When the two edge normals cancel out, the normal is derived from
    the difference of the unit offsets to the neighbours instead.

    Args:
        points: Positions in clockwise order

    Returns:
        Vertices in the same order as the input
    """
    vertices: list[Vertex] = []
    for prev, point, nxt in iter_triads(points):
        if nxt == prev:
            continue

        prev_edge_normal = (point - prev).perpendicular().normalized()
        next_edge_normal = (nxt - point).perpendicular().normalized()
        normal = (prev_edge_normal + next_edge_normal).normalized()

        # Edge normals cancel on direction reversals
        if approximately_zero(normal.x) and approximately_zero(normal.y):
            diff = (nxt - point).normalized() - (prev - point).normalized()
            normal = diff.perpendicular().normalized()

        dominant = max(abs(normal.x), abs(normal.y))
        if dominant > 0.0:
            normal = normal / dominant

        vertices.append(Vertex(point, normal))

    return vertices


def on_line_segment(point: Point, start: Point, end: Point) -> bool:
    """Check if a point lies on the segment from start to end.

    The point must be collinear with the segment and fall within its range
    along the segment's dominant axis (endpoints included).

    Args:
        point: The point to check
        start: Segment start point
        end: Segment end point

    Returns:
        True if the point lies on the segment

    Examples:
        >>> on_line_segment(Point(1, 0), Point(0, 0), Point(2, 0))
        True
        >>> on_line_segment(Point(1, 1), Point(0, 0), Point(2, 0))
        False
    """
    offset = point - start
    segment = end - start

    if not approximately_zero(cross(offset, segment)):
        return False

    if abs(segment.x) >= abs(segment.y):
        if segment.x > 0:
            return start.x <= point.x <= end.x
        return end.x <= point.x <= start.x

    if segment.y > 0:
        return start.y <= point.y <= end.y
    return end.y <= point.y <= start.y


def simplify(points: Sequence[Point]) -> list[Point]:
    """Remove points lying on a straight run between their neighbours.

    Each point is tested against its original neighbours, so every interior
    point of a straight run is removed in a single pass. Corners and 45 degree
    transitions are never collinear with both neighbours and are kept.

    Args:
        points: Positions in clockwise order

    Returns:
        The remaining points, in order
    """
    return [point for prev, point, nxt in iter_triads(points) if not on_line_segment(point, prev, nxt)]


def expand(vertices: Sequence[Vertex], amount: float) -> list[Vertex]:
    """Offset every vertex along its pixel-normal.

    Pixel-normals are recomputed from the moved positions. Edges may cross
    when the amount is large relative to narrow features.

    Args:
        vertices: Vertices in clockwise order
        amount: Distance to move (negative to shrink)

    Returns:
        The expanded vertices
    """
    points = [v.position + v.pixel_normal * amount for v in vertices]
    return points_to_vertices(points)


def remove_duplicate_points(points: Iterable[Point]) -> list[Point]:
    """Remove repeated points, keeping the first occurrence of each."""
    return list(dict.fromkeys(points))


def step_expand(vertices: Sequence[Vertex], steps: int) -> list[Vertex]:
    """Expand vertices in whole-pixel steps.

    Every step moves each vertex one pixel-normal outward (or inward for
    negative steps), merges points that land on the same position, and
    recomputes pixel-normals for the next step.

    Args:
        vertices: Vertices in clockwise order
        steps: Number of steps (negative to shrink)

    Returns:
        The expanded vertices; a copy of the input when steps is 0
    """
    expanded = list(vertices)
    sign = 1 if steps >= 0 else -1
    for _ in range(abs(steps)):
        points = [v.position + v.pixel_normal * sign for v in expanded]
        expanded = points_to_vertices(remove_duplicate_points(points))

    return expanded


def get_bounds(points: Sequence[Point]) -> Bounds:
    """Get the bounding box of a set of points.

    Args:
        points: At least 3 points

    Returns:
        Bounds of the points

    Raises:
        DegenerateContourError: If fewer than 3 points are given
    """
    if len(points) < 3:
        raise DegenerateContourError(len(points))

    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    max_x = max(p.x for p in points)
    max_y = max(p.y for p in points)

    return Bounds(Point(min_x, min_y), Point(max_x, max_y))
