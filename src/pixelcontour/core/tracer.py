"""Moore-neighbourhood boundary tracing over an alpha mask.

The tracer finds the first opaque pixel (scanning columns left to right, each
column bottom to top) and walks clockwise around the island containing it,
emitting the unit pixel edges that separate opaque pixels from transparent
ones. Other islands are ignored, and holes are not traced separately.

The walk stops when it returns to the start pixel from the same direction it
started in (Jacob's stopping criterion), not merely when it revisits the start
pixel. A walk that comes back to the start pixel from above never meets that
condition, so the walk also stops at the first repeated (pixel, entry) state.

See: http://www.imageprocessingplace.com/downloads_V3/root_downloads/tutorials/contour_tracing_Abeer_George_Ghuneim/moore.html
"""

import logging
from dataclasses import dataclass

from pixelcontour.core.geometry import edges_to_points
from pixelcontour.domain import AlphaMask, Contour, Coordinate, Edge, Point
from pixelcontour.exceptions import EmptyRegionError

logger = logging.getLogger(__name__)

NORTH = Coordinate(0, 1)
EAST = Coordinate(1, 0)
SOUTH = Coordinate(0, -1)
WEST = Coordinate(-1, 0)
ONE = Coordinate(1, 1)
ZERO = Coordinate(0, 0)

# Clockwise ring of neighbour offsets, starting at north-west
ORDERED_OFFSETS: tuple[Coordinate, ...] = (
    Coordinate(-1, 1),
    NORTH,
    Coordinate(1, 1),
    EAST,
    Coordinate(1, -1),
    SOUTH,
    Coordinate(-1, -1),
    WEST,
)

# The walk starts as if it had entered the start pixel from below
START_OFFSET = SOUTH

# Pixel side for each cardinal offset, as (start corner, end corner) offsets.
# Following the sides in W, N, E, S order traces the pixel clockwise.
_SIDE_CORNERS: dict[Coordinate, tuple[Coordinate, Coordinate]] = {
    WEST: (ZERO, NORTH),
    NORTH: (NORTH, ONE),
    EAST: (ONE, EAST),
    SOUTH: (EAST, ZERO),
}


def next_offset(offset: Coordinate) -> Coordinate:
    """Get the offset following ``offset`` in the clockwise ring.

    Raises:
        ValueError: If ``offset`` is not a neighbour offset
    """
    idx = ORDERED_OFFSETS.index(offset)
    return ORDERED_OFFSETS[(idx + 1) % len(ORDERED_OFFSETS)]


def side_edge(pixel: Coordinate, offset: Coordinate) -> Edge | None:
    """Get the side of ``pixel`` facing a neighbour offset.

    Only cardinal offsets have a side; diagonal offsets return None.

    Args:
        pixel: The pixel coordinate
        offset: Offset from the pixel towards a neighbour

    Returns:
        The edge on that side of the pixel, or None for diagonal offsets
    """
    corners = _SIDE_CORNERS.get(offset)
    if corners is None:
        return None
    return Edge(pixel + corners[0], pixel + corners[1])


@dataclass(frozen=True)
class TraceResult:
    """The raw outcome of tracing a mask.

    Attributes:
        start: The start pixel of the walk
        edges: Boundary edges in the order they were emitted (clockwise).
            Edges may repeat where the walk revisits a pixel.
        steps: Number of pixel moves the walk made
    """

    start: Coordinate
    edges: tuple[Edge, ...]
    steps: int

    def corner_points(self) -> list[Coordinate]:
        """Get the deduplicated corner points of the edge loop."""
        return edges_to_points(self.edges)

    def to_contour(self, simplify: bool = False) -> Contour:
        """Build a contour from the traced edges.

        Args:
            simplify: If True, remove collinear vertices

        Returns:
            Contour with pixel-normals computed for every corner point
        """
        contour = Contour.from_points(Point(float(c.x), float(c.y)) for c in self.corner_points())
        return contour.simplify() if simplify else contour


class BoundaryTracer:
    """Traces the outer boundary of the first island in an alpha mask.

    The tracer holds no state between calls and may be reused.

    Example:
        tracer = BoundaryTracer(mask)
        result = tracer.trace()
        contour = result.to_contour(simplify=True)
    """

    def __init__(self, mask: AlphaMask) -> None:
        """Initialize the tracer.

        Args:
            mask: The mask to trace
        """
        self.mask = mask

    def find_start(self) -> Coordinate:
        """Find the first opaque pixel, scanning columns then rows.

        Returns:
            Coordinate of the first opaque pixel

        Raises:
            EmptyRegionError: If the mask has no opaque pixels
        """
        for x in range(self.mask.width):
            for y in range(self.mask.height):
                coord = Coordinate(x, y)
                if not self.mask.is_transparent(coord):
                    return coord

        raise EmptyRegionError(self.mask.name)

    def trace(self) -> TraceResult:
        """Walk the boundary of the first island.

        Returns:
            TraceResult with the clockwise edge loop

        Raises:
            EmptyRegionError: If the mask has no opaque pixels
        """
        start = self.find_start()
        start_entry = start + START_OFFSET

        edges: list[Edge] = []
        curr = start
        entry = start_entry
        steps = 0
        # The walk is deterministic, so a repeated (pixel, entry) state means
        # the loop has closed. The start state itself is never repeated when
        # the walk returns to the start pixel from above.
        visited: set[tuple[Coordinate, Coordinate]] = set()

        while True:
            offset = next_offset(entry - curr)
            curr_entry = entry
            found = False

            for _ in range(len(ORDERED_OFFSETS)):
                candidate = curr + offset
                if not self.mask.is_transparent(candidate):
                    found = True
                    break

                edge = side_edge(curr, offset)
                if edge is not None:
                    edges.append(edge)

                curr_entry = candidate
                offset = next_offset(offset)

            if not found:
                # Only the start pixel can lack opaque neighbours; any later
                # pixel is adjacent to the one the walk came from
                logger.debug("Traced isolated pixel at (%d, %d)", start.x, start.y)
                break

            curr = candidate
            entry = curr_entry
            steps += 1

            # Side of the new pixel facing the transparent neighbour it was entered from
            arrival = side_edge(curr, entry - curr)
            if arrival is not None:
                edges.append(arrival)

            if curr == start and entry == start_entry:
                break

            state = (curr, entry)
            if state in visited:
                logger.debug("Boundary walk closed on a repeated state at (%d, %d)", curr.x, curr.y)
                break
            visited.add(state)

        logger.debug(
            "Traced boundary from (%d, %d): %d edges in %d steps",
            start.x, start.y, len(edges), steps
        )
        return TraceResult(start=start, edges=tuple(edges), steps=steps)
