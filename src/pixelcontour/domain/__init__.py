"""Domain models for pixelcontour.

This module contains the core domain models representing alpha masks,
traced pixel edges, and the resulting contours. All models are:

- Immutable (using frozen dataclasses)
- Picklable, so contours can be returned from worker processes
- Independent of any image library

Key classes:
- Coordinate: An integer lattice position
- Edge: A directed unit segment between pixel corners
- AlphaMask: Read-only opacity grid with a transparency threshold
- Point: A 2D floating point position or direction
- Vertex: A contour point with its pixel-normal
- Bounds: Axis-aligned bounding box
- Contour: A closed, clockwise sequence of vertices
"""

from pixelcontour.domain.contour import Bounds, Contour, Point, Vertex
from pixelcontour.domain.edge import Coordinate, Edge
from pixelcontour.domain.mask import DEFAULT_ALPHA_THRESHOLD, AlphaMask

__all__: list[str] = [
    "DEFAULT_ALPHA_THRESHOLD",
    # Lattice types
    "Coordinate",
    "Edge",
    "AlphaMask",
    # Polygon types
    "Point",
    "Vertex",
    "Bounds",
    "Contour",
]
