"""pixelcontour - Trace the outline of pixel-art sprites.

pixelcontour finds the outer boundary of the opaque region of a sprite's
alpha channel and returns it as a closed, clockwise polygon. Every vertex
carries a "pixel-normal" that makes it easy to grow or shrink the outline in
whole-pixel steps, which is handy for wireframes and approximate colliders.

Example:
    $ pixelcontour detect hero.png --steps 1

From Python:
    >>> from pixelcontour import AlphaMask, detect
    >>> mask = AlphaMask.from_opaque(2, 1, [(0, 0), (1, 0)])
    >>> detect(mask).simplify().vertex_count
    4
"""

__version__ = "0.1.0"

from pixelcontour.core.detector import ContourDetector, detect
from pixelcontour.domain import AlphaMask, Bounds, Contour, Point, Vertex

__all__ = [
    "AlphaMask",
    "Bounds",
    "Contour",
    "ContourDetector",
    "Point",
    "Vertex",
    "__version__",
    "detect",
]
