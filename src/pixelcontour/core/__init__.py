"""Core processing algorithms for pixelcontour.

This module contains the core algorithms for:

- Boundary tracing (Moore-neighbourhood walk over an alpha mask)
- Edge loop to polygon conversion
- Pixel-normal computation
- Contour transforms (simplify, expand, step expand)
- Parallel batch detection over sprite files

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- detect: Detect the contour of a mask in one call
- edges_to_points: Deduplicate an edge loop into corner points
- points_to_vertices: Compute pixel-normals for clockwise points
- simplify: Remove collinear points
- expand: Offset vertices along their pixel-normals
- step_expand: Offset vertices in whole-pixel steps
- get_bounds: Bounding box of a point set

Key classes:
- BoundaryTracer: Walks the boundary of the first island
- TraceResult: Raw traced edge loop
- ContourDetector: Two-phase detection API
- SpriteProcessor: Batch detection orchestrator
"""

from pixelcontour.core.detector import ContourDetector, detect
from pixelcontour.core.geometry import (
    edges_to_points,
    expand,
    get_bounds,
    on_line_segment,
    points_to_vertices,
    remove_duplicate_points,
    signed_area,
    simplify,
    step_expand,
)
from pixelcontour.core.processor import SpriteProcessor, process_sprite, transform_contour
from pixelcontour.core.tracer import BoundaryTracer, TraceResult

__all__ = [
    # Tracing classes
    "BoundaryTracer",
    "ContourDetector",
    # Processor classes
    "SpriteProcessor",
    "TraceResult",
    # Detection functions
    "detect",
    # Geometry functions
    "edges_to_points",
    "expand",
    "get_bounds",
    "on_line_segment",
    "points_to_vertices",
    "process_sprite",
    "remove_duplicate_points",
    "signed_area",
    "simplify",
    "step_expand",
    "transform_contour",
]
