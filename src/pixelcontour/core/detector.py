"""Contour detection entry points.

Two ways to detect a contour:
- detect: One call from mask to contour
- ContourDetector: Two-phase API that exposes the raw trace before the
  contour is built, so tracing can happen separately from when the contour
  is needed

Detection is a pure function of the mask; nothing is cached between calls.
"""

import logging

from pixelcontour.core.tracer import BoundaryTracer, TraceResult
from pixelcontour.domain import AlphaMask, Contour

logger = logging.getLogger(__name__)


class ContourDetector:
    """Detects the contour of the first opaque island in a mask.

    It is not recommended to use this class with:
    - Large masks (tracing cost grows with the boundary length)
    - Masks with jagged edges
    - Masks with multiple islands (only the first one is traced)

    Masks with holes work, but the holes themselves are not contoured.

    Example:
        detector = ContourDetector(mask)
        result = detector.trace()
        contour = result.to_contour(simplify=True)
    """

    def __init__(self, mask: AlphaMask, threshold: float | None = None) -> None:
        """Initialize the detector.

        Args:
            mask: The mask to detect a contour in
            threshold: Overrides the mask's own threshold if given
        """
        if threshold is not None and threshold != mask.threshold:
            mask = mask.with_threshold(threshold)
        self.mask = mask

    def trace(self) -> TraceResult:
        """Trace the boundary of the first island.

        Raises:
            EmptyRegionError: If the mask has no opaque pixels
        """
        return BoundaryTracer(self.mask).trace()

    def find_contour(self, auto_simplify: bool = True) -> Contour:
        """Trace the mask and build its contour.

        Args:
            auto_simplify: If True, the contour is simplified

        Returns:
            The contour shape

        Raises:
            EmptyRegionError: If the mask has no opaque pixels
        """
        result = self.trace()
        contour = result.to_contour(simplify=auto_simplify)
        logger.debug(
            "Detected contour in '%s': %d edges, %d vertices",
            self.mask.name, len(result.edges), contour.vertex_count
        )
        return contour


def detect(mask: AlphaMask, threshold: float | None = None, simplify: bool = False) -> Contour:
    """Detect the contour of the first opaque island in a mask.

    Args:
        mask: The mask to trace
        threshold: Overrides the mask's own threshold if given
        simplify: If True, collinear vertices are removed

    Returns:
        Clockwise contour of the island's outer boundary

    Raises:
        EmptyRegionError: If the mask has no opaque pixels

    Examples:
        >>> mask = AlphaMask.from_opaque(1, 1, [(0, 0)], threshold=0.0)
        >>> [p.to_tuple() for p in detect(mask).points]
        [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]
    """
    return ContourDetector(mask, threshold=threshold).find_contour(auto_simplify=simplify)
