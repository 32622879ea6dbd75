"""Exception hierarchy for pixelcontour."""


class PixelContourError(Exception):
    """Base exception for all pixelcontour errors."""

    pass


class MaskError(PixelContourError):
    """Invalid alpha mask data or dimensions."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MaskLoadError(MaskError):
    """Error loading a mask from an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load mask from '{path}': {reason}")


class GeometryError(PixelContourError):
    """Errors in geometric calculations."""

    pass


class ContourError(GeometryError):
    """Error with contour data or operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DegenerateContourError(ContourError):
    """Too few points to form a contour with well-defined bounds."""

    def __init__(self, point_count: int) -> None:
        self.point_count = point_count
        super().__init__(f"A contour needs at least 3 points, got {point_count}")


class TraceError(PixelContourError):
    """Boundary tracing failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmptyRegionError(TraceError):
    """The mask contains no opaque pixels to trace."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No non-transparent pixels found in '{name}'")


class ProcessingCancelledError(PixelContourError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
