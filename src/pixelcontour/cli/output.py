"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from pixelcontour.domain import Contour

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch detection.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]pixelcontour[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_mask_info(sprite_path: str, width: int, height: int, opaque: int, threshold: float) -> None:
    """Print alpha mask information.

    Args:
        sprite_path: Path to the sprite file
        width: Mask width in pixels
        height: Mask height in pixels
        opaque: Number of opaque pixels
        threshold: Transparency threshold
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(sprite_path)
    console.print(line1)
    console.print(
        f"  {width}x{height} px {SYM_DOT} {opaque:,} opaque {SYM_DOT} threshold {threshold:g}"
    )


def _fmt(value: float) -> str:
    return f"{value:g}"


def print_contour(contour: Contour, show_normals: bool = True) -> None:
    """Print a contour's vertices and bounds.

    Args:
        contour: The contour to print
        show_normals: Whether to include the pixel-normal column
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right", style="dim")
    table.add_column("position", justify="left")
    if show_normals:
        table.add_column("pixel normal", justify="left")

    for i, vertex in enumerate(contour.vertices):
        position = f"({_fmt(vertex.position.x)}, {_fmt(vertex.position.y)})"
        if show_normals:
            normal = f"({_fmt(vertex.pixel_normal.x)}, {_fmt(vertex.pixel_normal.y)})"
            table.add_row(str(i), position, normal)
        else:
            table.add_row(str(i), position)

    console.print(table)

    bounds = contour.bounds
    console.print(
        f"\n  {contour.vertex_count} vertices {SYM_DOT} "
        f"min ({_fmt(bounds.min.x)}, {_fmt(bounds.min.y)}) {SYM_DOT} "
        f"size ({_fmt(bounds.size.x)}, {_fmt(bounds.size.y)}) {SYM_DOT} "
        f"area {_fmt(abs(contour.signed_area()))}"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_batch_summary(
    contours: dict[str, Contour],
    total_time_s: float,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print batch results with summary.

    Args:
        contours: Detected contours keyed by sprite path
        total_time_s: Total processing time in seconds
        errors: Number of errors encountered
        avg_time_ms: Average processing time per sprite in milliseconds
        min_time_ms: Minimum processing time per sprite in milliseconds
        max_time_ms: Maximum processing time per sprite in milliseconds
    """
    time_str = _format_time(total_time_s)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    for sprite, contour in sorted(contours.items()):
        line = Text("  ")
        line.append(sprite, style="bold")
        line.append(f" {SYM_DOT} {contour.vertex_count} vertices")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {len(contours)} sprites {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of sprites processed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} sprites completed {SYM_DOT} {cancelled} tasks cancelled")
