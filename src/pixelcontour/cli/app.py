"""CLI application entry point for pixelcontour.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from pixelcontour import __version__
from pixelcontour.cli.output import (
    console,
    create_progress,
    print_batch_summary,
    print_cancellation_summary,
    print_contour,
    print_error,
    print_header,
    print_mask_info,
    print_processing_info,
    print_step,
)
from pixelcontour.config import (
    DetectionConfig,
    ExpansionConfig,
    ExpansionMode,
    LoggingConfig,
    PixelContourSettings,
    ProcessingConfig,
    RegionConfig,
)
from pixelcontour.core import ContourDetector, SpriteProcessor, transform_contour
from pixelcontour.exceptions import (
    EmptyRegionError,
    MaskLoadError,
    PixelContourError,
    ProcessingCancelledError,
)
from pixelcontour.io import read_alpha_mask
from pixelcontour.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="pixelcontour",
    help="Trace the outline of pixel-art sprites from their alpha channel.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]pixelcontour[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Trace the outline of pixel-art sprites from their alpha channel."""


def parse_region(value: str | None) -> RegionConfig | None:
    """Parse an "X,Y,W,H" region string.

    Raises:
        ValueError: If the string does not hold four integers
    """
    if value is None:
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Expected X,Y,W,H but got '{value}'")
    x, y, width, height = (int(p) for p in parts)
    return RegionConfig(x=x, y=y, width=width, height=height)


def build_expansion(expand: float | None, steps: int | None) -> ExpansionConfig:
    """Build expansion settings from the mutually exclusive CLI options."""
    if expand is not None and steps is not None:
        raise ValueError("Use either --expand or --steps, not both")
    if expand is not None:
        return ExpansionConfig(mode=ExpansionMode.CONTINUOUS, amount=expand)
    if steps is not None:
        return ExpansionConfig(mode=ExpansionMode.STEPPED, steps=steps)
    return ExpansionConfig()


@app.command()
def detect(
    sprite: Annotated[
        Path,
        typer.Argument(
            help="Path to the sprite image (PNG or any Pillow-readable format)",
            show_default=False,
        ),
    ],
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Alpha values at or below this are transparent (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.1,
    region: Annotated[
        str | None,
        typer.Option(
            "--region",
            "-r",
            help="Sprite sub-rectangle X,Y,W,H (origin at bottom-left)",
        ),
    ] = None,
    no_simplify: Annotated[
        bool,
        typer.Option(
            "--no-simplify",
            help="Keep collinear vertices",
        ),
    ] = False,
    expand: Annotated[
        float | None,
        typer.Option(
            "--expand",
            "-e",
            help="Expand (or shrink if negative) by this many pixels",
        ),
    ] = None,
    steps: Annotated[
        int | None,
        typer.Option(
            "--steps",
            "-s",
            help="Expand (or shrink if negative) in whole-pixel steps",
        ),
    ] = None,
    normals: Annotated[
        bool,
        typer.Option(
            "--normals/--no-normals",
            help="Show pixel-normals",
        ),
    ] = True,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print the vertex table",
        ),
    ] = False,
) -> None:
    """Detect and print the contour of a single sprite.

    Example:
        pixelcontour detect hero.png --steps 1
    """
    if not sprite.is_file():
        print_error(
            f"Input file not found: {sprite}",
            details=f"The file '{sprite}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    try:
        settings = PixelContourSettings(
            detection=DetectionConfig(alpha_threshold=threshold, auto_simplify=not no_simplify),
            expansion=build_expansion(expand, steps),
            region=parse_region(region),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except (ValueError, ValidationError) as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if log_file is not None:
        configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )

    if not quiet:
        print_header(__version__)
        print_step("Loading sprite")

    try:
        mask = read_alpha_mask(
            sprite,
            threshold=settings.detection.alpha_threshold,
            region=settings.region.as_box() if settings.region else None,
        )

        if not quiet:
            print_mask_info(
                sprite_path=str(sprite),
                width=mask.width,
                height=mask.height,
                opaque=mask.opaque_count(),
                threshold=mask.threshold,
            )
            print_step("Tracing contour")

        contour = ContourDetector(mask).find_contour(auto_simplify=settings.detection.auto_simplify)
        contour = transform_contour(contour, settings.expansion)

    except EmptyRegionError:
        print_error(
            f"No opaque pixels in {sprite}",
            details=f"Every pixel has alpha <= {threshold:g}. Try a lower --threshold.",
        )
        raise typer.Exit(code=1)
    except MaskLoadError as e:
        print_error(f"Could not load sprite: {e.reason}")
        raise typer.Exit(code=1)
    except PixelContourError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_contour(contour, show_normals=normals)


@app.command()
def batch(
    sprites: Annotated[
        list[Path],
        typer.Argument(
            help="Sprite images to process",
            show_default=False,
        ),
    ],
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Alpha values at or below this are transparent (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.1,
    expand: Annotated[
        float | None,
        typer.Option(
            "--expand",
            "-e",
            help="Expand (or shrink if negative) by this many pixels",
        ),
    ] = None,
    steps: Annotated[
        int | None,
        typer.Option(
            "--steps",
            "-s",
            help="Expand (or shrink if negative) in whole-pixel steps",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Detect contours for many sprites in parallel."""
    try:
        settings = PixelContourSettings(
            detection=DetectionConfig(alpha_threshold=threshold),
            expansion=build_expansion(expand, steps),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )
    except (ValueError, ValidationError) as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        actual_workers = workers if workers else os.cpu_count() or 1
        print_step(f"Processing {len(sprites)} sprites")
        print_processing_info(actual_workers, is_auto=(workers is None))

    processor = SpriteProcessor(settings)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(f"Processing {len(sprites)} sprites", total=len(sprites))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                contours, stats = processor.process(sprites, progress_callback=update_progress)
        else:
            contours, stats = processor.process(sprites)
    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_summary(processed=e.processed_count, cancelled=e.pending_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    if not quiet:
        print_batch_summary(
            contours=contours,
            total_time_s=stats.duration_seconds,
            errors=stats.error_count,
            avg_time_ms=stats.avg_sprite_time_ms,
            min_time_ms=stats.min_sprite_time_ms,
            max_time_ms=stats.max_sprite_time_ms,
        )

    if stats.error_count > 0:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
