"""Parallel batch detection over sprite files.

Each sprite is independent, so detection runs in worker processes using
ProcessPoolExecutor. Workers receive only a file path and a plain settings
dict and return the finished (picklable) contour.

Key components:
- transform_contour: Apply configured simplification and expansion
- process_sprite: Top-level picklable function for parallel execution
- SpriteProcessor: Main orchestrator class for batch runs
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from pixelcontour.config import (
    DetectionConfig,
    ExpansionConfig,
    ExpansionMode,
    PixelContourSettings,
    RegionConfig,
)
from pixelcontour.core.detector import ContourDetector
from pixelcontour.domain import Contour
from pixelcontour.exceptions import ProcessingCancelledError
from pixelcontour.io import read_alpha_mask
from pixelcontour.utils import ProcessingLogger, ProcessingStats, configure_logging


def transform_contour(contour: Contour, expansion: ExpansionConfig) -> Contour:
    """Apply the configured expansion to a contour.

    Args:
        contour: Detected contour
        expansion: Expansion settings

    Returns:
        The expanded contour, or the input when no expansion is configured
    """
    if expansion.mode == ExpansionMode.CONTINUOUS and expansion.amount != 0.0:
        return contour.expand(expansion.amount)
    if expansion.mode == ExpansionMode.STEPPED and expansion.steps != 0:
        return contour.step_expand(expansion.steps)
    return contour


def process_sprite(sprite_path: str, config_dict: dict[str, Any]) -> dict[str, Any]:
    """Detect the contour of a single sprite.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        sprite_path: Path to the sprite image
        config_dict: Serialized settings (from PixelContourSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"contour": Contour, "edge_count": int, "duration_ms": float}
        - Error: {"error": str, "path": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        detection = DetectionConfig(**config_dict.get("detection", {}))
        expansion = ExpansionConfig(**config_dict.get("expansion", {}))
        region_dict = config_dict.get("region")
        region = RegionConfig(**region_dict).as_box() if region_dict else None

        mask = read_alpha_mask(
            Path(sprite_path),
            threshold=detection.alpha_threshold,
            region=region,
        )
        result = ContourDetector(mask).trace()
        contour = result.to_contour(simplify=detection.auto_simplify)
        contour = transform_contour(contour, expansion)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "contour": contour,
            "edge_count": len(result.edges),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "path": sprite_path,
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class SpriteProcessor:
    """Orchestrates parallel contour detection over many sprites.

    Example:
        settings = PixelContourSettings()
        processor = SpriteProcessor(settings)
        contours, stats = processor.process(
            [Path("hero.png"), Path("slime.png")],
            max_workers=4,
        )
    """

    def __init__(self, config: PixelContourSettings) -> None:
        """Initialize sprite processor with configuration.

        Args:
            config: Application settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        sprite_paths: Sequence[Path],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[dict[str, Contour], ProcessingStats]:
        """Detect contours for a batch of sprites.

        Args:
            sprite_paths: Image files to process
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, sprite, success)
                for progress updates

        Returns:
            Tuple of (contours keyed by sprite path, statistics)

        Raises:
            ProcessingCancelledError: If processing is cancelled by user
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting batch detection",
            sprite_count=len(sprite_paths),
            max_workers=max_workers,
        )

        tasks: list[str] = []
        for path in sprite_paths:
            if not path.is_file():
                self.processing_logger.log_sprite_skipped(str(path), "not a file")
                continue
            tasks.append(str(path))

        contours: dict[str, Contour] = {}
        if tasks:
            contours = self._process_parallel(tasks, max_workers, stats, progress_callback)
        else:
            self.logger.info("No sprites to process")

        stats.end_time = time.time()

        self.logger.info(
            "Batch detection complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            vertices=stats.vertices_total,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return contours, stats

    def _process_parallel(
        self,
        tasks: list[str],
        max_workers: int | None,
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, Contour]:
        """Process sprites in parallel using ProcessPoolExecutor.

        Args:
            tasks: Sprite paths to process
            max_workers: Maximum worker processes
            stats: Statistics object to update on cancellation
            progress_callback: Optional callback(completed, total, sprite, success)

        Returns:
            Dictionary mapping sprite paths to contours
        """
        contours: dict[str, Contour] = {}
        config_dict = self.config.model_dump(include={"detection", "expansion", "region"})

        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for sprite in tasks:
                self.processing_logger.log_sprite_start(sprite)
                future = executor.submit(process_sprite, sprite, config_dict)
                pending_futures[future] = sprite

            try:
                for future in as_completed(list(pending_futures)):
                    sprite = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_sprite_error(
                                sprite=sprite,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            contour: Contour = result["contour"]
                            contours[sprite] = contour
                            self.processing_logger.log_contour_summary(
                                sprite=sprite,
                                edge_count=result["edge_count"],
                                vertex_count=contour.vertex_count,
                                area=abs(contour.signed_area()),
                            )
                            self.processing_logger.log_sprite_complete(
                                sprite=sprite,
                                vertex_count=contour.vertex_count,
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_sprite_error(
                            sprite=sprite,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, sprite, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(stats.processed_count, stats.cancelled_count) from None

        return contours
