"""Scan service: run previews and detection over local image files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from artifacts import (
    ImageReport,
    artifact_path,
    build_report,
    save_detection_artifacts,
    save_report,
)
from detection import DetectionConfig, detect_light_bars
from errors import LightBarError, OutOfBoundsError
from preprocessing import PreprocessConfig, run_previews
from sources import load_raster, scan_local_images

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    """Totals for one scan run."""

    images_found: int = 0
    images_processed: int = 0
    images_failed: int = 0
    regions_accepted: int = 0
    reports: list[ImageReport] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)


def process_image(
    image_path: Path,
    output_dir: Path | None,
    detection_config: DetectionConfig,
    preprocess_config: PreprocessConfig,
) -> ImageReport:
    """Run previews and detection on one image file.

    Args:
        image_path: Image to process.
        output_dir: Directory for artifacts and the JSON report, or None to
                    skip writing anything.
        detection_config: Detection parameters.
        preprocess_config: Preview parameters.

    Returns:
        ImageReport summarizing the candidates.

    Raises:
        LightBarError: If a pipeline stage fails.
        OSError: If the image cannot be read/decoded or an artifact cannot
                 be written.
    """
    raster = load_raster(image_path)
    stem = image_path.stem
    artifact_dir = str(output_dir) if output_dir is not None else None

    previews = run_previews(raster, preprocess_config, artifact_dir=artifact_dir, stem=stem)
    result = detect_light_bars(raster, detection_config)

    paths = dict(previews.artifact_paths)
    if output_dir is not None:
        paths.update(save_detection_artifacts(result, output_dir, stem))

    report = build_report(image_path, result, paths)
    if output_dir is not None:
        save_report(report, artifact_path(output_dir, stem, "report"))
    return report


def run_scan(
    source: str,
    output_dir: str | None = None,
    detection_config: DetectionConfig | None = None,
    preprocess_config: PreprocessConfig | None = None,
    limit: int | None = None,
    fail_fast: bool = False,
    show_progress: bool = True,
) -> ScanStats:
    """Process an image file or every image in a directory.

    Images are processed one at a time. A failing image is logged and
    skipped unless ``fail_fast`` is set, in which case the error propagates.
    OutOfBoundsError always propagates.

    Args:
        source: Image file or directory path.
        output_dir: Where to write artifacts; None disables writing.
        detection_config: Detection parameters (defaults if None).
        preprocess_config: Preview parameters (defaults if None).
        limit: Maximum number of images to process.
        fail_fast: Re-raise the first per-image failure.
        show_progress: Show a tqdm progress bar.

    Returns:
        ScanStats with per-image reports.

    Raises:
        ValueError: If source is not an image file or directory.
        InvalidParameterError: If a configuration is invalid.
    """
    if detection_config is None:
        detection_config = DetectionConfig()
    if preprocess_config is None:
        preprocess_config = PreprocessConfig()

    # Reject bad configuration before touching any image
    detection_config.validate()
    preprocess_config.validate()

    image_files = scan_local_images(source)
    stats = ScanStats(images_found=len(image_files))
    logger.info("Found %s images in %s", len(image_files), source)

    if limit is not None:
        image_files = image_files[:limit]
        logger.info("Processing limited to %s images", limit)

    if not image_files:
        logger.warning("No images found.")
        return stats

    out_path = Path(output_dir) if output_dir else None

    for image_path in tqdm(image_files, desc="Detecting", disable=not show_progress):
        try:
            report = process_image(image_path, out_path, detection_config, preprocess_config)
        except OutOfBoundsError:
            # Internal invariant violation, never skipped
            raise
        except (LightBarError, OSError) as e:
            if fail_fast:
                raise
            logger.error("Skipping %s: %s", image_path, e)
            stats.images_failed += 1
            stats.failures[str(image_path)] = str(e)
            continue

        stats.images_processed += 1
        stats.regions_accepted += report.accepted_count
        stats.reports.append(report)
        logger.info(
            "%s: %d light bars (%d contours)",
            image_path.name, report.accepted_count, report.contour_count,
        )

    return stats
