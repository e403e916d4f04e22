"""
Main light bar detection orchestration.

This module ties together all detection components: HSV conversion, color
segmentation, morphology, contour extraction, classification and annotation.
"""

import logging

from preprocessing import to_hsv
from raster import Raster

from .annotate import annotate
from .config import DetectionConfig
from .contours import extract_outer_contours
from .morphology import clean
from .regions import classify
from .segmentation import segment
from .types import DetectionResult

logger = logging.getLogger(__name__)


def detect_light_bars(
    raster: Raster,
    config: DetectionConfig | None = None,
) -> DetectionResult:
    """Detect light bar candidates in a BGR raster.

    Each stage consumes the complete output of the previous one. Any error
    propagates immediately and no later stage runs.

    Args:
        raster: BGR input image.
        config: Detection configuration. If None, uses default settings.

    Returns:
        DetectionResult with every intermediate output, all candidates
        (accepted and rejected) and the annotated image.

    Raises:
        InvalidParameterError: If the configuration is invalid.
        EmptyInputError: If the raster is empty.
    """
    if config is None:
        config = DetectionConfig()

    config.validate()

    hsv = to_hsv(raster)
    raw_mask = segment(hsv, config.color_ranges)
    mask = clean(raw_mask, config.morph_kernel_size)
    logger.debug(
        "Segmented %d foreground pixels (%d after cleaning)",
        raw_mask.foreground_count, mask.foreground_count,
    )

    contours = extract_outer_contours(mask)
    candidates = classify(
        contours,
        config.thresholds,
        image_size=(raster.width, raster.height),
    )

    accepted = [c for c in candidates if c.accepted]
    for number, region in enumerate(accepted, start=1):
        logger.debug(
            "Light bar %d: area=%.1f, aspect_ratio=%.2f, position=(%d, %d)",
            number, region.area, region.aspect_ratio, region.x, region.y,
        )
    logger.info("Found %d contours, %d accepted as light bars", len(contours), len(accepted))

    annotated = annotate(raster, candidates, config.annotation)

    return DetectionResult(
        hsv=hsv,
        raw_mask=raw_mask,
        mask=mask,
        contours=contours,
        candidates=candidates,
        annotated=annotated,
        config=config,
    )
