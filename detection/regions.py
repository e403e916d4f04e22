"""
Geometric classification of contours into candidate light bar regions.

Light bars are small, tall, thin blobs. Each contour is measured (polygon
area, bounding box, height/width ratio) and accepted only if every rule in
ClassifierThresholds holds. Rejected contours are kept with a
rejection_reason for debugging, never raised as errors.
"""

import logging
from typing import Sequence

import cv2

from errors import OutOfBoundsError
from geometry import polygon_area

from .config import ClassifierThresholds
from .types import BoundingBox, CandidateRegion, Contour

logger = logging.getLogger(__name__)


def check_acceptance(
    area: float,
    bbox: BoundingBox,
    thresholds: ClassifierThresholds,
) -> str | None:
    """Apply the acceptance rules to measured values.

    Args:
        area: Polygon area in pixels.
        bbox: Bounding box with width > 0.
        thresholds: Exclusive bounds to check against.

    Returns:
        None if accepted, otherwise a description of the first failed rule.
    """
    t = thresholds
    aspect_ratio = bbox.aspect_ratio

    if not (t.min_area < area < t.max_area):
        return f"area {area:.1f} outside ({t.min_area}, {t.max_area})"
    if not (t.min_aspect_ratio < aspect_ratio < t.max_aspect_ratio):
        return f"aspect_ratio {aspect_ratio:.2f} outside ({t.min_aspect_ratio}, {t.max_aspect_ratio})"
    if not bbox.width > t.min_width:
        return f"width {bbox.width} not above {t.min_width}"
    if not bbox.height > t.min_height:
        return f"height {bbox.height} not above {t.min_height}"
    return None


def evaluate_contour(
    contour: Contour,
    index: int,
    thresholds: ClassifierThresholds,
    image_size: tuple[int, int] | None = None,
) -> CandidateRegion | None:
    """Measure one contour and decide whether it is a light bar.

    Args:
        contour: Boundary points.
        index: Position of the contour in the extractor output.
        thresholds: Acceptance rules.
        image_size: Optional (width, height) of the source raster. When
                    given, the bounding box must lie inside it.

    Returns:
        CandidateRegion (accepted or rejected), or None for a contour with
        no points, from which no box can be formed.

    Raises:
        OutOfBoundsError: If the box falls outside image_size.
    """
    if len(contour) == 0:
        logger.debug("Contour %d has no points, skipping", index)
        return None

    x, y, w, h = cv2.boundingRect(contour.as_cv())
    bbox = BoundingBox(int(x), int(y), int(w), int(h))

    if image_size is not None and not bbox.within(*image_size):
        raise OutOfBoundsError("bounding box", bbox.to_xywh(), image_size)

    area = polygon_area(contour.points)
    aspect_ratio = bbox.aspect_ratio

    if contour.is_degenerate:
        rejection_reason = f"degenerate contour ({len(contour)} points)"
    else:
        rejection_reason = check_acceptance(area, bbox, thresholds)

    return CandidateRegion(
        bbox=bbox,
        area=area,
        aspect_ratio=aspect_ratio,
        accepted=rejection_reason is None,
        rejection_reason=rejection_reason,
        contour_index=index,
    )


def classify(
    contours: Sequence[Contour],
    thresholds: ClassifierThresholds | None = None,
    image_size: tuple[int, int] | None = None,
) -> list[CandidateRegion]:
    """Classify every contour.

    Args:
        contours: Contours in extraction order.
        thresholds: Acceptance rules (defaults to ClassifierThresholds()).
        image_size: Optional (width, height) bounds check for every box.

    Returns:
        One CandidateRegion per non-empty contour, in input order. Use
        accepted_regions() to keep only the accepted ones.
    """
    if thresholds is None:
        thresholds = ClassifierThresholds()

    regions = []
    for index, contour in enumerate(contours):
        region = evaluate_contour(contour, index, thresholds, image_size)
        if region is None:
            continue
        if not region.accepted:
            logger.debug("Rejected contour %d at %s: %s", index, region.bbox.to_xywh(), region.rejection_reason)
        regions.append(region)
    return regions


def accepted_regions(regions: Sequence[CandidateRegion]) -> list[CandidateRegion]:
    """Keep only accepted regions, preserving order."""
    return [r for r in regions if r.accepted]
