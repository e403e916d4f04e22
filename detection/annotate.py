"""
Result annotation: draw accepted regions onto a copy of the input image.
"""

import logging
from typing import Sequence

import cv2

from errors import OutOfBoundsError
from raster import Raster, require_non_empty

from .config import AnnotationStyle
from .types import CandidateRegion

logger = logging.getLogger(__name__)

FONT = cv2.FONT_HERSHEY_SIMPLEX


def format_region_label(region: CandidateRegion) -> str:
    """Label text: integer area and aspect ratio to 2 decimals (e.g. "A:95 R:3.33")."""
    return f"A:{int(region.area)} R:{region.aspect_ratio:.2f}"


def annotate(
    base: Raster,
    regions: Sequence[CandidateRegion],
    style: AnnotationStyle | None = None,
) -> Raster:
    """Outline and label accepted regions on a copy of ``base``.

    Regions are drawn in input order; rejected ones are skipped. Labels sit
    just above each box and are shifted down when the box touches the top
    edge. Overlapping labels are left as they fall.

    Args:
        base: Image to draw on (BGR, or grayscale which is promoted to BGR).
        regions: Candidate regions, typically the classifier output.
        style: Colors, thicknesses and font scale.

    Returns:
        New BGR raster; ``base`` is unchanged.

    Raises:
        EmptyInputError: If base is empty.
        OutOfBoundsError: If a region's box is outside the base extent.
    """
    require_non_empty(base, "annotate")
    if style is None:
        style = AnnotationStyle()

    if base.channels == 1:
        image = cv2.cvtColor(base.array, cv2.COLOR_GRAY2BGR)
    else:
        image = base.copy_array()

    drawn = 0
    for region in regions:
        if not region.accepted:
            continue

        bbox = region.bbox
        if not bbox.within(base.width, base.height):
            raise OutOfBoundsError("bounding box", bbox.to_xywh(), (base.width, base.height))

        cv2.rectangle(
            image,
            (bbox.x, bbox.y),
            (bbox.x2 - 1, bbox.y2 - 1),
            style.box_color,
            style.box_thickness,
        )

        label = format_region_label(region)
        (_, text_height), _ = cv2.getTextSize(label, FONT, style.font_scale, style.text_thickness)
        label_y = max(bbox.y - style.label_offset, text_height)

        cv2.putText(
            image, label,
            (bbox.x, label_y),
            FONT, style.font_scale, style.text_color, style.text_thickness,
        )
        drawn += 1

    logger.debug("Annotated %d regions", drawn)
    return Raster.from_array(image)
