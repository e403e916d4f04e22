"""
Outer contour extraction from binary masks.

Uses OpenCV border following with external retrieval: each 8-connected
foreground component yields exactly one outer boundary and holes are
ignored. Contours come back in the library's scan order, which is stable
for identical input.
"""

import logging

import cv2

from raster import Mask, require_non_empty

from .types import Contour

logger = logging.getLogger(__name__)


def extract_outer_contours(mask: Mask) -> list[Contour]:
    """Find the outer boundary of every connected foreground component.

    Boundaries are compressed to their corner points
    (cv2.CHAIN_APPROX_SIMPLE), which leaves polygon area and bounding box
    unchanged.

    Args:
        mask: Binary mask (255 foreground).

    Returns:
        List of Contours, one per component.

    Raises:
        EmptyInputError: If the mask is empty.
    """
    require_non_empty(mask, "extract_outer_contours")

    # findContours may modify its input on older OpenCV releases
    contours, _ = cv2.findContours(
        mask.data.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
    )
    result = [Contour(c.reshape(-1, 2)) for c in contours]
    logger.debug("Found %d outer contours", len(result))
    return result
