"""
HSV color segmentation.

Selects pixels whose hue, saturation and value all fall inside a configured
range. Bounds are inclusive on every channel.
"""

from typing import Sequence

import cv2
import numpy as np

from errors import InvalidParameterError
from raster import Mask, Raster, require_non_empty

from .types import ColorRange


def _check_hsv(hsv: Raster, stage: str) -> None:
    require_non_empty(hsv, stage)
    if hsv.channels != 3:
        raise InvalidParameterError("channels", hsv.channels, "3 (HSV)")


def _in_range(hsv: Raster, color_range: ColorRange) -> np.ndarray:
    combined = np.zeros((hsv.height, hsv.width), dtype=np.uint8)
    for lower, upper in color_range.bounds:
        matched = cv2.inRange(
            hsv.array,
            np.array(lower, dtype=np.uint8),
            np.array(upper, dtype=np.uint8),
        )
        combined = cv2.bitwise_or(combined, matched)
    return combined


def segment_color(hsv: Raster, color_range: ColorRange) -> Mask:
    """Mask of pixels inside any sub-range of one color class.

    Args:
        hsv: HSV raster (see preprocessing.to_hsv).
        color_range: Color class to select.

    Raises:
        EmptyInputError: If the raster is empty.
        InvalidParameterError: If the raster is not 3-channel or the range
            is malformed.
    """
    _check_hsv(hsv, "segment_color")
    color_range.validate()
    return Mask(_in_range(hsv, color_range))


def segment_classes(hsv: Raster, ranges: Sequence[ColorRange]) -> dict[str, Mask]:
    """Per-class masks, keyed by class name in input order.

    Classes sharing a name are merged into one mask.
    """
    _check_hsv(hsv, "segment_classes")
    for color_range in ranges:
        color_range.validate()

    masks: dict[str, np.ndarray] = {}
    for color_range in ranges:
        matched = _in_range(hsv, color_range)
        if color_range.name in masks:
            matched = cv2.bitwise_or(masks[color_range.name], matched)
        masks[color_range.name] = matched
    return {name: Mask(data) for name, data in masks.items()}


def segment(hsv: Raster, ranges: Sequence[ColorRange]) -> Mask:
    """Union of all color classes into a single foreground mask.

    An empty ``ranges`` sequence selects nothing.

    Args:
        hsv: HSV raster.
        ranges: Color classes to select, in order.

    Returns:
        Mask with the raster's dimensions.

    Raises:
        EmptyInputError: If the raster is empty.
        InvalidParameterError: If the raster is not 3-channel or a range is
            malformed.
    """
    union = np.zeros((hsv.height, hsv.width), dtype=np.uint8)
    for mask in segment_classes(hsv, ranges).values():
        union = cv2.bitwise_or(union, mask.data)
    return Mask(union)
