"""
Color space conversion for rasters.

All functions are pure: they take a Raster and return a new Raster without
touching the input. Color rasters are BGR, as decoded by the sources module.

HSV output uses the OpenCV 8-bit convention: hue in [0, 180) half-degrees,
saturation and value in [0, 255]. Color ranges in config.py use the same
convention.
"""

import cv2

from errors import InvalidParameterError
from raster import Raster, require_non_empty


def to_grayscale(raster: Raster) -> Raster:
    """Convert a raster to a single-channel grayscale raster.

    Args:
        raster: BGR (3 channel) or grayscale (1 channel) raster.

    Returns:
        Grayscale raster with the same width and height. A grayscale input
        is returned as an equal copy.

    Raises:
        EmptyInputError: If the raster has zero width or height.

    Examples:
        >>> bgr = Raster.from_array(np.zeros((100, 200, 3), dtype=np.uint8))
        >>> to_grayscale(bgr).shape
        (200, 100, 1)
    """
    require_non_empty(raster, "to_grayscale")

    if raster.channels == 1:
        return Raster.from_array(raster.array)

    return Raster.from_array(cv2.cvtColor(raster.array, cv2.COLOR_BGR2GRAY))


def to_hsv(raster: Raster) -> Raster:
    """Convert a BGR raster to hue/saturation/value.

    Args:
        raster: BGR raster with 3 channels.

    Returns:
        3-channel HSV raster with the same width and height.

    Raises:
        EmptyInputError: If the raster has zero width or height.
        InvalidParameterError: If the raster is not 3-channel.
    """
    require_non_empty(raster, "to_hsv")

    if raster.channels != 3:
        raise InvalidParameterError("channels", raster.channels, "3 (BGR) for HSV conversion")

    return Raster.from_array(cv2.cvtColor(raster.array, cv2.COLOR_BGR2HSV))
