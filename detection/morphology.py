"""
Morphological mask cleaning.

Opening (erode then dilate) removes foreground specks smaller than the
structuring element; closing (dilate then erode) fills background gaps
inside larger blobs. Both use the same square element.
"""

import cv2
import numpy as np

from config import MORPH_KERNEL_SIZE
from preprocessing.filters import validate_kernel_size
from raster import Mask, require_non_empty


def structuring_element(size: int) -> np.ndarray:
    """Square size x size structuring element.

    Raises:
        InvalidParameterError: If size is not a positive odd integer.
    """
    validate_kernel_size(size, "structuring_element_size")
    return cv2.getStructuringElement(cv2.MORPH_RECT, (size, size))


def open_mask(mask: Mask, size: int = MORPH_KERNEL_SIZE) -> Mask:
    """Erode then dilate."""
    require_non_empty(mask, "open_mask")
    opened = cv2.morphologyEx(mask.data, cv2.MORPH_OPEN, structuring_element(size))
    return Mask(opened)


def close_mask(mask: Mask, size: int = MORPH_KERNEL_SIZE) -> Mask:
    """Dilate then erode.

    Pixels outside the image count as background, so a blob near the edge
    is not grown into the last rows or columns.
    """
    require_non_empty(mask, "close_mask")
    element = structuring_element(size)
    pad = size // 2
    padded = cv2.copyMakeBorder(mask.data, pad, pad, pad, pad, cv2.BORDER_CONSTANT, value=0)
    closed = cv2.morphologyEx(padded, cv2.MORPH_CLOSE, element)
    return Mask(closed[pad:pad + mask.height, pad:pad + mask.width])


def clean(mask: Mask, size: int = MORPH_KERNEL_SIZE) -> Mask:
    """Open then close a mask with a square structuring element.

    An all-background mask stays all-background.

    Args:
        mask: Binary mask to clean.
        size: Structuring element side length (positive odd integer).

    Returns:
        New mask with the same dimensions.

    Raises:
        EmptyInputError: If the mask is empty.
        InvalidParameterError: If size is invalid.
    """
    return close_mask(open_mask(mask, size), size)
