"""
Noise suppression filters.

Both filters keep the input dimensions. Border pixels are handled with
cv2.BORDER_REFLECT_101 (mirror without repeating the edge pixel, e.g.
``gfedcb|abcdefgh|gfedcba``), passed explicitly so results do not depend on
library defaults.
"""

import cv2

from errors import InvalidParameterError
from raster import Raster, require_non_empty

BORDER_MODE = cv2.BORDER_REFLECT_101


def validate_kernel_size(kernel_size: int, parameter: str = "kernel_size") -> None:
    """Check that a kernel size is a positive odd integer.

    Raises:
        InvalidParameterError: If the value is not an int, not positive, or even.
    """
    # bool is an int subclass but never a meaningful size
    if not isinstance(kernel_size, int) or isinstance(kernel_size, bool):
        raise InvalidParameterError(parameter, kernel_size, "a positive odd integer")
    if kernel_size <= 0 or kernel_size % 2 == 0:
        raise InvalidParameterError(parameter, kernel_size, "a positive odd integer")


def validate_sigma(sigma: float, parameter: str = "sigma") -> None:
    """Check that a Gaussian sigma is a non-negative number.

    Raises:
        InvalidParameterError: If the value is a bool, not a number, or negative.
    """
    if not isinstance(sigma, (int, float)) or isinstance(sigma, bool) or sigma < 0:
        raise InvalidParameterError(parameter, sigma, "a non-negative number")


def mean_blur(raster: Raster, kernel_size: int) -> Raster:
    """Apply a normalized box filter of size kernel_size x kernel_size.

    Raises:
        EmptyInputError: If the raster has zero width or height.
        InvalidParameterError: If kernel_size is not a positive odd integer.
    """
    require_non_empty(raster, "mean_blur")
    validate_kernel_size(kernel_size)

    blurred = cv2.blur(
        raster.array,
        (kernel_size, kernel_size),
        borderType=BORDER_MODE,
    )
    return Raster.from_array(blurred)


def gaussian_blur(raster: Raster, kernel_size: int, sigma: float) -> Raster:
    """Apply a Gaussian filter.

    Args:
        raster: Input raster (any supported channel count).
        kernel_size: Positive odd kernel side length.
        sigma: Standard deviation in both directions. 0 derives it from
            the kernel size.

    Raises:
        EmptyInputError: If the raster has zero width or height.
        InvalidParameterError: If kernel_size or sigma is out of range.
    """
    require_non_empty(raster, "gaussian_blur")
    validate_kernel_size(kernel_size)
    validate_sigma(sigma)

    blurred = cv2.GaussianBlur(
        raster.array,
        (kernel_size, kernel_size),
        sigmaX=float(sigma),
        sigmaY=float(sigma),
        borderType=BORDER_MODE,
    )
    return Raster.from_array(blurred)
