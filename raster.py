"""In-memory image value types.

A Raster wraps a decoded image; a Mask wraps a binary segmentation result.
Both hold a private read-only copy of their pixels, so a stage can never
mutate the input of another stage. Every transformation returns a new value.

Pixel layout is row-major. Color rasters use OpenCV BGR channel order.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from errors import EmptyInputError, InvalidParameterError, OutOfBoundsError

SUPPORTED_CHANNELS = (1, 3)


def _readonly_copy(array: np.ndarray) -> np.ndarray:
    copied = np.array(array, copy=True)
    copied.flags.writeable = False
    return copied


@dataclass(frozen=True, eq=False)
class Raster:
    """An immutable 8-bit image with 1 (grayscale) or 3 (BGR) channels.

    Attributes:
        pixels: Read-only array of shape (height, width) or (height, width, 3).
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.pixels, np.ndarray):
            raise InvalidParameterError(
                "pixels", type(self.pixels).__name__, "numpy.ndarray"
            )
        if self.pixels.dtype != np.uint8:
            raise InvalidParameterError("dtype", str(self.pixels.dtype), "uint8")

        pixels = self.pixels
        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels[:, :, 0]
        if pixels.ndim not in (2, 3):
            raise InvalidParameterError("ndim", pixels.ndim, "2 or 3")
        if pixels.ndim == 3 and pixels.shape[2] not in SUPPORTED_CHANNELS:
            raise InvalidParameterError(
                "channels", pixels.shape[2], f"one of {SUPPORTED_CHANNELS}"
            )
        object.__setattr__(self, "pixels", _readonly_copy(pixels))

    @classmethod
    def from_array(cls, array: np.ndarray) -> Raster:
        """Wrap a copy of ``array``. The caller's array is left untouched."""
        return cls(pixels=array)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    @property
    def shape(self) -> tuple[int, int, int]:
        """Return (width, height, channels)."""
        return self.width, self.height, self.channels

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the pixel data."""
        return self.pixels

    def copy_array(self) -> np.ndarray:
        """Writable copy of the pixel data."""
        return self.pixels.copy()

    def pixel(self, row: int, col: int) -> tuple[int, ...]:
        """Return the channel intensities at (row, col)."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfBoundsError("pixel", (col, row), (self.width, self.height))
        value = self.pixels[row, col]
        if self.channels == 1:
            return (int(value),)
        return tuple(int(v) for v in value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)


@dataclass(frozen=True, eq=False)
class Mask:
    """A single-channel binary image: 255 is foreground, 0 is background.

    Any nonzero input value is treated as foreground.
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.data, np.ndarray):
            raise InvalidParameterError("data", type(self.data).__name__, "numpy.ndarray")
        if self.data.ndim != 2:
            raise InvalidParameterError("ndim", self.data.ndim, "2")
        binary = np.where(self.data != 0, 255, 0).astype(np.uint8)
        binary.flags.writeable = False
        object.__setattr__(self, "data", binary)

    @classmethod
    def empty_like(cls, raster: Raster) -> Mask:
        """All-background mask with the raster's dimensions."""
        return cls(np.zeros((raster.height, raster.width), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def foreground_count(self) -> int:
        return int(np.count_nonzero(self.data))

    def is_foreground(self, row: int, col: int) -> bool:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfBoundsError("pixel", (col, row), (self.width, self.height))
        return bool(self.data[row, col])

    def to_bool(self) -> np.ndarray:
        return self.data > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mask):
            return NotImplemented
        return np.array_equal(self.data, other.data)


def require_non_empty(value: Raster | Mask, stage: str) -> None:
    """Raise EmptyInputError when a raster or mask has no pixels."""
    if value.is_empty:
        raise EmptyInputError(stage, value.shape)
