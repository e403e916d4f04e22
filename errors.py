"""Error kinds raised by the detection pipeline.

Each error carries structured fields so callers can branch on the kind and
inspect what went wrong without parsing the message.
"""

from __future__ import annotations

from typing import Any


class LightBarError(Exception):
    """Base class for all pipeline errors."""


class EmptyInputError(LightBarError, ValueError):
    """A stage received a raster or mask with zero width or height."""

    def __init__(self, stage: str, shape: tuple[int, ...]):
        self.stage = stage
        self.shape = tuple(shape)
        super().__init__(f"{stage}: input is empty (shape={self.shape})")


class InvalidParameterError(LightBarError, ValueError):
    """A configuration value or argument is outside its contract."""

    def __init__(self, parameter: str, value: Any, expected: str):
        self.parameter = parameter
        self.value = value
        self.expected = expected
        super().__init__(f"{parameter}={value!r} is invalid: expected {expected}")


class OutOfBoundsError(LightBarError, IndexError):
    """A box or index reaches outside the raster extent.

    Never expected from well-formed input; indicates a bug upstream.
    """

    def __init__(
        self,
        subject: str,
        rect: tuple[int, ...],
        extent: tuple[int, int],
    ):
        self.subject = subject
        self.rect = tuple(rect)
        self.extent = tuple(extent)
        super().__init__(
            f"{subject} {self.rect} lies outside raster extent "
            f"(width={self.extent[0]}, height={self.extent[1]})"
        )
