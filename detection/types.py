"""
Type definitions for the detection module.

This module defines the core data structures used throughout the detection
pipeline: color ranges, contours, bounding boxes, candidate regions and the
bundled pipeline result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from config import HSV_CHANNEL_MAX
from errors import InvalidParameterError
from raster import Mask, Raster

if TYPE_CHECKING:
    from .config import DetectionConfig


# (hue, saturation, value) triple in the OpenCV 8-bit convention
HSV = tuple[int, int, int]


@dataclass(frozen=True)
class ColorRange:
    """A named color class with one or more inclusive HSV bounds.

    Several sub-ranges let a class cover hue wraparound (red sits at both
    ends of the hue axis).

    Attributes:
        name: Color class name (e.g. "red").
        bounds: Sequence of (lower, upper) HSV triples. A pixel matches the
                class if it falls inside any of them on every channel.
    """

    name: str
    bounds: tuple[tuple[HSV, HSV], ...]

    def __post_init__(self) -> None:
        # Accept lists (e.g. from YAML) but store tuples so the range is hashable
        try:
            normalized = tuple(
                (tuple(int(v) for v in lower), tuple(int(v) for v in upper))
                for lower, upper in self.bounds
            )
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(
                f"{self.name}.bounds", self.bounds, "a sequence of (lower, upper) HSV triples"
            ) from e
        object.__setattr__(self, "bounds", normalized)

    def validate(self) -> None:
        """Check every sub-range against the HSV channel limits.

        Raises:
            InvalidParameterError: If there are no sub-ranges, a triple has
                the wrong length, a value is out of range, or lower > upper.
        """
        if not self.bounds:
            raise InvalidParameterError(f"{self.name}.bounds", self.bounds, "at least one (lower, upper) pair")

        for i, (lower, upper) in enumerate(self.bounds):
            label = f"{self.name}.bounds[{i}]"
            if len(lower) != 3 or len(upper) != 3:
                raise InvalidParameterError(label, (lower, upper), "two (h, s, v) triples")
            for channel, (lo, hi, limit) in enumerate(zip(lower, upper, HSV_CHANNEL_MAX)):
                if not (0 <= lo <= limit and 0 <= hi <= limit):
                    raise InvalidParameterError(
                        label, (lower, upper), f"channel {channel} values within [0, {limit}]"
                    )
                if lo > hi:
                    raise InvalidParameterError(
                        label, (lower, upper), f"lower <= upper on channel {channel}"
                    )


@dataclass(frozen=True, eq=False)
class Contour:
    """Ordered boundary points of one connected region.

    The first point is not repeated at the end.

    Attributes:
        points: Read-only (N, 2) int32 array of (x, y) points.
    """

    points: np.ndarray

    def __post_init__(self) -> None:
        pts = np.array(self.points, dtype=np.int32).reshape(-1, 2)
        pts.flags.writeable = False
        object.__setattr__(self, "points", pts)

    @classmethod
    def from_points(cls, points: Sequence[Sequence[int]]) -> Contour:
        return cls(np.asarray(points, dtype=np.int32).reshape(-1, 2))

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def is_degenerate(self) -> bool:
        """Fewer than 3 points cannot enclose any area."""
        return len(self) < 3

    def as_cv(self) -> np.ndarray:
        """Return the (N, 1, 2) layout used by OpenCV contour functions."""
        return self.points.reshape(-1, 1, 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Contour):
            return NotImplemented
        return np.array_equal(self.points, other.points)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in pixel coordinates.

    ``x2``/``y2`` are exclusive: the box covers columns x..x2-1.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Height / width."""
        if self.width <= 0:
            raise InvalidParameterError("width", self.width, "> 0 to compute aspect ratio")
        return self.height / self.width

    def within(self, width: int, height: int) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.x2 <= width
            and self.y2 <= height
        )

    def to_xywh(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class CandidateRegion:
    """A classified contour.

    Includes the reason a region was rejected, enabling debugging of the
    acceptance thresholds.

    Attributes:
        bbox: Bounding box of the contour.
        area: Shoelace area of the contour polygon in pixels.
        aspect_ratio: bbox height / bbox width (always > 0).
        accepted: Whether the region passed every acceptance rule.
        rejection_reason: First failed rule (None if accepted).
        contour_index: Position of the source contour in the extractor output.
    """

    bbox: BoundingBox
    area: float
    aspect_ratio: float
    accepted: bool = True
    rejection_reason: str | None = None
    contour_index: int = -1

    @property
    def x(self) -> int:
        return self.bbox.x

    @property
    def y(self) -> int:
        return self.bbox.y


@dataclass
class DetectionResult:
    """Complete result from the light bar detection pipeline.

    Bundles every intermediate output for transparency: the HSV raster,
    raw and cleaned masks, contours, all candidates (accepted and rejected)
    and the annotated image.

    Attributes:
        hsv: HSV conversion of the input.
        raw_mask: Segmentation mask before morphology.
        mask: Mask after open/close cleaning.
        contours: Outer contours of the cleaned mask, in extraction order.
        candidates: One CandidateRegion per non-empty contour, same order.
        annotated: Copy of the input with accepted regions drawn.
        config: The configuration used.
    """

    hsv: Raster
    raw_mask: Mask
    mask: Mask
    contours: list[Contour]
    candidates: list[CandidateRegion]
    annotated: Raster
    config: DetectionConfig

    @property
    def accepted(self) -> list[CandidateRegion]:
        """Candidates that passed every rule, in contour order."""
        return [c for c in self.candidates if c.accepted]

    @property
    def rejected(self) -> list[CandidateRegion]:
        return [c for c in self.candidates if not c.accepted]

    @property
    def image_dimensions(self) -> tuple[int, int]:
        """(width, height) of the input image."""
        return self.annotated.width, self.annotated.height
