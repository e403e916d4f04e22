"""
Configuration for the detection pipeline.

Every threshold the pipeline uses lives in DetectionConfig, so tests and the
CLI can exercise boundary values without touching module constants. Defaults
come from the top-level config module.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from config import (
    ANNOTATION_BOX_COLOR,
    ANNOTATION_BOX_THICKNESS,
    ANNOTATION_FONT_SCALE,
    ANNOTATION_LABEL_OFFSET,
    ANNOTATION_TEXT_COLOR,
    ANNOTATION_TEXT_THICKNESS,
    BLUE_HSV_RANGES,
    MAX_REGION_AREA,
    MAX_REGION_ASPECT_RATIO,
    MIN_REGION_AREA,
    MIN_REGION_ASPECT_RATIO,
    MIN_REGION_HEIGHT,
    MIN_REGION_WIDTH,
    MORPH_KERNEL_SIZE,
    RED_HSV_RANGES,
)
from errors import InvalidParameterError
from preprocessing.config import PreprocessConfig
from preprocessing.filters import validate_kernel_size

from .types import ColorRange


def default_color_ranges() -> tuple[ColorRange, ...]:
    """Red (two hue sub-ranges) and blue light bar colors."""
    return (
        ColorRange("red", RED_HSV_RANGES),
        ColorRange("blue", BLUE_HSV_RANGES),
    )


@dataclass(frozen=True)
class ClassifierThresholds:
    """Acceptance rules for candidate regions. All bounds are exclusive.

    A region is accepted when
    min_area < area < max_area,
    min_aspect_ratio < height / width < max_aspect_ratio,
    width > min_width and height > min_height.
    """

    min_area: float = MIN_REGION_AREA
    max_area: float = MAX_REGION_AREA
    min_aspect_ratio: float = MIN_REGION_ASPECT_RATIO
    max_aspect_ratio: float = MAX_REGION_ASPECT_RATIO
    min_width: int = MIN_REGION_WIDTH
    min_height: int = MIN_REGION_HEIGHT

    def validate(self) -> None:
        """Raises InvalidParameterError for negative or inverted bounds."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise InvalidParameterError(f.name, value, "a non-negative number")

        if self.min_area >= self.max_area:
            raise InvalidParameterError(
                "min_area", self.min_area, f"less than max_area ({self.max_area})"
            )
        if self.min_aspect_ratio >= self.max_aspect_ratio:
            raise InvalidParameterError(
                "min_aspect_ratio",
                self.min_aspect_ratio,
                f"less than max_aspect_ratio ({self.max_aspect_ratio})",
            )


@dataclass(frozen=True)
class AnnotationStyle:
    """Drawing parameters for the annotated result. Colors are BGR."""

    box_color: tuple[int, int, int] = ANNOTATION_BOX_COLOR
    box_thickness: int = ANNOTATION_BOX_THICKNESS
    text_color: tuple[int, int, int] = ANNOTATION_TEXT_COLOR
    text_thickness: int = ANNOTATION_TEXT_THICKNESS
    font_scale: float = ANNOTATION_FONT_SCALE
    label_offset: int = ANNOTATION_LABEL_OFFSET

    def validate(self) -> None:
        """Raises InvalidParameterError for values OpenCV cannot draw with."""
        for name in ("box_color", "text_color"):
            color = getattr(self, name)
            if (
                not isinstance(color, (tuple, list))
                or len(color) != 3
                or any(not _is_int(c) or not 0 <= c <= 255 for c in color)
            ):
                raise InvalidParameterError(name, color, "a (b, g, r) triple of ints within [0, 255]")
        for name in ("box_thickness", "text_thickness"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise InvalidParameterError(name, value, "a positive integer")
        if not _is_int(self.label_offset):
            raise InvalidParameterError("label_offset", self.label_offset, "an integer")
        if (
            not isinstance(self.font_scale, (int, float))
            or isinstance(self.font_scale, bool)
            or self.font_scale <= 0
        ):
            raise InvalidParameterError("font_scale", self.font_scale, "a positive number")


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for the whole detection pipeline.

    Attributes:
        color_ranges: Color classes to segment, unioned into one mask.
        morph_kernel_size: Side length of the square structuring element.
        thresholds: Region acceptance rules.
        annotation: Drawing style for the annotated result.
    """

    color_ranges: tuple[ColorRange, ...] = field(default_factory=default_color_ranges)
    morph_kernel_size: int = MORPH_KERNEL_SIZE
    thresholds: ClassifierThresholds = field(default_factory=ClassifierThresholds)
    annotation: AnnotationStyle = field(default_factory=AnnotationStyle)

    def validate(self) -> None:
        """Validate every nested parameter.

        Raises:
            InvalidParameterError: If any parameter is invalid.
        """
        for color_range in self.color_ranges:
            color_range.validate()
        validate_kernel_size(self.morph_kernel_size, "morph_kernel_size")
        self.thresholds.validate()
        self.annotation.validate()

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> DetectionConfig:
        """Build a config from a plain mapping (e.g. parsed YAML).

        Expected shape::

            color_ranges:
              red: [[[0, 100, 100], [10, 255, 255]], [[160, 100, 100], [180, 255, 255]]]
            morph_kernel_size: 3
            thresholds:
              min_area: 50
            annotation:
              box_thickness: 1

        Missing keys keep their defaults.

        Raises:
            InvalidParameterError: If a section is not a mapping or contains
                unknown keys.
        """
        _require_mapping("detection", values)
        _reject_unknown("detection", values, {f.name for f in fields(cls)})
        config = cls()

        if "color_ranges" in values:
            ranges = values["color_ranges"] or {}
            _require_mapping("color_ranges", ranges)
            config = replace(
                config,
                color_ranges=tuple(ColorRange(name, bounds) for name, bounds in ranges.items()),
            )
        if "morph_kernel_size" in values:
            config = replace(config, morph_kernel_size=values["morph_kernel_size"])
        if "thresholds" in values:
            overrides = values["thresholds"] or {}
            _require_mapping("thresholds", overrides)
            _reject_unknown("thresholds", overrides, {f.name for f in fields(ClassifierThresholds)})
            config = replace(config, thresholds=ClassifierThresholds(**overrides))
        if "annotation" in values:
            overrides = values["annotation"] or {}
            _require_mapping("annotation", overrides)
            _reject_unknown("annotation", overrides, {f.name for f in fields(AnnotationStyle)})
            overrides = dict(overrides)
            for color_key in ("box_color", "text_color"):
                if isinstance(overrides.get(color_key), list):
                    overrides[color_key] = tuple(overrides[color_key])
            config = replace(config, annotation=AnnotationStyle(**overrides))

        return config


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_mapping(section: str, values: Any) -> None:
    if not isinstance(values, dict):
        raise InvalidParameterError(section, type(values).__name__, "a mapping")


def _reject_unknown(section: str, values: dict[str, Any], known: set[str]) -> None:
    unknown = sorted(set(values) - known)
    if unknown:
        raise InvalidParameterError(section, unknown, f"keys among {sorted(known)}")


def load_config_file(path: str | Path) -> tuple[DetectionConfig, PreprocessConfig]:
    """Parse a YAML config file into detection and preprocess configs.

    Expected format::

        detection:
          morph_kernel_size: 5
          thresholds:
            min_area: 80
        preprocess:
          mean_blur_kernel_size: 3

    Both sections are optional.

    Raises:
        InvalidParameterError: If the file is not valid YAML or has unknown
            sections or keys.
        OSError: If the file cannot be read.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidParameterError("config", str(path), "valid YAML") from e

    if not isinstance(data, dict):
        raise InvalidParameterError("config", type(data).__name__, "a mapping at the top level")
    _reject_unknown("config", data, {"detection", "preprocess"})

    detection = DetectionConfig.from_mapping(data.get("detection") or {})
    preprocess = PreprocessConfig.from_mapping(data.get("preprocess") or {})
    return detection, preprocess
