"""
Light bar detection module.

This module finds thin, brightly colored vertical features (light bars) in
a color image. It follows the same design philosophy as the preprocessing
module: pure functions, early validation, and clear separation of concerns.

Key components:
- types: Core data structures (ColorRange, Contour, BoundingBox, CandidateRegion, DetectionResult)
- config: DetectionConfig, ClassifierThresholds, AnnotationStyle and YAML loading
- segmentation: HSV range segmentation into a binary mask
- morphology: Open/close mask cleaning
- contours: Outer contour extraction
- regions: Geometric acceptance rules
- annotate: Drawing accepted regions on the input
- detector: Main detection orchestration

The main entry point is `detect_light_bars()` which returns a `DetectionResult`
containing every intermediate output and all classified candidates.
"""

from .types import ColorRange, Contour, BoundingBox, CandidateRegion, DetectionResult
from .config import (
    DetectionConfig,
    ClassifierThresholds,
    AnnotationStyle,
    default_color_ranges,
    load_config_file,
)
from .segmentation import segment, segment_color, segment_classes
from .morphology import clean, open_mask, close_mask, structuring_element
from .contours import extract_outer_contours
from .regions import classify, evaluate_contour, check_acceptance, accepted_regions
from .annotate import annotate, format_region_label
from .detector import detect_light_bars

__all__ = [
    "ColorRange",
    "Contour",
    "BoundingBox",
    "CandidateRegion",
    "DetectionResult",
    "DetectionConfig",
    "ClassifierThresholds",
    "AnnotationStyle",
    "default_color_ranges",
    "load_config_file",
    "segment",
    "segment_color",
    "segment_classes",
    "clean",
    "open_mask",
    "close_mask",
    "structuring_element",
    "extract_outer_contours",
    "classify",
    "evaluate_contour",
    "check_acceptance",
    "accepted_regions",
    "annotate",
    "format_region_label",
    "detect_light_bars",
]
