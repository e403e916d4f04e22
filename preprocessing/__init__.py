"""
Image preprocessing module for light bar detection.

This module provides pure, deterministic functions over Rasters: color space
conversion (grayscale, HSV) and noise suppression (mean and Gaussian blur).
Every function returns a new Raster and never mutates its input.

Key components:
- config: PreprocessConfig dataclass and PreviewResult
- colorspace: to_grayscale, to_hsv
- filters: mean_blur, gaussian_blur
- steps: Class-based preview steps with a common PreprocessStep interface
- pipeline: run_previews() computing all previews for an image
"""

from .config import PreprocessConfig, PreviewResult
from .colorspace import to_grayscale, to_hsv
from .filters import mean_blur, gaussian_blur, validate_kernel_size, validate_sigma
from .pipeline import run_previews, build_preview_steps, run_steps
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    MeanBlurStep,
    GaussianBlurStep,
    StepResult,
)

__all__ = [
    # Config and results
    "PreprocessConfig",
    "PreviewResult",
    # Function API
    "to_grayscale",
    "to_hsv",
    "mean_blur",
    "gaussian_blur",
    "validate_kernel_size",
    "validate_sigma",
    "run_previews",
    "build_preview_steps",
    "run_steps",
    # Class-based API
    "PreprocessStep",
    "GrayscaleStep",
    "MeanBlurStep",
    "GaussianBlurStep",
    "StepResult",
]
