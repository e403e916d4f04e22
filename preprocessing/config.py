"""
Configuration and results for the preview preprocessing stage.

The previews (grayscale, mean blur, Gaussian blur) are observability outputs
computed from the original raster. They are parameterized through
PreprocessConfig so runs are reproducible.
"""

from dataclasses import dataclass, field
from typing import Any

from config import (
    MEAN_BLUR_KERNEL_SIZE,
    GAUSSIAN_BLUR_KERNEL_SIZE,
    GAUSSIAN_BLUR_SIGMA,
)
from errors import InvalidParameterError
from raster import Raster

from .filters import validate_kernel_size, validate_sigma


@dataclass(frozen=True)
class PreprocessConfig:
    """Configuration for all preview steps.

    Attributes:
        mean_blur_kernel_size: Box filter size. Positive odd integer.
        gaussian_kernel_size: Gaussian kernel size. Positive odd integer.
        gaussian_sigma: Gaussian standard deviation. 0 derives it from the
                        kernel size.
    """

    mean_blur_kernel_size: int = MEAN_BLUR_KERNEL_SIZE
    gaussian_kernel_size: int = GAUSSIAN_BLUR_KERNEL_SIZE
    gaussian_sigma: float = GAUSSIAN_BLUR_SIGMA

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            InvalidParameterError: If any parameter is invalid.
        """
        validate_kernel_size(self.mean_blur_kernel_size, "mean_blur_kernel_size")
        validate_kernel_size(self.gaussian_kernel_size, "gaussian_kernel_size")
        validate_sigma(self.gaussian_sigma, "gaussian_sigma")

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "PreprocessConfig":
        """Build a config from a plain mapping (e.g. parsed YAML).

        Raises:
            InvalidParameterError: If values is not a mapping or contains
                unknown keys.
        """
        if not isinstance(values, dict):
            raise InvalidParameterError("preprocess", type(values).__name__, "a mapping")
        known = {"mean_blur_kernel_size", "gaussian_kernel_size", "gaussian_sigma"}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidParameterError("preprocess", unknown, f"keys among {sorted(known)}")
        return cls(**values)


@dataclass
class PreviewResult:
    """All preview rasters produced for one image.

    Attributes:
        original: The input raster.
        grayscale: Single-channel preview.
        mean_blurred: Box-filtered preview.
        gaussian_blurred: Gaussian-filtered preview.
        config: The configuration used.
        artifact_paths: Mapping of preview name to saved file path (if saved).
    """

    original: Raster
    grayscale: Raster
    mean_blurred: Raster
    gaussian_blurred: Raster
    config: PreprocessConfig
    artifact_paths: dict[str, str] = field(default_factory=dict)
