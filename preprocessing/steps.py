"""
Preview step classes with a common interface.

Each step is a frozen dataclass that implements the PreprocessStep interface.
Steps are pure: they take a Raster and return a new Raster.

Usage:
    from preprocessing.steps import GrayscaleStep, MeanBlurStep

    for step in [GrayscaleStep(), MeanBlurStep(kernel_size=5)]:
        preview = step.apply(raster)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from raster import Raster

from .colorspace import to_grayscale
from .filters import mean_blur, gaussian_blur


class PreprocessStep(ABC):
    """Base class for preview steps.

    Steps never mutate their input. The ``key`` is the short name used for
    artifact files and PreviewResult fields.
    """

    @abstractmethod
    def apply(self, raster: Raster) -> Raster:
        """Apply this step to a raster and return a new raster."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging, including parameters."""
        pass

    @property
    @abstractmethod
    def key(self) -> str:
        """Short artifact key (e.g. "gray")."""
        pass


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert to single-channel grayscale."""

    def apply(self, raster: Raster) -> Raster:
        return to_grayscale(raster)

    @property
    def name(self) -> str:
        return "grayscale"

    @property
    def key(self) -> str:
        return "gray"


@dataclass(frozen=True)
class MeanBlurStep(PreprocessStep):
    """Box (mean) blur.

    Attributes:
        kernel_size: Positive odd side length of the averaging window.
    """

    kernel_size: int = 5

    def apply(self, raster: Raster) -> Raster:
        return mean_blur(raster, self.kernel_size)

    @property
    def name(self) -> str:
        return f"mean_blur({self.kernel_size})"

    @property
    def key(self) -> str:
        return "blur"


@dataclass(frozen=True)
class GaussianBlurStep(PreprocessStep):
    """Gaussian blur.

    Attributes:
        kernel_size: Positive odd kernel side length.
        sigma: Standard deviation; 0 derives it from kernel_size.
    """

    kernel_size: int = 5
    sigma: float = 1.0

    def apply(self, raster: Raster) -> Raster:
        return gaussian_blur(raster, self.kernel_size, self.sigma)

    @property
    def name(self) -> str:
        return f"gaussian_blur({self.kernel_size}, sigma={self.sigma})"

    @property
    def key(self) -> str:
        return "gaussian"


@dataclass
class StepResult:
    """Result of applying a single step.

    Attributes:
        name: Name of the step that produced this result.
        raster: Output raster.
        artifact_path: Path where the raster was saved (if saving enabled).
        metadata: Extra information about the step (e.g. output shape).
    """

    name: str
    raster: Raster
    artifact_path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
