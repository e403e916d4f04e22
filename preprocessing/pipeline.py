"""
Preview pipeline.

Produces the grayscale, mean blur and Gaussian blur previews of an image.
Unlike detection, the previews are branches: every step is applied to the
original raster, not to the previous step's output.
"""

import logging

from artifacts import artifact_path as build_artifact_path, save_raster
from raster import Raster, require_non_empty

from .config import PreprocessConfig, PreviewResult
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    MeanBlurStep,
    GaussianBlurStep,
    StepResult,
)

logger = logging.getLogger(__name__)


def build_preview_steps(config: PreprocessConfig) -> list[PreprocessStep]:
    """Build the preview steps for a config.

    Returns:
        [GrayscaleStep, MeanBlurStep, GaussianBlurStep] parameterized by config.
    """
    return [
        GrayscaleStep(),
        MeanBlurStep(kernel_size=config.mean_blur_kernel_size),
        GaussianBlurStep(
            kernel_size=config.gaussian_kernel_size,
            sigma=config.gaussian_sigma,
        ),
    ]


def run_steps(
    raster: Raster,
    steps: list[PreprocessStep],
    artifact_dir: str | None = None,
    stem: str = "preview",
) -> list[StepResult]:
    """Apply each step to ``raster`` independently.

    Args:
        raster: Source raster.
        steps: Steps to apply.
        artifact_dir: Optional directory to save each output as
                      ``<stem>_<key>.jpg``.
        stem: File name prefix for saved artifacts.

    Returns:
        One StepResult per step, in order.
    """
    results = []
    for step in steps:
        output = step.apply(raster)
        logger.debug("Preview step %s -> %s", step.name, output.shape)

        artifact_path = None
        if artifact_dir:
            artifact_path = str(build_artifact_path(artifact_dir, stem, step.key))
            save_raster(output, artifact_path)

        results.append(
            StepResult(
                name=step.key,
                raster=output,
                artifact_path=artifact_path,
                metadata={"step": step.name, "shape": output.shape},
            )
        )
    return results


def run_previews(
    raster: Raster,
    config: PreprocessConfig | None = None,
    artifact_dir: str | None = None,
    stem: str = "preview",
) -> PreviewResult:
    """Compute all previews for an image.

    Args:
        raster: BGR input raster.
        config: Preview configuration. If None, uses default settings.
        artifact_dir: Optional directory to save the previews.
        stem: File name prefix for saved artifacts.

    Returns:
        PreviewResult with the grayscale and blurred rasters.

    Raises:
        InvalidParameterError: If the configuration is invalid.
        EmptyInputError: If the raster is empty.

    Examples:
        >>> raster = Raster.from_array(np.zeros((100, 200, 3), dtype=np.uint8))
        >>> result = run_previews(raster)
        >>> result.grayscale.shape
        (200, 100, 1)
    """
    if config is None:
        config = PreprocessConfig()

    config.validate()
    require_non_empty(raster, "run_previews")

    results = run_steps(raster, build_preview_steps(config), artifact_dir, stem)
    by_key = {r.name: r for r in results}

    return PreviewResult(
        original=raster,
        grayscale=by_key["gray"].raster,
        mean_blurred=by_key["blur"].raster,
        gaussian_blurred=by_key["gaussian"].raster,
        config=config,
        artifact_paths={r.name: r.artifact_path for r in results if r.artifact_path},
    )
