"""Output artifact helpers (preview images, masks, annotated result, JSON report)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import cv2
from pydantic import BaseModel, Field

from config import ARTIFACT_SUFFIXES
from raster import Mask, Raster

if TYPE_CHECKING:
    from detection.types import CandidateRegion, DetectionResult

logger = logging.getLogger(__name__)


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _write_image(path: Path, pixels, kind: str) -> None:
    _ensure_parent(path)
    try:
        written = cv2.imwrite(str(path), pixels)
    except cv2.error as e:
        raise OSError(f"Failed to write {kind} {path}: {e}") from e
    if not written:
        raise OSError(f"Failed to write {kind} {path}")


def save_raster(raster: Raster, path: str | Path) -> None:
    """Write a raster to disk; the format follows the file extension.

    Raises:
        OSError: If OpenCV cannot encode or write the file.
    """
    _write_image(Path(path), raster.array, "image")


def save_mask(mask: Mask, path: str | Path) -> None:
    """Write a mask as an 8-bit single-channel image (0 / 255)."""
    _write_image(Path(path), mask.data, "mask")


def artifact_path(output_dir: str | Path, stem: str, name: str) -> Path:
    return Path(output_dir) / f"{stem}{ARTIFACT_SUFFIXES[name]}"


def save_detection_artifacts(
    result: DetectionResult,
    output_dir: str | Path,
    stem: str,
) -> dict[str, str]:
    """Save the cleaned mask and the annotated result.

    Previews are saved by preprocessing.run_previews.

    Returns:
        Mapping of artifact name ("mask", "result") to the written path.
    """
    paths: dict[str, str] = {}

    mask_path = artifact_path(output_dir, stem, "mask")
    save_mask(result.mask, mask_path)
    paths["mask"] = str(mask_path)

    result_path = artifact_path(output_dir, stem, "result")
    save_raster(result.annotated, result_path)
    paths["result"] = str(result_path)

    logger.debug("Saved %d artifacts for %s", len(paths), stem)
    return paths


class RegionRecord(BaseModel):
    """Serialized form of one candidate region."""
    bbox: tuple[int, int, int, int]  # (x, y, w, h)
    area: float
    aspect_ratio: float
    accepted: bool
    rejection_reason: str | None = None
    contour_index: int

    @classmethod
    def from_region(cls, region: CandidateRegion) -> RegionRecord:
        return cls(
            bbox=region.bbox.to_xywh(),
            area=round(region.area, 2),
            aspect_ratio=round(region.aspect_ratio, 4),
            accepted=region.accepted,
            rejection_reason=region.rejection_reason,
            contour_index=region.contour_index,
        )


class ImageReport(BaseModel):
    """Detection summary for one image, written next to the artifacts."""
    source_path: str
    width: int
    height: int
    contour_count: int
    accepted_count: int
    regions: list[RegionRecord] = Field(default_factory=list)
    artifact_paths: dict[str, str] = Field(default_factory=dict)


def build_report(
    source_path: str | Path,
    result: DetectionResult,
    artifact_paths: dict[str, str] | None = None,
) -> ImageReport:
    width, height = result.image_dimensions
    return ImageReport(
        source_path=str(source_path),
        width=width,
        height=height,
        contour_count=len(result.contours),
        accepted_count=len(result.accepted),
        regions=[RegionRecord.from_region(r) for r in result.candidates],
        artifact_paths=artifact_paths or {},
    )


def save_report(report: ImageReport, path: str | Path) -> None:
    path = Path(path)
    _ensure_parent(path)
    path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
