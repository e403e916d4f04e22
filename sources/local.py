"""
Local image discovery and decoding.

Functions for finding image files on disk and decoding them into Rasters.
"""

import io
from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np
from PIL import Image

from raster import Raster

# Supported image extensions
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff", ".tif"}


def scan_local_images(path: str) -> list[Path]:
    """Find all image files in a directory or return a single image file.

    Args:
        path: Path to directory or single image file to scan.

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If path doesn't exist or isn't a valid image/directory.
    """
    file_path = Path(path).resolve()

    if file_path.is_file():
        if file_path.suffix.lower() in IMAGE_EXTENSIONS:
            return [file_path]
        raise ValueError(f"{path} is not a supported image file")

    if not file_path.is_dir():
        raise ValueError(f"{path} is not a valid file or directory")

    image_files = [
        p for p in file_path.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    ]
    return sorted(image_files)


def decode_raster(image_data: bytes) -> Raster:
    """Decode encoded image bytes into a BGR Raster.

    Any mode Pillow can open (palette, grayscale, RGBA) is converted to RGB
    first, then reordered to BGR.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a supported image.
    """
    image = Image.open(io.BytesIO(image_data))

    if image.mode != "RGB":
        image = image.convert("RGB")

    rgb = np.array(image)
    return Raster.from_array(cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))


def load_raster(path: str | Path) -> Raster:
    """Read and decode an image file into a BGR Raster.

    Raises:
        OSError: If the file cannot be read or decoded.
    """
    return decode_raster(Path(path).read_bytes())


@dataclass(frozen=True)
class RasterInfo:
    """Basic facts about a loaded image."""

    path: str | None
    width: int
    height: int
    channels: int

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    def lines(self) -> list[str]:
        """Human-readable summary, one fact per line."""
        return [
            f"Path:         {self.path or '-'}",
            f"Size:         {self.width} x {self.height}",
            f"Channels:     {self.channels}",
            f"Total pixels: {self.total_pixels}",
        ]


def describe_raster(raster: Raster, path: str | Path | None = None) -> RasterInfo:
    return RasterInfo(
        path=str(path) if path is not None else None,
        width=raster.width,
        height=raster.height,
        channels=raster.channels,
    )
