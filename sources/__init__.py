"""
Image sources.

Finds images on disk and decodes them into Rasters for the pipeline.
Decoding is the only place file formats are handled on the way in.
"""

from .local import (
    IMAGE_EXTENSIONS,
    RasterInfo,
    decode_raster,
    describe_raster,
    load_raster,
    scan_local_images,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "RasterInfo",
    "decode_raster",
    "describe_raster",
    "load_raster",
    "scan_local_images",
]
