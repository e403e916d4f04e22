"""Scanning service package."""

from .service import ScanStats, process_image, run_scan

__all__ = [
    "ScanStats",
    "process_image",
    "run_scan",
]
