"""Shared geometry utilities for contour polygons."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def polygon_area(points: Sequence[Sequence[float]] | np.ndarray) -> float:
    """Calculate the area enclosed by a closed polygon.

    Uses the shoelace formula. The polygon is implicitly closed (the last
    point connects back to the first). Fewer than 3 points enclose nothing.

    Args:
        points: Sequence of (x, y) vertices in boundary order.

    Returns:
        Non-negative area.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2.0)

