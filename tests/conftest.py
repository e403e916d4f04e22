"""Shared fixtures: small synthetic BGR images with known light bars."""

import numpy as np
import pytest

from raster import Raster

RED = (0, 0, 255)
BLUE = (255, 0, 0)
GREEN = (0, 255, 0)


def make_image(width=100, height=100, bars=(), background=(0, 0, 0)):
    """Build a BGR array with filled rectangles.

    Args:
        bars: Iterable of (x, y, w, h, bgr_color).
    """
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :] = background
    for x, y, w, h, color in bars:
        image[y:y + h, x:x + w] = color
    return image


@pytest.fixture
def black_raster():
    return Raster.from_array(make_image())


@pytest.fixture
def red_bar_raster():
    """100x100 black image with one 6x20 red bar at (40, 30)."""
    return Raster.from_array(make_image(bars=[(40, 30, 6, 20, RED)]))


@pytest.fixture
def wide_red_raster():
    """100x100 black image with a 60x20 red block (too wide to be a bar)."""
    return Raster.from_array(make_image(bars=[(20, 40, 60, 20, RED)]))


@pytest.fixture
def mixed_raster():
    """Red bar, blue bar, green bar and a red speck."""
    return Raster.from_array(
        make_image(
            width=160,
            bars=[
                (10, 10, 6, 20, RED),
                (60, 40, 8, 30, BLUE),
                (110, 10, 6, 20, GREEN),
                (140, 80, 2, 2, RED),
            ],
        )
    )
