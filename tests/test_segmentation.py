"""Tests for HSV color segmentation."""

import numpy as np
import pytest

from detection import ColorRange, default_color_ranges, segment, segment_classes, segment_color
from errors import EmptyInputError, InvalidParameterError
from raster import Raster


def hsv_raster(pixels):
    """Build an HSV raster from a row of (h, s, v) triples."""
    return Raster.from_array(np.array([pixels], dtype=np.uint8))


RED = ColorRange("red", (((0, 100, 100), (10, 255, 255)), ((160, 100, 100), (180, 255, 255))))
BLUE = ColorRange("blue", (((100, 100, 100), (130, 255, 255)),))


class TestColorRange:
    def test_lists_are_normalized_to_tuples(self):
        color_range = ColorRange("x", [[[0, 0, 0], [10, 10, 10]]])
        assert color_range.bounds == (((0, 0, 0), (10, 10, 10)),)
        hash(color_range)

    def test_defaults_are_valid(self):
        for color_range in default_color_ranges():
            color_range.validate()

    def test_no_bounds_raises(self):
        with pytest.raises(InvalidParameterError):
            ColorRange("x", ()).validate()

    def test_lower_above_upper_raises(self):
        with pytest.raises(InvalidParameterError, match="lower <= upper"):
            ColorRange("x", (((20, 0, 0), (10, 255, 255)),)).validate()

    def test_hue_above_180_raises(self):
        with pytest.raises(InvalidParameterError, match="180"):
            ColorRange("x", (((0, 0, 0), (181, 255, 255)),)).validate()

    def test_wrong_length_raises(self):
        with pytest.raises(InvalidParameterError):
            ColorRange("x", (((0, 0), (10, 10)),)).validate()

    def test_malformed_bounds_raise_on_construction(self):
        with pytest.raises(InvalidParameterError):
            ColorRange("x", "abc")


class TestSegmentColor:
    def test_bounds_are_inclusive(self):
        hsv = hsv_raster([(10, 100, 100), (11, 100, 100), (0, 99, 200), (180, 255, 255)])
        mask = segment_color(hsv, RED)
        assert mask.data.tolist() == [[255, 0, 0, 255]]

    def test_red_wraparound_both_subranges(self):
        hsv = hsv_raster([(3, 200, 200), (170, 200, 200), (90, 200, 200)])
        mask = segment_color(hsv, RED)
        assert mask.data.tolist() == [[255, 255, 0]]

    def test_mask_matches_dimensions(self):
        hsv = Raster.from_array(np.zeros((7, 11, 3), dtype=np.uint8))
        assert segment_color(hsv, BLUE).shape == (11, 7)

    def test_grayscale_input_raises(self):
        with pytest.raises(InvalidParameterError):
            segment_color(Raster.from_array(np.zeros((3, 3), dtype=np.uint8)), RED)

    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            segment_color(Raster.from_array(np.zeros((0, 3, 3), dtype=np.uint8)), RED)


class TestSegment:
    def test_union_of_classes(self):
        hsv = hsv_raster([(5, 200, 200), (120, 200, 200), (60, 200, 200)])
        mask = segment(hsv, [RED, BLUE])
        assert mask.data.tolist() == [[255, 255, 0]]

    def test_all_zero_raster_selects_nothing(self):
        hsv = Raster.from_array(np.zeros((20, 20, 3), dtype=np.uint8))
        assert segment(hsv, [RED, BLUE]).foreground_count == 0

    def test_no_ranges_selects_nothing(self):
        hsv = hsv_raster([(5, 200, 200)])
        assert segment(hsv, []).foreground_count == 0

    def test_invalid_range_raises(self):
        bad = ColorRange("bad", (((50, 0, 0), (40, 255, 255)),))
        with pytest.raises(InvalidParameterError):
            segment(hsv_raster([(5, 200, 200)]), [bad])

    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            segment(Raster.from_array(np.zeros((0, 0, 3), dtype=np.uint8)), [RED])


class TestSegmentClasses:
    def test_one_mask_per_class(self):
        hsv = hsv_raster([(5, 200, 200), (120, 200, 200)])
        masks = segment_classes(hsv, [RED, BLUE])
        assert list(masks) == ["red", "blue"]
        assert masks["red"].data.tolist() == [[255, 0]]
        assert masks["blue"].data.tolist() == [[0, 255]]

    def test_same_name_is_merged(self):
        low = ColorRange("red", (((0, 100, 100), (10, 255, 255)),))
        high = ColorRange("red", (((160, 100, 100), (180, 255, 255)),))
        hsv = hsv_raster([(5, 200, 200), (170, 200, 200)])
        masks = segment_classes(hsv, [low, high])
        assert masks["red"].foreground_count == 2
