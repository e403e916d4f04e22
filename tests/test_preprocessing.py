"""
Unit tests for the preprocessing module - behavioral tests only.

Covers: error handling, filter correctness, border handling, no-mutation
guarantees, and the preview pipeline including saved artifacts.
"""

import numpy as np
import pytest

from errors import EmptyInputError, InvalidParameterError
from preprocessing import (
    GaussianBlurStep,
    GrayscaleStep,
    MeanBlurStep,
    PreprocessConfig,
    build_preview_steps,
    gaussian_blur,
    mean_blur,
    run_previews,
    run_steps,
    to_grayscale,
    to_hsv,
    validate_kernel_size,
)
from raster import Raster


def bgr(array):
    return Raster.from_array(np.asarray(array, dtype=np.uint8))


class TestToGrayscale:
    def test_no_mutation(self):
        source = np.full((10, 10, 3), 128, dtype=np.uint8)
        raster = Raster.from_array(source)
        _ = to_grayscale(raster)
        assert np.all(source == 128)
        assert np.all(raster.array == 128)

    def test_white_image_produces_white_gray(self):
        gray = to_grayscale(bgr(np.full((10, 10, 3), 255)))
        assert gray.channels == 1
        assert np.all(gray.array == 255)

    def test_black_image_produces_black_gray(self):
        gray = to_grayscale(bgr(np.zeros((10, 10, 3))))
        assert np.all(gray.array == 0)

    def test_dimensions_preserved(self):
        gray = to_grayscale(bgr(np.zeros((7, 13, 3))))
        assert gray.shape == (13, 7, 1)

    def test_grayscale_input_returns_equal_copy(self):
        raster = bgr(np.arange(16).reshape(4, 4))
        gray = to_grayscale(raster)
        assert gray == raster
        assert gray is not raster

    def test_uses_bgr_channel_order(self):
        # Pure blue and pure red differ in luma weight (0.114 vs 0.299)
        blue = to_grayscale(bgr(np.full((1, 1, 3), (255, 0, 0))))
        red = to_grayscale(bgr(np.full((1, 1, 3), (0, 0, 255))))
        assert blue.pixel(0, 0)[0] < red.pixel(0, 0)[0]

    def test_empty_raster_raises(self):
        with pytest.raises(EmptyInputError):
            to_grayscale(bgr(np.zeros((0, 4, 3))))


class TestToHsv:
    def test_pure_red_maps_to_hue_zero(self):
        hsv = to_hsv(bgr(np.full((2, 2, 3), (0, 0, 255))))
        assert hsv.pixel(0, 0) == (0, 255, 255)

    def test_pure_blue_maps_to_hue_120(self):
        hsv = to_hsv(bgr(np.full((2, 2, 3), (255, 0, 0))))
        assert hsv.pixel(1, 1) == (120, 255, 255)

    def test_dimensions_preserved(self):
        hsv = to_hsv(bgr(np.zeros((7, 13, 3))))
        assert hsv.shape == (13, 7, 3)

    def test_black_has_zero_value(self):
        hsv = to_hsv(bgr(np.zeros((2, 2, 3))))
        assert hsv.pixel(0, 0)[2] == 0

    def test_grayscale_input_raises(self):
        with pytest.raises(InvalidParameterError, match="channels"):
            to_hsv(bgr(np.zeros((4, 4))))

    def test_empty_raster_raises(self):
        with pytest.raises(EmptyInputError):
            to_hsv(bgr(np.zeros((0, 0, 3))))


class TestValidateKernelSize:
    @pytest.mark.parametrize("size", [1, 3, 5, 31])
    def test_odd_positive_sizes_pass(self, size):
        validate_kernel_size(size)

    @pytest.mark.parametrize("size", [0, -3, 2, 4, 3.0, True, "5"])
    def test_invalid_sizes_raise(self, size):
        with pytest.raises(InvalidParameterError, match="kernel_size"):
            validate_kernel_size(size)

    def test_parameter_name_in_error(self):
        with pytest.raises(InvalidParameterError) as excinfo:
            validate_kernel_size(4, "morph_kernel_size")
        assert excinfo.value.parameter == "morph_kernel_size"


class TestMeanBlur:
    def test_uniform_image_unchanged(self):
        raster = bgr(np.full((10, 10, 3), 77))
        assert mean_blur(raster, 5) == raster

    def test_kernel_one_is_identity(self):
        raster = bgr(np.random.default_rng(0).integers(0, 256, (8, 8, 3)))
        assert mean_blur(raster, 1) == raster

    def test_single_bright_pixel_spreads_evenly(self):
        image = np.zeros((5, 5), dtype=np.uint8)
        image[2, 2] = 225
        blurred = mean_blur(bgr(image), 3)
        assert blurred.pixel(1, 1) == (25,)
        assert blurred.pixel(2, 2) == (25,)
        assert blurred.pixel(0, 0) == (0,)

    def test_border_reflects_without_repeating_edge(self):
        # Columns 0, 90, 0: reflect-101 sees [90, 0, 90] at column 0
        image = np.tile(np.array([0, 90, 0], dtype=np.uint8), (3, 1))
        blurred = mean_blur(bgr(image), 3)
        assert blurred.pixel(1, 0) == (60,)

    def test_dimensions_preserved(self):
        blurred = mean_blur(bgr(np.zeros((7, 9, 3))), 5)
        assert blurred.shape == (9, 7, 3)

    def test_even_kernel_raises(self):
        with pytest.raises(InvalidParameterError):
            mean_blur(bgr(np.zeros((5, 5))), 4)

    def test_empty_raster_raises(self):
        with pytest.raises(EmptyInputError):
            mean_blur(bgr(np.zeros((0, 5))), 3)


class TestGaussianBlur:
    def test_uniform_image_unchanged(self):
        raster = bgr(np.full((10, 10), 200))
        assert gaussian_blur(raster, 5, 1.0) == raster

    def test_center_keeps_most_weight(self):
        image = np.zeros((9, 9), dtype=np.uint8)
        image[4, 4] = 255
        blurred = gaussian_blur(bgr(image), 5, 1.0)
        center = blurred.pixel(4, 4)[0]
        assert center > blurred.pixel(4, 5)[0] > blurred.pixel(4, 6)[0]

    def test_dimensions_preserved(self):
        blurred = gaussian_blur(bgr(np.zeros((7, 9, 3))), 7, 1.5)
        assert blurred.shape == (9, 7, 3)

    def test_zero_sigma_allowed(self):
        gaussian_blur(bgr(np.zeros((5, 5))), 5, 0)

    @pytest.mark.parametrize("sigma", [-1.0, True, "1.0", None])
    def test_invalid_sigma_raises(self, sigma):
        with pytest.raises(InvalidParameterError, match="sigma"):
            gaussian_blur(bgr(np.zeros((5, 5))), 5, sigma)

    def test_even_kernel_raises(self):
        with pytest.raises(InvalidParameterError):
            gaussian_blur(bgr(np.zeros((5, 5))), 6, 1.0)


class TestPreprocessConfig:
    def test_defaults_are_valid(self):
        config = PreprocessConfig()
        config.validate()
        assert config.mean_blur_kernel_size == 5
        assert config.gaussian_kernel_size == 5
        assert config.gaussian_sigma == 1.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"mean_blur_kernel_size": 4},
            {"gaussian_kernel_size": 0},
            {"gaussian_sigma": -0.5},
            {"gaussian_sigma": True},
            {"gaussian_sigma": "1.0"},
        ],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(InvalidParameterError):
            PreprocessConfig(**overrides).validate()

    def test_from_mapping(self):
        config = PreprocessConfig.from_mapping({"mean_blur_kernel_size": 3})
        assert config.mean_blur_kernel_size == 3
        assert config.gaussian_kernel_size == 5

    def test_from_mapping_unknown_key_raises(self):
        with pytest.raises(InvalidParameterError, match="preprocess"):
            PreprocessConfig.from_mapping({"median": 3})


class TestSteps:
    def test_step_keys(self):
        steps = build_preview_steps(PreprocessConfig())
        assert [s.key for s in steps] == ["gray", "blur", "gaussian"]

    def test_steps_follow_config(self):
        config = PreprocessConfig(mean_blur_kernel_size=3, gaussian_kernel_size=7, gaussian_sigma=2.0)
        steps = build_preview_steps(config)
        assert steps[1] == MeanBlurStep(kernel_size=3)
        assert steps[2] == GaussianBlurStep(kernel_size=7, sigma=2.0)

    def test_names_include_parameters(self):
        assert GrayscaleStep().name == "grayscale"
        assert MeanBlurStep(3).name == "mean_blur(3)"
        assert "sigma=1.5" in GaussianBlurStep(5, 1.5).name

    def test_run_steps_applies_each_to_original(self, red_bar_raster):
        results = run_steps(red_bar_raster, [GrayscaleStep(), MeanBlurStep(5)])
        # The blur sees the color original, not the grayscale output
        assert results[1].raster.channels == 3
        assert results[1].raster == mean_blur(red_bar_raster, 5)
        assert all(r.artifact_path is None for r in results)


class TestRunPreviews:
    def test_all_previews_produced(self, red_bar_raster):
        result = run_previews(red_bar_raster)
        assert result.original is red_bar_raster
        assert result.grayscale.channels == 1
        assert result.mean_blurred == mean_blur(red_bar_raster, 5)
        assert result.gaussian_blurred == gaussian_blur(red_bar_raster, 5, 1.0)
        assert result.artifact_paths == {}

    def test_input_not_mutated(self, red_bar_raster):
        before = red_bar_raster.copy_array()
        run_previews(red_bar_raster)
        assert np.array_equal(red_bar_raster.array, before)

    def test_saves_artifacts(self, red_bar_raster, tmp_path):
        result = run_previews(red_bar_raster, artifact_dir=str(tmp_path), stem="frame")
        assert set(result.artifact_paths) == {"gray", "blur", "gaussian"}
        assert (tmp_path / "frame_gray.jpg").exists()
        assert (tmp_path / "frame_blur.jpg").exists()
        assert (tmp_path / "frame_gaussian.jpg").exists()

    def test_invalid_config_raises_before_work(self, tmp_path):
        config = PreprocessConfig(mean_blur_kernel_size=2)
        with pytest.raises(InvalidParameterError):
            run_previews(bgr(np.zeros((5, 5, 3))), config, artifact_dir=str(tmp_path))
        assert list(tmp_path.iterdir()) == []

    def test_empty_raster_raises(self):
        with pytest.raises(EmptyInputError):
            run_previews(bgr(np.zeros((0, 0, 3))))
