"""Tests for the scan service over files on disk."""

import cv2
import pytest
from PIL import UnidentifiedImageError

from detection import AnnotationStyle, DetectionConfig
from errors import InvalidParameterError
from preprocessing import PreprocessConfig
from scan import process_image, run_scan

from conftest import BLUE, RED, make_image


@pytest.fixture
def image_dir(tmp_path):
    source = tmp_path / "images"
    source.mkdir()
    cv2.imwrite(str(source / "a_red.png"), make_image(bars=[(40, 30, 6, 20, RED)]))
    cv2.imwrite(str(source / "b_two.png"), make_image(bars=[(10, 10, 6, 20, RED), (60, 40, 8, 30, BLUE)]))
    cv2.imwrite(str(source / "c_none.png"), make_image())
    return source


class TestProcessImage:
    def test_writes_all_artifacts(self, image_dir, tmp_path):
        out = tmp_path / "out"
        report = process_image(image_dir / "a_red.png", out, DetectionConfig(), PreprocessConfig())

        assert report.accepted_count == 1
        for suffix in ["_gray.jpg", "_blur.jpg", "_gaussian.jpg", "_mask.png", "_result.jpg", "_report.json"]:
            assert (out / f"a_red{suffix}").exists()
        assert set(report.artifact_paths) == {"gray", "blur", "gaussian", "mask", "result"}

    def test_no_output_dir_writes_nothing(self, image_dir, tmp_path):
        report = process_image(image_dir / "a_red.png", None, DetectionConfig(), PreprocessConfig())
        assert report.artifact_paths == {}
        assert not (tmp_path / "out").exists()


class TestRunScan:
    def test_directory(self, image_dir, tmp_path):
        stats = run_scan(str(image_dir), str(tmp_path / "out"), show_progress=False)

        assert stats.images_found == 3
        assert stats.images_processed == 3
        assert stats.images_failed == 0
        assert stats.regions_accepted == 3
        assert [r.accepted_count for r in stats.reports] == [1, 2, 0]

    def test_single_file(self, image_dir):
        stats = run_scan(str(image_dir / "b_two.png"), show_progress=False)
        assert stats.images_processed == 1
        assert stats.regions_accepted == 2

    def test_limit(self, image_dir):
        stats = run_scan(str(image_dir), limit=1, show_progress=False)
        assert stats.images_found == 3
        assert stats.images_processed == 1

    def test_corrupt_image_skipped(self, image_dir):
        (image_dir / "broken.png").write_bytes(b"not a png")
        stats = run_scan(str(image_dir), show_progress=False)

        assert stats.images_processed == 3
        assert stats.images_failed == 1
        assert list(stats.failures) == [str(image_dir.resolve() / "broken.png")]

    def test_corrupt_image_fail_fast(self, image_dir):
        (image_dir / "broken.png").write_bytes(b"not a png")
        with pytest.raises(UnidentifiedImageError):
            run_scan(str(image_dir), fail_fast=True, show_progress=False)

    def test_empty_directory(self, tmp_path):
        stats = run_scan(str(tmp_path), show_progress=False)
        assert stats.images_found == 0
        assert stats.reports == []

    @pytest.mark.parametrize(
        "detection_config, preprocess_config",
        [
            (DetectionConfig(morph_kernel_size=2), PreprocessConfig()),
            (DetectionConfig(annotation=AnnotationStyle(text_thickness=1.5)), PreprocessConfig()),
            (DetectionConfig(), PreprocessConfig(gaussian_sigma=True)),
        ],
    )
    def test_invalid_config_rejected_up_front(self, image_dir, detection_config, preprocess_config):
        with pytest.raises(InvalidParameterError):
            run_scan(
                str(image_dir),
                detection_config=detection_config,
                preprocess_config=preprocess_config,
                show_progress=False,
            )

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(ValueError):
            run_scan(str(tmp_path / "nope"), show_progress=False)
