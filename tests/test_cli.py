"""Tests for the command-line interface."""

import json

import cv2
import numpy as np
import pytest

from color_filter.cli import (
    build_output_filename,
    detect_delim,
    main,
    parse_color_arg,
    parse_filter_config,
)
from color_filter.display import read_image, save_image
from color_filter.exceptions import InvalidColorError
from color_filter.models import PolicyMode


@pytest.fixture
def image_file(tmp_path, swatch_image):
    path = tmp_path / "scan-01.png"
    save_image(path, swatch_image)
    return path


class TestHelpers:
    def test_detect_delim(self):
        assert detect_delim("scan-01.png") == "-"
        assert detect_delim("scan_01.png") == "_"
        assert detect_delim("scan.png") is None

    def test_build_output_filename(self):
        assert build_output_filename("/a/scan.png", "", "filtered", "_") == "/a/scan_filtered.png"
        assert build_output_filename("/a/scan.png", "pre", "", "-") == "/a/pre-scan.png"

    def test_parse_color_arg(self):
        assert parse_color_arg("255,0,0") == (255, 0, 0)
        assert parse_color_arg("1/2/3") == (1, 2, 3)

    def test_parse_color_arg_invalid(self):
        with pytest.raises(InvalidColorError):
            parse_color_arg("red")

    def test_parse_filter_config_inline(self):
        config = parse_filter_config('{"mode": 2}')
        assert config.mode is PolicyMode.SUM

    def test_parse_filter_config_file(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"color": [1, 2, 3]}))
        assert parse_filter_config(str(path)).color == (1, 2, 3)

    def test_parse_filter_config_none(self):
        assert parse_filter_config(None) is None


class TestFilterCommand:
    def test_default_output_name(self, image_file, swatch_image):
        main(["filter", str(image_file), "0", "50", "0", "256", "0", "256", "-c", "9,9,9"])

        output = read_image(image_file.with_name("scan-01-filtered.png"))
        np.testing.assert_array_equal(output[0, 0], [9, 9, 9])
        np.testing.assert_array_equal(output[0, 1], swatch_image[0, 1])

    def test_explicit_output_and_crop(self, image_file, swatch_image, tmp_path):
        out = tmp_path / "out.png"
        main(["filter", str(image_file), "0", "766", "-m", "2", "--height", "1", "--width", "2", "-o", str(out)])

        output = read_image(out)
        assert output.shape == (1, 2, 3)
        np.testing.assert_array_equal(output, swatch_image[:1, :2])

    def test_config_overridden_by_flags(self, image_file, tmp_path):
        out = tmp_path / "out.png"
        config = json.dumps({"mode": 3, "color": [255, 255, 255]})
        main(["filter", str(image_file), "0", "30", "--config", config, "-c", "1,1,1", "-o", str(out)])

        output = read_image(out)
        # Spread filter stops the red-ish, green and blue pixels
        np.testing.assert_array_equal(output[0, 0], [1, 1, 1])
        np.testing.assert_array_equal(output[1, 1], [1, 1, 1])
        np.testing.assert_array_equal(output[1, 2], [1, 1, 1])

    def test_bounds_mode_mismatch_exits(self, image_file, tmp_path):
        out = tmp_path / "out.png"
        with pytest.raises(SystemExit) as exc_info:
            main(["filter", str(image_file), "0", "30", "-o", str(out)])

        assert "modes 0 and 1 take 6 bounds" in str(exc_info.value.code)
        err_file = tmp_path / "out.png.err"
        assert "modes 0 and 1 take 6 bounds" in err_file.read_text()
        assert not out.exists()

    def test_crop_too_large_exits(self, image_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["filter", str(image_file), "0", "766", "-m", "2", "--height", "50"])
        assert "no larger than the image" in str(exc_info.value.code)

    def test_missing_input_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["filter", str(tmp_path / "missing.png"), "0", "766", "-m", "2"])
        assert "Could not read image file" in str(exc_info.value.code)

    def test_debug_dir(self, image_file, tmp_path):
        debug_dir = tmp_path / "debug"
        out = tmp_path / "out.png"
        main(["filter", str(image_file), "0", "30", "-m", "3", "--compare", "--debug-dir", str(debug_dir), "-o", str(out)])

        names = sorted(p.name for p in debug_dir.iterdir())
        assert names == [
            "01_region.png",
            "02_metrics.png",
            "03_mask.png",
            "04_mask_overlay.png",
            "05_output.png",
            "06_comparison.png",
        ]

    def test_show(self, image_file, tmp_path, monkeypatch):
        shown = []
        monkeypatch.setattr("color_filter.display.show_image", lambda img, title=None: shown.append(img))
        main(["filter", str(image_file), "0", "766", "-m", "2", "--show", "-o", str(tmp_path / "o.png")])
        assert len(shown) == 1
        assert shown[0].shape == (2, 3, 3)


class TestOtherCommands:
    def test_modes(self, capsys):
        main(["modes"])
        out = capsys.readouterr().out
        for mode in PolicyMode:
            assert f"{int(mode)} {mode.name.lower()}:" in out
        assert "domain 0 to 766" in out

    def test_config(self, capsys):
        main(["config"])
        assert json.loads(capsys.readouterr().out)["mode"] == 0

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1


def test_written_file_is_bgr_on_disk(tmp_path):
    """Files are stored in OpenCV's BGR order and read back as RGB."""
    path = tmp_path / "red.png"
    save_image(path, np.array([[[255, 0, 0]]], dtype=np.uint8))
    np.testing.assert_array_equal(cv2.imread(str(path))[0, 0], [0, 0, 255])
