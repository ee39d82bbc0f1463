"""Tests for image quantisation and output."""

import io

import numpy as np
import pytest
from PIL import Image

from pathforge.vec3 import Color
from pathforge.image_io import quantize, format_color, write_ppm, save_image


class TestQuantize:
    """Gamma 2 encoding and clamping."""

    def test_gamma_two(self):
        out = quantize(np.array([0.25, 0.0, 1.0]))
        assert list(out) == [128, 0, 255]

    def test_clamps_overbright(self):
        assert list(quantize(np.array([4.0, 100.0, 1.0]))) == [255, 255, 255]

    def test_negative_and_nan_become_zero(self):
        assert list(quantize(np.array([-1.0, np.nan, 0.0]))) == [0, 0, 0]

    def test_divides_by_samples(self):
        assert list(quantize(np.array([1.0, 2.0, 4.0]), samples=4)) == [128, 181, 255]

    def test_dtype_and_shape(self):
        out = quantize(np.full((2, 3, 3), 0.5))
        assert out.dtype == np.uint8
        assert out.shape == (2, 3, 3)


class TestFormatColor:
    """Single pixel formatting."""

    def test_format(self):
        assert format_color(Color(0.25, 0.25, 0.25)) == "128 128 128"

    def test_format_with_samples(self):
        assert format_color(Color(100.0, 0.0, 25.0), 100) == "255 0 128"


class TestWritePPM:
    """Plain-text PPM output."""

    def test_header_and_pixel_order(self):
        image = np.zeros((2, 3, 3))
        image[0, 0] = [1.0, 1.0, 1.0]   # top-left
        image[1, 2] = [0.25, 0.0, 0.0]  # bottom-right
        stream = io.StringIO()
        write_ppm(image, stream)

        lines = stream.getvalue().splitlines()
        assert lines[:3] == ["P3", "3 2", "255"]
        assert len(lines) == 3 + 6
        assert lines[3] == "255 255 255"
        assert lines[-1] == "128 0 0"


class TestSaveImage:
    """File output by extension."""

    def test_ppm(self, tmp_path):
        path = tmp_path / "out.ppm"
        save_image(np.full((2, 2, 3), 0.25), path)
        text = path.read_text()
        assert text.startswith("P3\n2 2\n255\n")
        assert text.count("128 128 128") == 4

    def test_png(self, tmp_path):
        path = tmp_path / "out.png"
        image = np.zeros((4, 5, 3))
        image[..., 1] = 1.0
        save_image(image, str(path))

        with Image.open(path) as img:
            assert img.size == (5, 4)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (0, 255, 0)
