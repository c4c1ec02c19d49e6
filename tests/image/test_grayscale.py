"""
Tests for pixelflow.image.grayscale module.
"""

import numpy as np
import pytest

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.pixel import Pixel
from pixelflow.image.grayscale import grayscale, luminance


def single(pixel: Pixel) -> PixelBuffer:
    buf = PixelBuffer(1, 1)
    buf.put(0, 0, pixel)
    return buf


class TestLuminance:
    """Tests for luminance computation."""

    @pytest.mark.parametrize(
        "rgb, expected",
        [
            ((255, 0, 0), 54),
            ((0, 255, 0), 182),
            ((0, 0, 255), 18),
            ((255, 255, 255), 255),
            ((0, 0, 0), 0),
            ((10, 20, 30), 18),
        ],
    )
    def test_weighted_sum_truncates(self, rgb, expected):
        """Test weights and truncation toward zero."""
        pixels = np.array([[[*rgb, 255]]], dtype=np.uint8)

        assert luminance(pixels)[0, 0] == expected

    def test_equal_channels_are_fixed_points(self):
        """Test v -> v for every gray level."""
        levels = np.arange(256, dtype=np.uint8)
        pixels = np.stack([levels, levels, levels, levels], axis=-1)[np.newaxis]

        np.testing.assert_array_equal(luminance(pixels)[0], levels)


class TestGrayscale:
    """Tests for grayscale filter."""

    def test_mid_gray_maps_to_itself(self):
        """Test (128, 128, 128, 255) is unchanged."""
        buf = single(Pixel(128, 128, 128, 255))

        grayscale(buf)

        assert buf.get(0, 0) == Pixel(128, 128, 128, 255)

    def test_channels_become_equal(self, random_buffer):
        """Test every output pixel has r == g == b."""
        grayscale(random_buffer)

        p = random_buffer.pixels
        assert np.array_equal(p[..., 0], p[..., 1])
        assert np.array_equal(p[..., 1], p[..., 2])

    def test_alpha_forced_opaque_by_default(self, quad_buffer):
        """Test input alpha is discarded."""
        grayscale(quad_buffer)

        assert (quad_buffer.pixels[..., 3] == 255).all()
        assert quad_buffer.get(1, 1) == Pixel(18, 18, 18, 255)

    def test_preserve_alpha(self, quad_buffer):
        """Test input alpha is kept when requested."""
        grayscale(quad_buffer, preserve_alpha=True)

        assert quad_buffer.get(1, 0) == Pixel(182, 182, 182, 200)
        assert quad_buffer.get(0, 1) == Pixel(18, 18, 18, 100)
        assert quad_buffer.get(1, 1).a == 40

    @pytest.mark.parametrize("preserve_alpha", [False, True])
    def test_idempotent(self, random_buffer, preserve_alpha):
        """Test applying twice equals applying once."""
        grayscale(random_buffer, preserve_alpha=preserve_alpha)
        once = random_buffer.copy()

        grayscale(random_buffer, preserve_alpha=preserve_alpha)

        assert random_buffer == once

    def test_in_place(self, quad_buffer):
        """Test the same buffer object is modified."""
        before = quad_buffer.pixels.copy()

        result = grayscale(quad_buffer)

        assert result is None
        assert not np.array_equal(before, quad_buffer.pixels)

    def test_empty_buffer(self):
        """Test zero-size buffers are accepted."""
        buf = PixelBuffer(0, 3)

        grayscale(buf)

        assert buf.size == 0
