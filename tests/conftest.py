"""
Pytest configuration and fixtures for PixelFlow tests
"""

import numpy as np
import pytest

from pixelflow.config import Settings
from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.pixel import Pixel

PIXEL_A = Pixel(255, 0, 0, 255)
PIXEL_B = Pixel(0, 255, 0, 200)
PIXEL_C = Pixel(0, 0, 255, 100)
PIXEL_D = Pixel(10, 20, 30, 40)


@pytest.fixture
def quad_buffer():
    """2x2 buffer with distinct pixels [[A, B], [C, D]]"""
    buf = PixelBuffer(2, 2)
    buf.put(0, 0, PIXEL_A)
    buf.put(1, 0, PIXEL_B)
    buf.put(0, 1, PIXEL_C)
    buf.put(1, 1, PIXEL_D)
    return buf


@pytest.fixture
def random_buffer():
    """7x5 buffer of random RGBA noise"""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, (5, 7, 4), dtype=np.uint8)
    return PixelBuffer(7, 5, pixels)


@pytest.fixture
def uniform_buffer():
    """6x4 buffer where every pixel is (40, 80, 120, 160)"""
    pixels = np.empty((4, 6, 4), dtype=np.uint8)
    pixels[...] = (40, 80, 120, 160)
    return PixelBuffer(6, 4, pixels)


@pytest.fixture
def settings(monkeypatch):
    """Default settings, isolated from PF_* environment variables"""
    import os

    for key in list(os.environ):
        if key.upper().startswith("PF_"):
            monkeypatch.delenv(key, raising=False)
    return Settings()
