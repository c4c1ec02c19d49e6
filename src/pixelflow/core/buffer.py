"""
Pixel buffer and buffer allocation.

PixelBuffer owns a row-major (height, width, 4) uint8 array in RGBA channel
order. Pixel (x, y) lives at flat index y * width + x. Every get/put is
bounds-checked; out-of-range access raises OutOfBoundsError instead of
wrapping or using NumPy's negative indexing.
"""

import logging
import operator
from typing import Optional, Tuple

import numpy as np

from pixelflow.constants import PixelConstants
from pixelflow.core.pixel import CHANNEL_SHIFTS, Pixel
from pixelflow.enums import PackedFormat
from pixelflow.exceptions import OutOfBoundsError

logger = logging.getLogger(__name__)


class PixelBuffer:
    """Fixed-size RGBA8888 image held in memory."""

    def __init__(self, width: int, height: int, pixels: Optional[np.ndarray] = None):
        if width < 0 or height < 0:
            raise ValueError(f"Buffer dimensions must be non-negative, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)

        if pixels is None:
            pixels = np.zeros((self.height, self.width, PixelConstants.CHANNELS), dtype=np.uint8)
        else:
            pixels = _validate_pixels(pixels, self.width, self.height)
        self.pixels = pixels

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Create buffer from an (h, w, 4) or (h, w, 3) uint8 array in RGBA/RGB order.

        RGB input gets an opaque alpha channel. The array is copied.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected (h, w, 3) or (h, w, 4) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {array.dtype}")

        height, width = array.shape[:2]
        if array.shape[2] == 3:
            alpha = np.full((height, width, 1), PixelConstants.OPAQUE, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)

        return cls(width, height, array.copy())

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinate lies inside the buffer."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> Tuple[int, int]:
        try:
            x, y = operator.index(x), operator.index(y)
        except TypeError:
            raise OutOfBoundsError(x, y, self.width, self.height) from None
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return x, y

    def get(self, x: int, y: int) -> Pixel:
        """
        Read pixel at (x, y).

        Raises:
            OutOfBoundsError: If x or y is outside the buffer or not an integer
        """
        x, y = self._check_bounds(x, y)
        r, g, b, a = (int(c) for c in self.pixels[y, x])
        return Pixel(r, g, b, a)

    def put(self, x: int, y: int, pixel: Pixel) -> None:
        """
        Overwrite pixel at (x, y).

        Raises:
            OutOfBoundsError: If x or y is outside the buffer or not an integer
        """
        x, y = self._check_bounds(x, y)
        self.pixels[y, x] = pixel.as_tuple()

    def copy(self) -> "PixelBuffer":
        """Return an independent copy of this buffer."""
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    def replace_pixels(self, pixels: np.ndarray) -> None:
        """
        Swap in new contents of identical shape.

        Used by out-of-place passes to land their result in this buffer.
        """
        self.pixels = _validate_pixels(pixels, self.width, self.height)

    def to_packed(self, fmt: PackedFormat = PackedFormat.ARGB8888) -> np.ndarray:
        """
        Pack every pixel into a 32-bit word.

        Args:
            fmt: Channel order of the packed words

        Returns:
            (height, width) uint32 array
        """
        rs, gs, bs, as_ = CHANNEL_SHIFTS[PackedFormat(fmt)]
        channels = self.pixels.astype(np.uint32)
        return (
            (channels[..., 0] << rs)
            | (channels[..., 1] << gs)
            | (channels[..., 2] << bs)
            | (channels[..., 3] << as_)
        ).astype(np.uint32)

    @classmethod
    def from_packed(
        cls, words: np.ndarray, fmt: PackedFormat = PackedFormat.ARGB8888
    ) -> "PixelBuffer":
        """
        Build buffer from a (height, width) array of packed 32-bit words.
        """
        words = np.asarray(words)
        if words.ndim != 2:
            raise ValueError(f"Expected (h, w) array of packed words, got shape {words.shape}")

        words = words.astype(np.uint32)
        rs, gs, bs, as_ = CHANNEL_SHIFTS[PackedFormat(fmt)]
        pixels = np.stack(
            [(words >> shift) & 0xFF for shift in (rs, gs, bs, as_)], axis=-1
        ).astype(np.uint8)

        height, width = words.shape
        return cls(width, height, pixels)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def _validate_pixels(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    expected = (height, width, PixelConstants.CHANNELS)
    if not isinstance(pixels, np.ndarray) or pixels.shape != expected:
        shape = getattr(pixels, "shape", None)
        raise ValueError(f"Pixel array shape {shape} does not match {expected}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Pixel array must be uint8, got {pixels.dtype}")
    return pixels


class BufferFactory:
    """Allocates blank buffers in the RGBA8888 layout."""

    @staticmethod
    def allocate(width: int, height: int) -> PixelBuffer:
        """
        Allocate a buffer with every pixel transparent black (0, 0, 0, 0).

        Args:
            width: Buffer width in pixels
            height: Buffer height in pixels

        Returns:
            New PixelBuffer
        """
        logger.debug(f"Allocating {width}x{height} buffer")
        return PixelBuffer(width, height)

    @classmethod
    def allocate_like(cls, template: PixelBuffer) -> PixelBuffer:
        """Allocate a blank buffer with the template's dimensions."""
        return cls.allocate(template.width, template.height)


def allocate(width: int, height: int) -> PixelBuffer:
    """Allocate a transparent black buffer of the given size."""
    return BufferFactory.allocate(width, height)
