"""
Box blur.

Every output pixel is the per-channel mean of the (2*radius+1)^2 window
centred on it. Window cells that fall outside the buffer are skipped. All
sums are read from the pre-blur state: the result is computed out of place
from a summed-area table and only then swapped into the buffer, so a pixel
never sees an already-blurred neighbour.

Edge modes:
- IN_BOUNDS: divide by the number of in-bounds samples (default)
- FULL_WINDOW: divide by the full window area everywhere. Kept for
  compatibility with the legacy filter; attenuates pixels near the border.
"""

import logging
from typing import Tuple

import numpy as np

from pixelflow.constants import BlurConstants
from pixelflow.core.buffer import PixelBuffer
from pixelflow.enums import BlurEdgeMode

logger = logging.getLogger(__name__)


def summed_area_table(pixels: np.ndarray) -> np.ndarray:
    """
    Build an inclusive prefix-sum table with a zero row and column prepended.

    table[i, j] holds the per-channel sum of pixels[:i, :j]. int64 leaves
    room for any window area times 255.
    """
    height, width, channels = pixels.shape
    table = np.zeros((height + 1, width + 1, channels), dtype=np.int64)
    table[1:, 1:] = pixels.astype(np.int64).cumsum(axis=0).cumsum(axis=1)
    return table


def _window_bounds(length: int, radius: int) -> Tuple[np.ndarray, np.ndarray]:
    # Half-open [start, stop) of each window along one axis, clipped to the buffer
    centres = np.arange(length)
    start = np.clip(centres - radius, 0, length)
    stop = np.clip(centres + radius + 1, 0, length)
    return start, stop


def box_blur(
    buf: PixelBuffer,
    radius: int = BlurConstants.DEFAULT_RADIUS,
    edge_mode: BlurEdgeMode = BlurEdgeMode.IN_BOUNDS,
) -> None:
    """
    Blur buffer in place with a square averaging window.

    Args:
        buf: Buffer to modify
        radius: Half-width of the window in pixels (window side is 2*radius+1)
        edge_mode: Divisor policy near the buffer edges

    Raises:
        ValueError: If radius is negative
    """
    radius = int(radius)
    if radius < 0:
        raise ValueError(f"Blur radius must be >= 0, got {radius}")

    edge_mode = BlurEdgeMode(edge_mode)
    if radius == 0 or buf.size == 0:
        return

    table = summed_area_table(buf.pixels)
    y0, y1 = _window_bounds(buf.height, radius)
    x0, x1 = _window_bounds(buf.width, radius)

    sums = (
        table[np.ix_(y1, x1)]
        - table[np.ix_(y0, x1)]
        - table[np.ix_(y1, x0)]
        + table[np.ix_(y0, x0)]
    )

    if edge_mode == BlurEdgeMode.FULL_WINDOW:
        divisor = np.int64((2 * radius + 1) ** 2)
    else:
        divisor = np.outer(y1 - y0, x1 - x0).astype(np.int64)[..., np.newaxis]

    # Sums and divisors are non-negative, so floor division truncates
    blurred = (sums // divisor).astype(np.uint8)

    buf.replace_pixels(blurred)
    logger.debug(
        f"Box blur applied to {buf.width}x{buf.height} (radius={radius}, edge_mode={edge_mode.value})"
    )
