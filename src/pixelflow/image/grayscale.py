"""
Grayscale conversion.

Each pixel becomes its luminance v = 0.212671*r + 0.715160*g + 0.072169*b,
truncated to 8 bits. The weights are applied as exact integers over
1_000_000 so that a pixel with equal channels maps to itself and the
filter is idempotent.
"""

import logging

import numpy as np

from pixelflow.constants import GrayscaleConstants, PixelConstants
from pixelflow.core.buffer import PixelBuffer

logger = logging.getLogger(__name__)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """
    Compute truncated luminance of an (..., 4) RGBA array.

    Args:
        pixels: uint8 array with channels in RGBA order

    Returns:
        uint8 array of luminance values with the channel axis removed
    """
    channels = pixels.astype(np.int64)
    weighted = (
        GrayscaleConstants.RED_WEIGHT_INT * channels[..., 0]
        + GrayscaleConstants.GREEN_WEIGHT_INT * channels[..., 1]
        + GrayscaleConstants.BLUE_WEIGHT_INT * channels[..., 2]
    )
    return (weighted // GrayscaleConstants.WEIGHT_SCALE).astype(np.uint8)


def grayscale(buf: PixelBuffer, preserve_alpha: bool = False) -> None:
    """
    Convert buffer to grayscale in place.

    Args:
        buf: Buffer to modify
        preserve_alpha: Keep the input alpha channel. When False (the default)
            every output pixel is forced opaque, matching the legacy behaviour.
    """
    if buf.size == 0:
        return

    v = luminance(buf.pixels)

    out = np.empty_like(buf.pixels)
    out[..., 0] = v
    out[..., 1] = v
    out[..., 2] = v
    if preserve_alpha:
        out[..., 3] = buf.pixels[..., 3]
    else:
        out[..., 3] = PixelConstants.OPAQUE

    buf.replace_pixels(out)
    logger.debug(f"Grayscale applied to {buf.width}x{buf.height} (preserve_alpha={preserve_alpha})")
