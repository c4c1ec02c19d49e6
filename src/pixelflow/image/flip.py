"""
Axis flip.

Always writes into a freshly allocated buffer; the source is never mutated.
"""

import logging

from pixelflow.core.buffer import BufferFactory, PixelBuffer
from pixelflow.enums import FlipAxis

logger = logging.getLogger(__name__)


def flip(src: PixelBuffer, axis: FlipAxis = FlipAxis.HORIZONTAL) -> PixelBuffer:
    """
    Mirror a buffer along one axis.

    Horizontal: output (width-1-x, y) = input (x, y).
    Vertical: output (x, height-1-y) = input (x, y).

    Args:
        src: Source buffer (left unchanged)
        axis: Mirror axis

    Returns:
        New buffer of the same dimensions. A zero-width or zero-height
        source yields an empty buffer.
    """
    axis = FlipAxis(axis)
    dst = BufferFactory.allocate_like(src)

    if src.size == 0:
        return dst

    if axis == FlipAxis.HORIZONTAL:
        dst.pixels[:, :] = src.pixels[:, ::-1]
    else:
        dst.pixels[:, :] = src.pixels[::-1, :]

    logger.debug(f"Flipped {src.width}x{src.height} buffer ({axis.value})")
    return dst
