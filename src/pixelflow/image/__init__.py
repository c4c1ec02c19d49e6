"""
Pixel filters and image I/O - functional architecture.

This package provides the pipeline stages as pure functions:
- blur: Box blur over a square window (in place)
- grayscale: Luminance conversion (in place)
- flip: Horizontal/vertical mirror (new buffer)
- io: Loading and writing container formats via OpenCV

All functions are re-exported from this module for convenient access.
"""

# Filters
from pixelflow.image.blur import box_blur, summed_area_table
from pixelflow.image.flip import flip
from pixelflow.image.grayscale import grayscale, luminance

# Loader / writer
from pixelflow.image.io import decode_image, encode_image, load_image, save_image

__all__ = [
    # Filters
    "box_blur",
    "summed_area_table",
    "grayscale",
    "luminance",
    "flip",
    # Loader / writer
    "load_image",
    "save_image",
    "decode_image",
    "encode_image",
]
