"""
Pixel storage primitives.

- pixel: Pixel record and 32-bit packing
- buffer: PixelBuffer with bounds-checked access, BufferFactory
"""

from pixelflow.core.buffer import BufferFactory, PixelBuffer, allocate
from pixelflow.core.pixel import TRANSPARENT_BLACK, Pixel

__all__ = [
    "Pixel",
    "TRANSPARENT_BLACK",
    "PixelBuffer",
    "BufferFactory",
    "allocate",
]
