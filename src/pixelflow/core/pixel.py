"""
Pixel record and 32-bit packing.

A Pixel holds four 8-bit channels by name. Packed 32-bit words only exist at
the buffer boundary; filters never shift bits around.
"""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from pixelflow.enums import PackedFormat

# Bit offsets (r, g, b, a) for each packed format
CHANNEL_SHIFTS: Dict[PackedFormat, Tuple[int, int, int, int]] = {
    PackedFormat.ARGB8888: (16, 8, 0, 24),
    PackedFormat.ABGR8888: (0, 8, 16, 24),
}


class Pixel(BaseModel):
    """RGBA pixel, 8 bits per channel."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")
    a: int = Field(..., ge=0, le=255, description="Alpha channel")

    def __init__(self, r: int, g: int, b: int, a: int = 255, **kwargs):
        super().__init__(r=r, g=g, b=b, a=a, **kwargs)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return channels as (r, g, b, a)."""
        return (self.r, self.g, self.b, self.a)

    def to_packed(self, fmt: PackedFormat = PackedFormat.ARGB8888) -> int:
        """
        Pack pixel into a single 32-bit word.

        Args:
            fmt: Channel order of the packed word

        Returns:
            Unsigned 32-bit integer
        """
        rs, gs, bs, as_ = CHANNEL_SHIFTS[PackedFormat(fmt)]
        return (self.r << rs) | (self.g << gs) | (self.b << bs) | (self.a << as_)

    @classmethod
    def from_packed(cls, value: int, fmt: PackedFormat = PackedFormat.ARGB8888) -> "Pixel":
        """
        Unpack a 32-bit word into a Pixel.

        Args:
            value: Unsigned 32-bit integer
            fmt: Channel order of the packed word

        Returns:
            Pixel with the unpacked channels

        Raises:
            ValueError: If value does not fit in 32 bits
        """
        value = int(value)
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Packed pixel must fit in 32 bits, got {value:#x}")

        rs, gs, bs, as_ = CHANNEL_SHIFTS[PackedFormat(fmt)]
        return cls(
            (value >> rs) & 0xFF,
            (value >> gs) & 0xFF,
            (value >> bs) & 0xFF,
            (value >> as_) & 0xFF,
        )


TRANSPARENT_BLACK = Pixel(0, 0, 0, 0)
