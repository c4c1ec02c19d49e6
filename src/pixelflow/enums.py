"""
Centralized enums for the pixel pipeline.

This module contains all enumeration types used throughout the package,
providing a single source of truth for enum definitions.
"""

from enum import Enum


class FlipAxis(str, Enum):
    """Mirror axis for FlipTransform."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class BlurEdgeMode(str, Enum):
    """Divisor policy for box blur near buffer edges."""

    # Divide by the number of in-bounds samples
    IN_BOUNDS = "in_bounds"
    # Legacy: always divide by the full window area, darkens borders
    FULL_WINDOW = "full_window"


class PackedFormat(str, Enum):
    """Channel order of a pixel packed into a 32-bit word (MSB first)."""

    ARGB8888 = "ARGB8888"
    ABGR8888 = "ABGR8888"


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
