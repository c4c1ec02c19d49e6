"""
PixelFlow - deterministic CPU pipeline for bitmap box blur, grayscale and flip.
"""

__version__ = "0.1.0"
