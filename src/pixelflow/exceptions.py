"""
Custom exceptions for PixelFlow.

The core pipeline has one failure of its own (out-of-bounds buffer access,
which is a programming error). Load and write failures come from the I/O
boundary and are surfaced to the caller unchanged.
"""

from typing import Dict, Optional


class PixelFlowException(Exception):
    """Base exception for PixelFlow."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class OutOfBoundsError(PixelFlowException, IndexError):
    """Exception raised when a pixel coordinate lies outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            message=f"Pixel ({x}, {y}) is out of bounds for {width}x{height} buffer",
            details={"x": x, "y": y, "width": width, "height": height},
        )


class LoadError(PixelFlowException):
    """Exception raised when an image cannot be loaded or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to load image {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class WriteError(PixelFlowException):
    """Exception raised when an image cannot be encoded or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to write image {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigurationException(PixelFlowException):
    """Exception raised when configuration is invalid."""

    def __init__(self, config_key: str, reason: str):
        super().__init__(
            message=f"Invalid configuration for {config_key}: {reason}",
            details={"config_key": config_key, "reason": reason},
        )
