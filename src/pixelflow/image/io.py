"""
Image loading and writing using OpenCV.

This is the boundary between container formats and the RGBA working layout:
- load_image / decode_image: file or bytes -> PixelBuffer (RGBA)
- save_image / encode_image: PixelBuffer -> file or bytes

OpenCV works in BGR(A) order, so every crossing converts channel order.
Failures are raised as LoadError / WriteError and never retried here.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from pixelflow.constants import IOConstants
from pixelflow.core.buffer import PixelBuffer
from pixelflow.exceptions import LoadError, WriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    if not ext:
        return ext
    return ext if ext.startswith(".") else f".{ext}"


def _to_rgba(image: np.ndarray, source: str) -> np.ndarray:
    """Convert a decoded OpenCV image (gray, BGR or BGRA) to RGBA."""
    if image.dtype != np.uint8:
        raise LoadError(source, f"unsupported sample type {image.dtype}, expected 8-bit")

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

    raise LoadError(source, f"unsupported channel layout {image.shape}")


def decode_image(data: bytes, source: str = "<bytes>") -> PixelBuffer:
    """
    Decode an encoded image held in memory.

    Args:
        data: Encoded image bytes (BMP, PNG, TIFF, ...)
        source: Name used in error messages

    Returns:
        PixelBuffer in RGBA order

    Raises:
        LoadError: If the bytes cannot be decoded
    """
    if not data:
        raise LoadError(source, "empty input")

    nparr = np.frombuffer(data, np.uint8)
    image = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise LoadError(source, "decode failed")

    buf = PixelBuffer.from_array(_to_rgba(image, source))
    logger.debug(f"Decoded {source} ({buf.width}x{buf.height})")
    return buf


def load_image(path: PathLike) -> PixelBuffer:
    """
    Load an image file into a PixelBuffer.

    Args:
        path: Image file path

    Returns:
        PixelBuffer in RGBA order

    Raises:
        LoadError: If the file is missing, has an unsupported extension
            or cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise LoadError(str(path), "file not found")

    ext = _normalize_extension(path.suffix)
    if ext not in IOConstants.SUPPORTED_EXTENSIONS:
        raise LoadError(str(path), f"unsupported format {ext or '(none)'}")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise LoadError(str(path), str(e)) from e

    buf = decode_image(data, source=str(path))
    logger.info(f"Loaded {path} ({buf.width}x{buf.height})")
    return buf


def encode_image(buf: PixelBuffer, ext: str = IOConstants.DEFAULT_OUTPUT_EXTENSION) -> bytes:
    """
    Encode a PixelBuffer into container bytes.

    Args:
        buf: Buffer to encode
        ext: Container extension ('.bmp', '.png', '.tif', ...)

    Returns:
        Encoded bytes

    Raises:
        WriteError: If the format is unsupported or encoding fails
    """
    ext = _normalize_extension(ext)
    target = f"<{ext}>"
    if ext not in IOConstants.SUPPORTED_EXTENSIONS:
        raise WriteError(target, f"unsupported format {ext or '(none)'}")
    if buf.size == 0:
        raise WriteError(target, "cannot encode an empty buffer")

    bgra = cv2.cvtColor(buf.pixels, cv2.COLOR_RGBA2BGRA)
    try:
        success, encoded = cv2.imencode(ext, bgra)
    except cv2.error as e:
        raise WriteError(target, str(e)) from e

    if not success:
        raise WriteError(target, "encode failed")

    return encoded.tobytes()


def save_image(buf: PixelBuffer, path: PathLike) -> Path:
    """
    Write a PixelBuffer to disk; the extension picks the container.

    Args:
        buf: Buffer to write
        path: Output file path

    Returns:
        The written path

    Raises:
        WriteError: If encoding or writing fails
    """
    path = Path(path)
    try:
        data = encode_image(buf, path.suffix)
    except WriteError as e:
        raise WriteError(str(path), e.details.get("reason", e.message)) from e

    try:
        path.write_bytes(data)
    except OSError as e:
        raise WriteError(str(path), str(e)) from e

    logger.info(f"Saved {path} ({buf.width}x{buf.height}, {len(data)} bytes)")
    return path
