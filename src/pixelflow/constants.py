"""
Constants and configuration values for PixelFlow.
Centralizes all magic numbers and configuration constants.
"""


class PixelConstants:
    """Constants related to pixel layout."""

    CHANNELS = 4
    OPAQUE = 255


class GrayscaleConstants:
    """Luminance weights (Rec. 709 primaries, D65 white)."""

    # 0.212671, 0.715160, 0.072169 as integers over WEIGHT_SCALE; they sum to WEIGHT_SCALE
    WEIGHT_SCALE = 1_000_000
    RED_WEIGHT_INT = 212_671
    GREEN_WEIGHT_INT = 715_160
    BLUE_WEIGHT_INT = 72_169


class BlurConstants:
    """Constants related to box blur."""

    DEFAULT_RADIUS = 2
    MIN_RADIUS = 0
    MAX_RADIUS = 64


class IOConstants:
    """Constants related to image loading and writing."""

    SUPPORTED_EXTENSIONS = [".bmp", ".png", ".tif", ".tiff"]
    DEFAULT_OUTPUT_EXTENSION = ".png"


class APIConstants:
    """Constants related to the HTTP driver."""

    API_PREFIX = "/api"
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 8000
    MAX_UPLOAD_SIZE_MB = 20


class SystemConstants:
    """System-level constants."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    CONFIG_FILE_ENV = "PF_CONFIG_FILE"
