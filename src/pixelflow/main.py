"""
PixelFlow - command line driver.

    pixelflow run INPUT OUTPUT [--radius N] [--axis horizontal|vertical] ...
    pixelflow serve [--host HOST] [--port PORT]
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from pixelflow.config import Settings, get_settings, load_settings
from pixelflow.constants import BlurConstants, SystemConstants
from pixelflow.enums import BlurEdgeMode, FlipAxis, LogLevel
from pixelflow.exceptions import ConfigurationException, LoadError, WriteError
from pixelflow.pipeline import run_pipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 2


def configure_logging(level: str) -> None:
    """Configure root logging for the command line."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=SystemConstants.LOG_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixelflow", description="Box blur, grayscale and flip a bitmap image"
    )
    parser.add_argument("-c", "--config", help="YAML config file", required=False)
    parser.add_argument(
        "-l",
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Logging level (overrides config)",
        required=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Process one image")
    run.add_argument("input", help="Input image file name")
    run.add_argument("output", help="Output image file name (extension picks the format)")
    run.add_argument("-r", "--radius", type=int, help="Box blur radius in pixels")
    run.add_argument(
        "-e",
        "--edge-mode",
        choices=[mode.value for mode in BlurEdgeMode],
        help="Blur divisor policy near edges",
    )
    run.add_argument(
        "-a", "--axis", choices=[axis.value for axis in FlipAxis], help="Flip axis"
    )
    run.add_argument("--no-blur", action="store_true", help="Skip box blur")
    run.add_argument("--no-grayscale", action="store_true", help="Skip grayscale")
    run.add_argument("--no-flip", action="store_true", help="Skip flip")
    run.add_argument(
        "--preserve-alpha", action="store_true", help="Keep input alpha during grayscale"
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (overrides config)")
    serve.add_argument("--port", type=int, help="Bind port (overrides config)")

    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """
    Return a copy of settings with command line flags applied.

    Raises:
        ValueError: If an override is out of range
    """
    blur_update = {}
    if getattr(args, "radius", None) is not None:
        if not BlurConstants.MIN_RADIUS <= args.radius <= BlurConstants.MAX_RADIUS:
            raise ValueError(
                f"Radius must be between {BlurConstants.MIN_RADIUS} "
                f"and {BlurConstants.MAX_RADIUS}"
            )
        blur_update["radius"] = args.radius
    if getattr(args, "edge_mode", None) is not None:
        blur_update["edge_mode"] = BlurEdgeMode(args.edge_mode)
    if getattr(args, "no_blur", False):
        blur_update["enabled"] = False

    grayscale_update = {}
    if getattr(args, "no_grayscale", False):
        grayscale_update["enabled"] = False
    if getattr(args, "preserve_alpha", False):
        grayscale_update["preserve_alpha"] = True

    flip_update = {}
    if getattr(args, "axis", None) is not None:
        flip_update["axis"] = FlipAxis(args.axis)
    if getattr(args, "no_flip", False):
        flip_update["enabled"] = False

    api_update = {}
    if getattr(args, "host", None) is not None:
        api_update["host"] = args.host
    if getattr(args, "port", None) is not None:
        api_update["port"] = args.port

    system_update = {}
    if args.log_level is not None:
        system_update["log_level"] = args.log_level

    return settings.model_copy(
        update={
            "blur": settings.blur.model_copy(update=blur_update),
            "grayscale": settings.grayscale.model_copy(update=grayscale_update),
            "flip": settings.flip.model_copy(update=flip_update),
            "api": settings.api.model_copy(update=api_update),
            "system": settings.system.model_copy(update=system_update),
        }
    )


def serve(settings: Settings) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from pixelflow.api.app import create_app

    logger.info(f"Starting PixelFlow API on {settings.api.host}:{settings.api.port}")
    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.system.log_level.lower(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else get_settings()
    except ConfigurationException as e:
        parser.error(e.message)
    except ValidationError as e:
        parser.error(f"Invalid settings from environment: {e}")

    try:
        settings = apply_overrides(settings, args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(settings.system.log_level)

    if args.command == "serve":
        serve(settings)
        return EXIT_OK

    try:
        result = run_pipeline(args.input, args.output, settings)
    except (LoadError, WriteError) as e:
        logger.error(e.message)
        return EXIT_IO_ERROR

    logger.info(
        f"Wrote {result.output_path} ({result.width}x{result.height}) "
        f"in {result.processing_time_ms:.1f} ms"
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
