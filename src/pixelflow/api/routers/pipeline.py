"""
Pipeline API Router - Run the pixel pipeline on an uploaded image
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from pixelflow.api.dependencies import get_app_settings
from pixelflow.api.exceptions import safe_endpoint
from pixelflow.config import Settings
from pixelflow.constants import BlurConstants, IOConstants
from pixelflow.enums import BlurEdgeMode, FlipAxis
from pixelflow.image.io import decode_image, encode_image
from pixelflow.pipeline import PixelPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

MEDIA_TYPES = {
    ".bmp": "image/bmp",
    ".png": "image/png",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}


def request_settings(
    settings: Settings,
    radius: Optional[int] = None,
    edge_mode: Optional[BlurEdgeMode] = None,
    axis: Optional[FlipAxis] = None,
    blur: Optional[bool] = None,
    grayscale: Optional[bool] = None,
    flip: Optional[bool] = None,
    preserve_alpha: Optional[bool] = None,
) -> Settings:
    """Copy settings with per-request overrides (None leaves a value unchanged)."""

    def _update(**values):
        return {key: value for key, value in values.items() if value is not None}

    return settings.model_copy(
        update={
            "blur": settings.blur.model_copy(
                update=_update(radius=radius, edge_mode=edge_mode, enabled=blur)
            ),
            "grayscale": settings.grayscale.model_copy(
                update=_update(enabled=grayscale, preserve_alpha=preserve_alpha)
            ),
            "flip": settings.flip.model_copy(update=_update(axis=axis, enabled=flip)),
        }
    )


def render_upload(contents: bytes, source: str, settings: Settings, ext: str):
    """Decode, process and encode one upload; returns (result, applied, encoded)."""
    buf = decode_image(contents, source=source)
    result, applied = PixelPipeline(settings).process(buf)
    return result, applied, encode_image(result, ext)


@router.post("/process")
@safe_endpoint
async def process_image(
    file: UploadFile = File(...),
    radius: Optional[int] = Query(
        None, ge=BlurConstants.MIN_RADIUS, le=BlurConstants.MAX_RADIUS, description="Blur radius"
    ),
    edge_mode: Optional[BlurEdgeMode] = Query(None, description="Blur edge divisor policy"),
    axis: Optional[FlipAxis] = Query(None, description="Flip axis"),
    blur: Optional[bool] = Query(None, description="Enable box blur"),
    grayscale: Optional[bool] = Query(None, description="Enable grayscale"),
    flip: Optional[bool] = Query(None, description="Enable flip"),
    preserve_alpha: Optional[bool] = Query(None, description="Keep alpha during grayscale"),
    output_format: str = Query(
        IOConstants.DEFAULT_OUTPUT_EXTENSION, alias="format", description="Output container"
    ),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Run blur, grayscale and flip on an uploaded image.

    Query parameters override the server configuration for this request only.

    Returns:
        Encoded result image; applied stages listed in X-Applied-Stages
    """
    ext = output_format.lower() if output_format.startswith(".") else f".{output_format.lower()}"
    if ext not in MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported output format: {output_format}")

    contents = await file.read()
    max_bytes = settings.api.max_upload_size_mb * 1024 * 1024
    if len(contents) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {settings.api.max_upload_size_mb} MB limit",
        )

    run_settings = request_settings(
        settings,
        radius=radius,
        edge_mode=edge_mode,
        axis=axis,
        blur=blur,
        grayscale=grayscale,
        flip=flip,
        preserve_alpha=preserve_alpha,
    )
    result, applied, encoded = await run_in_threadpool(
        render_upload, contents, file.filename or "<upload>", run_settings, ext
    )

    logger.info(
        f"Processed upload {file.filename} ({result.width}x{result.height}), "
        f"stages: {', '.join(applied) or 'none'}"
    )

    return Response(
        content=encoded,
        media_type=MEDIA_TYPES[ext],
        headers={
            "X-Applied-Stages": ",".join(applied),
            "X-Image-Width": str(result.width),
            "X-Image-Height": str(result.height),
        },
    )
