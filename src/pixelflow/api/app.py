"""
PixelFlow - FastAPI application
"""

import logging
from typing import Optional

from fastapi import FastAPI

from pixelflow import __version__
from pixelflow.api.exceptions import register_exception_handlers
from pixelflow.api.routers import pipeline, system
from pixelflow.config import Settings, get_settings
from pixelflow.constants import APIConstants

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to serve with (defaults to cached settings)

    Returns:
        Configured FastAPI instance
    """
    settings = settings if settings is not None else get_settings()

    app = FastAPI(
        title="PixelFlow",
        description="Box blur, grayscale and flip pipeline for bitmap images",
        version=__version__,
    )

    app.state.settings = settings
    app.state.debug = settings.system.debug

    register_exception_handlers(app)

    app.include_router(
        pipeline.router, prefix=f"{APIConstants.API_PREFIX}/pipeline", tags=["Pipeline"]
    )
    app.include_router(system.router, prefix=f"{APIConstants.API_PREFIX}/system", tags=["System"])

    @app.get("/")
    async def root():
        return {
            "name": "PixelFlow",
            "status": "running",
            "version": __version__,
            "endpoints": {
                "pipeline": f"{APIConstants.API_PREFIX}/pipeline",
                "system": f"{APIConstants.API_PREFIX}/system",
                "docs": "/docs",
            },
        }

    logger.info("PixelFlow app created")
    return app
