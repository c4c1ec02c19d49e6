"""
Shared FastAPI dependencies for the PixelFlow API.
"""

import logging

from fastapi import HTTPException, Request

from pixelflow.config import Settings

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """
    Get settings instance from app state.

    Raises:
        HTTPException: If the app was created without settings
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        logger.error("Settings not initialized in app state")
        raise HTTPException(status_code=503, detail="Service not initialized")
    return settings
