"""
System API Router - Health and configuration
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends

from pixelflow import __version__
from pixelflow.api.dependencies import get_app_settings
from pixelflow.api.exceptions import safe_endpoint
from pixelflow.config import Settings
from pixelflow.pipeline import PixelPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/health")
@safe_endpoint
async def health_check() -> dict:
    """Basic liveness check"""
    return {
        "status": "healthy",
        "version": __version__,
        "uptime": time.time() - START_TIME,
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/config")
@safe_endpoint
async def get_config(settings: Settings = Depends(get_app_settings)) -> dict:
    """Return the active pipeline configuration"""
    config = settings.to_dict()
    return {
        "blur": config["blur"],
        "grayscale": config["grayscale"],
        "flip": config["flip"],
        "stages": PixelPipeline(settings).get_available_stages(),
    }
