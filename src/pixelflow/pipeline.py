"""
Pixel pipeline with stage architecture.

Each stage is a separate class that can be enabled/disabled via settings.
Stages are applied in a fixed sequence for deterministic results.

Pipeline order:
1. Box blur (in place)
2. Grayscale (in place)
3. Flip (new buffer)

The buffer is passed from stage to stage by ownership; no stage keeps a
reference to it after returning.

Usage:
    pipeline = PixelPipeline(settings)
    processed, applied_stages = pipeline.process(buf)
"""

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from pixelflow.config import Settings, get_settings
from pixelflow.core.buffer import PixelBuffer
from pixelflow.image.blur import box_blur
from pixelflow.image.flip import flip
from pixelflow.image.grayscale import grayscale
from pixelflow.image.io import load_image, save_image

logger = logging.getLogger(__name__)


class PipelineStage(ABC):
    """Abstract base class for pipeline stages."""

    @abstractmethod
    def apply(self, buf: PixelBuffer, settings: Settings) -> PixelBuffer:
        """
        Apply stage to buffer.

        Args:
            buf: Input buffer (ownership passes to the stage)
            settings: Pipeline settings

        Returns:
            Resulting buffer; the same object for in-place stages
        """
        pass

    @abstractmethod
    def is_enabled(self, settings: Settings) -> bool:
        """Check if stage is enabled in settings."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage name for logging and tracking."""
        pass


class BlurStage(PipelineStage):
    """Box blur in place."""

    def apply(self, buf: PixelBuffer, settings: Settings) -> PixelBuffer:
        box_blur(buf, radius=settings.blur.radius, edge_mode=settings.blur.edge_mode)
        return buf

    def is_enabled(self, settings: Settings) -> bool:
        return settings.blur.enabled

    @property
    def name(self) -> str:
        return "blur"


class GrayscaleStage(PipelineStage):
    """Grayscale conversion in place."""

    def apply(self, buf: PixelBuffer, settings: Settings) -> PixelBuffer:
        grayscale(buf, preserve_alpha=settings.grayscale.preserve_alpha)
        return buf

    def is_enabled(self, settings: Settings) -> bool:
        return settings.grayscale.enabled

    @property
    def name(self) -> str:
        return "grayscale"


class FlipStage(PipelineStage):
    """Mirror into a new buffer."""

    def apply(self, buf: PixelBuffer, settings: Settings) -> PixelBuffer:
        return flip(buf, settings.flip.axis)

    def is_enabled(self, settings: Settings) -> bool:
        return settings.flip.enabled

    @property
    def name(self) -> str:
        return "flip"


class PixelPipeline:
    """Applies blur, grayscale and flip in sequence."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else get_settings()
        self.stages: List[PipelineStage] = [
            BlurStage(),  # 1. Box blur
            GrayscaleStage(),  # 2. Grayscale
            FlipStage(),  # 3. Flip
        ]

    def process(self, buf: PixelBuffer) -> Tuple[PixelBuffer, List[str]]:
        """
        Apply enabled stages to buffer.

        Args:
            buf: Input buffer, modified in place by the in-place stages

        Returns:
            Tuple of (result buffer, list of applied stage names)
        """
        result = buf
        applied: List[str] = []

        for stage in self.stages:
            if stage.is_enabled(self.settings):
                try:
                    result = stage.apply(result, self.settings)
                except Exception as e:
                    logger.error(f"Failed to apply {stage.name}: {e}")
                    raise
                applied.append(stage.name)
                logger.debug(f"Applied stage: {stage.name}")

        if not applied:
            logger.debug("No pipeline stages applied")

        return result, applied

    def get_available_stages(self) -> List[str]:
        """Get list of available stage names."""
        return [stage.name for stage in self.stages]


class PipelineResult(BaseModel):
    """Summary of a pipeline run."""

    input_path: str = Field(..., description="Loaded image path")
    output_path: str = Field(..., description="Written image path")
    width: int = Field(..., ge=0, description="Output width")
    height: int = Field(..., ge=0, description="Output height")
    applied_stages: List[str] = Field(default_factory=list, description="Stages applied in order")
    processing_time_ms: float = Field(..., ge=0, description="Processing time in milliseconds")


def run_pipeline(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    settings: Optional[Settings] = None,
) -> PipelineResult:
    """
    Load an image, run the pipeline and write the result.

    Args:
        input_path: Image to load
        output_path: Destination; the extension picks the container
        settings: Pipeline settings (defaults to cached settings)

    Returns:
        PipelineResult describing the run

    Raises:
        LoadError: If the input cannot be loaded
        WriteError: If the output cannot be written
    """
    start_time = time.time()
    pipeline = PixelPipeline(settings)

    buf = load_image(input_path)
    result, applied = pipeline.process(buf)
    del buf

    written = save_image(result, output_path)
    elapsed_ms = (time.time() - start_time) * 1000

    logger.info(
        f"Pipeline finished in {elapsed_ms:.1f} ms: {input_path} -> {written} "
        f"(stages: {', '.join(applied) or 'none'})"
    )

    return PipelineResult(
        input_path=str(input_path),
        output_path=str(written),
        width=result.width,
        height=result.height,
        applied_stages=applied,
        processing_time_ms=elapsed_ms,
    )
