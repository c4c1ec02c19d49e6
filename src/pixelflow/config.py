"""
Configuration management using Pydantic for PixelFlow.
Provides type-safe configuration with validation and environment variable support.

Configuration only reaches the drivers (CLI and HTTP); the filters themselves
take plain arguments.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pixelflow.constants import APIConstants, BlurConstants, SystemConstants
from pixelflow.enums import BlurEdgeMode, FlipAxis, LogLevel
from pixelflow.exceptions import ConfigurationException

logger = logging.getLogger(__name__)


def read_config_file(config_file: str) -> Dict[str, Any]:
    """
    Parse a YAML config file into a dictionary.

    An empty file yields an empty dictionary.

    Raises:
        ConfigurationException: If the file cannot be read, is not valid YAML
            or its top level is not a mapping
    """
    try:
        with open(config_file, "r") as f:
            file_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationException("config_file", f"cannot read {config_file}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationException("config_file", f"invalid YAML in {config_file}: {e}") from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigurationException(
            "config_file",
            f"{config_file} must contain a mapping, got {type(file_config).__name__}",
        )
    return file_config


def merge_config(values: Dict[str, Any], file_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill values from a parsed config file without overriding what is already set.

    Groups present on both sides are merged key by key.
    """
    for key, value in file_config.items():
        current = values.get(key)
        if current is None:
            values[key] = value
        elif isinstance(current, dict) and isinstance(value, dict):
            values[key] = merge_config(dict(current), value)
    return values


class BlurConfig(BaseSettings):
    """Box blur configuration."""

    enabled: bool = Field(default=True, description="Apply box blur")
    radius: int = Field(
        default=BlurConstants.DEFAULT_RADIUS,
        ge=BlurConstants.MIN_RADIUS,
        le=BlurConstants.MAX_RADIUS,
        description="Half-width of the square averaging window in pixels",
    )
    edge_mode: BlurEdgeMode = Field(
        default=BlurEdgeMode.IN_BOUNDS, description="Divisor policy near buffer edges"
    )

    model_config = SettingsConfigDict(env_prefix="PF_BLUR_", extra="ignore")


class GrayscaleConfig(BaseSettings):
    """Grayscale configuration."""

    enabled: bool = Field(default=True, description="Apply grayscale conversion")
    preserve_alpha: bool = Field(
        default=False, description="Keep input alpha instead of forcing opaque output"
    )

    model_config = SettingsConfigDict(env_prefix="PF_GRAYSCALE_", extra="ignore")


class FlipConfig(BaseSettings):
    """Flip configuration."""

    enabled: bool = Field(default=True, description="Apply flip")
    axis: FlipAxis = Field(default=FlipAxis.HORIZONTAL, description="Mirror axis")

    model_config = SettingsConfigDict(env_prefix="PF_FLIP_", extra="ignore")


class APIConfig(BaseSettings):
    """HTTP driver configuration."""

    host: str = Field(default=APIConstants.DEFAULT_HOST, description="API host address")
    port: int = Field(default=APIConstants.DEFAULT_PORT, ge=1, le=65535, description="API port")
    max_upload_size_mb: int = Field(
        default=APIConstants.MAX_UPLOAD_SIZE_MB,
        ge=1,
        le=500,
        description="Maximum upload file size in MB",
    )

    model_config = SettingsConfigDict(env_prefix="PF_API_", extra="ignore")


class SystemConfig(BaseSettings):
    """System configuration."""

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = [level.value for level in LogLevel]
        v_upper = str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    model_config = SettingsConfigDict(env_prefix="PF_SYSTEM_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    # Sub-configurations
    blur: BlurConfig = Field(default_factory=BlurConfig)
    grayscale: GrayscaleConfig = Field(default_factory=GrayscaleConfig)
    flip: FlipConfig = Field(default_factory=FlipConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv(SystemConstants.CONFIG_FILE_ENV)

        if config_file and Path(config_file).exists():
            try:
                file_config = read_config_file(config_file)
            except ConfigurationException as e:
                logger.warning(e.message)
                return values

            # Env vars and kwargs take precedence, field by field within each group
            merge_config(values, file_config)

        return values

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_to_file(self, path: str) -> None:
        """Save current configuration to YAML file."""
        config_dict = self.to_dict()
        with open(path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False)

    model_config = SettingsConfigDict(
        env_prefix="PF_",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


# Convenience function to reload settings (clears cache)
def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()


def load_settings(config_file: str) -> Settings:
    """
    Build settings from an explicit YAML config file.

    Unlike the implicit PF_CONFIG_FILE lookup, an unreadable or malformed
    file and invalid values are errors here.

    Raises:
        ConfigurationException: If the file is missing, malformed or fails validation
    """
    if not Path(config_file).is_file():
        raise ConfigurationException("config_file", f"{config_file} does not exist")

    read_config_file(config_file)

    try:
        return Settings(config_file=config_file)
    except ValidationError as e:
        raise ConfigurationException("config_file", str(e)) from e
