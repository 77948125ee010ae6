"""
slidextract configuration using Pydantic Settings.
Defaults can be overridden through environment variables or a ``.env`` file.
"""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from slidextract.adapters.outbound.ffmpeg.ffmpeg_base import FFMPEG_PATH, FFPROBE_PATH
from slidextract.core.exceptions import ConfigurationError
from slidextract.core.value_objects.image_format import ImageFormat
from slidextract.core.value_objects.normalization import Normalization
from slidextract.ports.outbound.duration_probe_port import DEFAULT_PROBE_TIMEOUT

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class ExtractionSettings(BaseSettings):
    interval_seconds: float = 0.5
    threshold: int = 1000
    workers: int = 8
    max_frames: int = 25
    image_format: str = "bmp"
    normalization: str = "pixel"
    jpeg_quality: int = 90
    task_timeout: Optional[float] = None

    model_config = {"env_prefix": "SLIDEXTRACT_"}

    @field_validator("image_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        try:
            ImageFormat.parse(value)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("normalization")
    @classmethod
    def _known_normalization(cls, value: str) -> str:
        try:
            return Normalization.parse(value).value
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc


class FFmpegSettings(BaseSettings):
    ffmpeg_path: str = FFMPEG_PATH
    ffprobe_path: str = FFPROBE_PATH
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    model_config = {"env_prefix": "FFMPEG_"}


class OutputSettings(BaseSettings):
    root: str = "out"

    model_config = {"env_prefix": "OUTPUT_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"
    file: str = ""

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
