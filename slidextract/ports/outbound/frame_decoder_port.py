"""Ports for producing single still frames from a video."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable

from slidextract.core.value_objects.image_format import ImageFormat


@runtime_checkable
class FileFrameDecoderPort(Protocol):
    async def extract_to_file(self, video_path: str, timestamp_us: int, image_format: ImageFormat, destination: Path) -> Path: ...


@runtime_checkable
class PipeFrameDecoderPort(Protocol):
    async def extract_to_bytes(self, video_path: str, timestamp_us: int, image_format: ImageFormat) -> bytes: ...
