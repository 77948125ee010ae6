"""Port for still-image encode/decode."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable

from slidextract.core.entities.frame import Frame
from slidextract.core.value_objects.image_format import ImageFormat


@runtime_checkable
class ImageCodecPort(Protocol):
    def decode(self, data: bytes, index: int = 0) -> Frame: ...
    def read(self, path: Path, index: int = 0) -> Frame: ...
    def encode(self, frame: Frame, image_format: ImageFormat) -> bytes: ...
    def write(self, frame: Frame, path: Path, image_format: ImageFormat) -> Path: ...
