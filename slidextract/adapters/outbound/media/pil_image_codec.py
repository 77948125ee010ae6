"""Pillow-backed still-image codec.

Satisfies :class:`~slidextract.ports.outbound.image_codec_port.ImageCodecPort`.
Every decoded image is normalised to 8-bit RGBA so frames from any of the
supported formats compare uniformly.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from slidextract.core.entities.frame import Frame
from slidextract.core.exceptions import FrameDecodeError
from slidextract.core.value_objects.image_format import ImageFormat

logger = logging.getLogger(__name__)

_DEFAULT_JPEG_QUALITY: int = 90


class PILImageCodec:
    """Decodes/encodes bmp, png and jpeg via Pillow."""

    def __init__(self, jpeg_quality: int = _DEFAULT_JPEG_QUALITY) -> None:
        self._jpeg_quality = jpeg_quality

    # -- Port interface --------------------------------------------------------

    def decode(self, data: bytes, index: int = 0) -> Frame:
        try:
            with Image.open(io.BytesIO(data)) as img:
                return self._to_frame(img, index)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise FrameDecodeError(f"Cannot decode frame {index}: {exc}") from exc

    def read(self, path: Path, index: int = 0) -> Frame:
        try:
            with Image.open(path) as img:
                return self._to_frame(img, index)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise FrameDecodeError(f"Cannot decode frame file {path}: {exc}") from exc

    def encode(self, frame: Frame, image_format: ImageFormat) -> bytes:
        buf = io.BytesIO()
        self._save(frame, buf, image_format)
        return buf.getvalue()

    def write(self, frame: Frame, path: Path, image_format: ImageFormat) -> Path:
        path = Path(path)
        with path.open("wb") as fh:
            self._save(frame, fh, image_format)
        logger.debug("Wrote frame %d -> %s", frame.index, path)
        return path

    # -- Private helpers -------------------------------------------------------

    @staticmethod
    def _to_frame(img: Image.Image, index: int) -> Frame:
        rgba = img.convert("RGBA")
        pixels = np.array(rgba, dtype=np.uint8)
        return Frame(index=index, pixels=pixels)

    def _save(self, frame: Frame, fh, image_format: ImageFormat) -> None:
        img = Image.fromarray(frame.pixels)
        if image_format is ImageFormat.JPEG:
            img.convert("RGB").save(fh, format="JPEG", quality=self._jpeg_quality)
        else:
            img.save(fh, format=image_format.pil_format)
