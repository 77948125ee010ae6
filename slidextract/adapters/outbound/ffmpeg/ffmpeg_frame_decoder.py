"""FFmpeg adapter that grabs one still frame per call.

Implements both :class:`FileFrameDecoderPort` (writes the image to disk)
and :class:`PipeFrameDecoderPort` (returns the encoded image bytes).
Each call owns one ffmpeg child process, so N concurrent calls run N
processes. Cancelling a call kills its process and removes any partial
output file.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from slidextract.adapters.outbound.ffmpeg.ffmpeg_base import format_seek, run_ffmpeg
from slidextract.core.exceptions import FFmpegError, FrameExtractionError
from slidextract.core.value_objects.image_format import ImageFormat

logger = logging.getLogger(__name__)


class FFmpegFrameDecoder:
    """Single-frame extraction via ``ffmpeg -accurate_seek -ss``."""

    def __init__(self, ffmpeg_path: Optional[str] = None) -> None:
        self._ffmpeg_path = ffmpeg_path

    # -- port interface ---------------------------------------------------------

    async def extract_to_file(
        self,
        video_path: str,
        timestamp_us: int,
        image_format: ImageFormat,
        destination: Path,
    ) -> Path:
        video_path = str(video_path)
        destination = Path(destination)
        # Output format follows the destination's extension.
        args = [*self._seek_args(video_path, timestamp_us), str(destination)]
        try:
            await run_ffmpeg(args, binary=self._ffmpeg_path)
        except asyncio.CancelledError:
            destination.unlink(missing_ok=True)
            raise
        except (FFmpegError, OSError) as exc:
            destination.unlink(missing_ok=True)
            raise FrameExtractionError(video_path, timestamp_us, str(exc)) from exc
        logger.debug("Extracted frame at %dus -> %s", timestamp_us, destination)
        return destination

    async def extract_to_bytes(
        self,
        video_path: str,
        timestamp_us: int,
        image_format: ImageFormat,
    ) -> bytes:
        video_path = str(video_path)
        args = [
            *self._seek_args(video_path, timestamp_us),
            "-c:v", image_format.ffmpeg_codec,
            "-f", "image2pipe",
            "pipe:1",
        ]
        try:
            data = await run_ffmpeg(args, binary=self._ffmpeg_path)
        except (FFmpegError, OSError) as exc:
            raise FrameExtractionError(video_path, timestamp_us, str(exc)) from exc
        if not data:
            raise FrameExtractionError(video_path, timestamp_us, "ffmpeg produced no image data")
        return data

    # -- helpers ----------------------------------------------------------------

    def _seek_args(self, video_path: str, timestamp_us: int) -> list[str]:
        return [
            "-accurate_seek",
            "-ss", format_seek(timestamp_us),
            "-i", video_path,
            "-frames:v", "1",
        ]
