"""FFprobe adapter implementing :class:`DurationProbePort`."""
from __future__ import annotations

import asyncio
import logging
import math
import subprocess
from typing import Optional

from slidextract.adapters.outbound.ffmpeg.ffmpeg_base import run_ffprobe
from slidextract.core.exceptions import DurationProbeError, FFmpegError
from slidextract.ports.outbound.duration_probe_port import DEFAULT_PROBE_TIMEOUT

logger = logging.getLogger(__name__)


class FFprobeDurationProbe:
    """Reads ``format=duration`` from ffprobe under a hard deadline.

    Any failure is fatal for the job; there is no retry.
    """

    def __init__(self, ffprobe_path: Optional[str] = None, timeout: float = DEFAULT_PROBE_TIMEOUT) -> None:
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    async def probe_duration(self, video_path: str, timeout: Optional[float] = None) -> float:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self._probe_sync, str(video_path), timeout or self._timeout
        )

    def _probe_sync(self, video_path: str, timeout: float) -> float:
        try:
            result = run_ffprobe(
                [
                    "-v", "error",
                    "-show_entries", "format=duration",
                    "-of", "default=noprint_wrappers=1:nokey=1",
                    video_path,
                ],
                binary=self._ffprobe_path,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise DurationProbeError(video_path, f"ffprobe timed out after {timeout:.1f}s") from None
        except FFmpegError as exc:
            raise DurationProbeError(video_path, exc.stderr.strip() or f"rc={exc.returncode}") from exc
        except OSError as exc:
            raise DurationProbeError(video_path, str(exc)) from exc

        raw = result.stdout.strip()
        try:
            duration = float(raw)
        except ValueError:
            raise DurationProbeError(video_path, f"unparseable duration {raw!r}") from None

        if not math.isfinite(duration) or duration <= 0:
            raise DurationProbeError(video_path, f"invalid duration {duration}")

        logger.info("Probed %s: duration=%.3fs", video_path, duration)
        return duration
