"""
Shared FFmpeg path resolution and command execution utilities.
"""
from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess
from typing import Optional

from slidextract.core.exceptions import FFmpegError

logger = logging.getLogger(__name__)

# Common install locations checked when ffmpeg is not on PATH
_FALLBACK_FFMPEG_PATHS = [
    "/usr/local/bin/ffmpeg",
    "/opt/homebrew/bin/ffmpeg",
    r"C:\Program Files\ffmpeg\bin\ffmpeg.exe",
    r"C:\ffmpeg\bin\ffmpeg.exe",
]


def get_ffmpeg_path() -> str:
    """Resolve ffmpeg executable path. Checks PATH first, then known locations."""
    path = shutil.which("ffmpeg")
    if path:
        return path

    for candidate in _FALLBACK_FFMPEG_PATHS:
        if os.path.exists(candidate):
            logger.info("Found FFmpeg at: %s", candidate)
            return candidate

    return "ffmpeg"


def get_ffprobe_path() -> str:
    """Resolve ffprobe executable path derived from ffmpeg path."""
    ffmpeg = get_ffmpeg_path()
    if "ffmpeg.exe" in ffmpeg:
        probe = ffmpeg.replace("ffmpeg.exe", "ffprobe.exe")
        if os.path.exists(probe):
            return probe
    probe = shutil.which("ffprobe")
    return probe or "ffprobe"


# Module-level singletons (resolved once at import time)
FFMPEG_PATH: str = get_ffmpeg_path()
FFPROBE_PATH: str = get_ffprobe_path()


def run_ffprobe(
    args: list[str],
    *,
    binary: Optional[str] = None,
    timeout: float = 30,
) -> subprocess.CompletedProcess[str]:
    """Run an FFprobe command."""
    cmd = [binary or FFPROBE_PATH, *args]
    logger.debug("Running: %s", " ".join(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    if result.returncode != 0:
        raise FFmpegError(result.returncode, result.stderr)
    return result


def format_seek(timestamp_us: int) -> str:
    """FFmpeg duration syntax for an exact microsecond offset."""
    return f"{timestamp_us}us"


async def run_ffmpeg(
    args: list[str],
    *,
    binary: Optional[str] = None,
) -> bytes:
    """Run an FFmpeg command as an asyncio child process and return its stdout.

    If the awaiting task is cancelled (including by a timeout), the child is
    killed and reaped before :class:`asyncio.CancelledError` propagates, so
    no ffmpeg process outlives its task.
    """
    cmd = [binary or FFMPEG_PATH, "-y", "-hide_banner", "-loglevel", "error", *args]
    logger.debug("Running: %s", " ".join(cmd))
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()
        logger.debug("Killed ffmpeg pid %s", proc.pid)
        raise
    if proc.returncode != 0:
        message = stderr.decode("utf-8", errors="replace")
        logger.debug("FFmpeg error: %s", message)
        raise FFmpegError(proc.returncode, message)
    return stdout
