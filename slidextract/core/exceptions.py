"""Custom exception hierarchy for slidextract."""
from __future__ import annotations


class SlidextractError(Exception):
    """Base exception for all slidextract errors."""


# ── Configuration errors (raised before any I/O) ──────────────────────────


class ConfigurationError(SlidextractError):
    """Raised when user-supplied settings are invalid."""


class UnsupportedFormatError(ConfigurationError):
    """Raised when an output image format is not recognised."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unrecognized format {name!r}: allowed formats are bmp, png and jpg/jpeg"
        )


class InvalidIntervalError(ConfigurationError):
    """Raised when a sampling interval or duration cannot produce a schedule."""


# ── Fatal errors (abort the enclosing job) ────────────────────────────────


class FatalJobError(SlidextractError):
    """Base class for failures that abort the whole video job."""


class DurationProbeError(FatalJobError):
    """Raised when the video duration cannot be determined."""

    def __init__(self, video_path: str, reason: str) -> None:
        self.video_path = video_path
        self.reason = reason
        super().__init__(f"Cannot probe duration of {video_path}: {reason}")


class FrameDecodeError(FatalJobError):
    """Raised when an extracted still image cannot be decoded."""


class DimensionMismatchError(FatalJobError):
    """Raised when two frames of different size are compared."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Frame bounds not equal: {first[0]}x{first[1]} vs {second[0]}x{second[1]}"
        )


class OutputDirectoryError(FatalJobError):
    """Raised when a per-video output directory cannot be created."""


# ── Per-task errors ───────────────────────────────────────────────────────


class FrameExtractionError(SlidextractError):
    """Raised when the external decoder fails to produce a frame."""

    def __init__(self, video_path: str, timestamp_us: int, reason: str) -> None:
        self.video_path = video_path
        self.timestamp_us = timestamp_us
        self.reason = reason
        super().__init__(
            f"Frame extraction failed for {video_path} at {timestamp_us}us: {reason}"
        )


class WorkerPoolClosedError(SlidextractError):
    """Raised when work is submitted to a pool that was already closed."""


class FFmpegError(SlidextractError):
    """Raised when an FFmpeg or FFprobe process exits unsuccessfully."""

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"FFmpeg failed (rc={returncode}): {stderr[:500]}")
