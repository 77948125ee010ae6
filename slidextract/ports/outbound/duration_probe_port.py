"""Port for querying a video's playable duration."""
from __future__ import annotations
from typing import Protocol, runtime_checkable

# Seconds allowed for a single duration probe
DEFAULT_PROBE_TIMEOUT = 5.0


@runtime_checkable
class DurationProbePort(Protocol):
    async def probe_duration(self, video_path: str, timeout: float = DEFAULT_PROBE_TIMEOUT) -> float: ...
