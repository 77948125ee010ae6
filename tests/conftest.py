"""Shared test fixtures for all tests."""
from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import numpy as np
import pytest

from slidextract.adapters.outbound.media.pil_image_codec import PILImageCodec
from slidextract.core.entities.frame import Frame
from slidextract.core.entities.video_job import VideoJob
from slidextract.core.value_objects.image_format import ImageFormat

# On 8x6 frames a one-level shift scores 25_000 and a 150-level shift
# scores 3_750_000 under pixel normalization.
NEAR_DUPLICATE_THRESHOLD = 100_000


def make_frame(value: int, index: int = 0, width: int = 8, height: int = 6) -> Frame:
    """Solid-colour RGBA frame; alpha stays opaque."""
    pixels = np.full((height, width, 4), value, dtype=np.uint8)
    pixels[..., 3] = 255
    return Frame(index=index, pixels=pixels)


class FakeFileDecoder:
    """Writes a pre-rendered frame per timestamp index to the destination path."""

    def __init__(self, codec: PILImageCodec, frames: dict[int, Frame], interval_us: int, fail: set[int] = frozenset()):
        self._codec = codec
        self._frames = frames
        self._interval_us = interval_us
        self._fail = set(fail)
        self.calls: list[int] = []

    async def extract_to_file(self, video_path, timestamp_us, image_format, destination):
        index = timestamp_us // self._interval_us
        self.calls.append(index)
        if index in self._fail:
            raise RuntimeError(f"ffmpeg exited with status 1 for frame {index}")
        return self._codec.write(self._frames[index], Path(destination), image_format)


class FakePipeDecoder:
    """Returns encoded bytes for a pre-rendered frame per timestamp index."""

    def __init__(self, codec: PILImageCodec, frames: dict[int, Frame], interval_us: int):
        self._codec = codec
        self._frames = frames
        self._interval_us = interval_us
        self.calls: list[int] = []

    async def extract_to_bytes(self, video_path, timestamp_us, image_format):
        index = timestamp_us // self._interval_us
        self.calls.append(index)
        return self._codec.encode(self._frames[index], image_format)


class FakeFFmpegProcess:
    """Stands in for an asyncio ffmpeg child process."""

    pid = 4242

    def __init__(self, spawner: FakeFFmpegSpawner, cmd: tuple[str, ...]):
        self._spawner = spawner
        self.cmd = cmd
        self.returncode = None
        self.killed = False

    async def communicate(self):
        spawner = self._spawner
        spawner.active += 1
        spawner.peak = max(spawner.peak, spawner.active)
        try:
            await asyncio.sleep(spawner.delay)
            if spawner.on_exit is not None:
                spawner.on_exit(self.cmd)
        finally:
            spawner.active -= 1
        self.returncode = spawner.returncode
        return spawner.stdout, spawner.stderr

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


class FakeFFmpegSpawner:
    """Replacement for ``asyncio.create_subprocess_exec`` that counts live processes."""

    def __init__(self, stdout=b"", stderr=b"", returncode=0, delay=0.0, on_spawn=None, on_exit=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.delay = delay
        self.on_spawn = on_spawn
        self.on_exit = on_exit
        self.processes: list[FakeFFmpegProcess] = []
        self.active = 0
        self.peak = 0

    async def __call__(self, *cmd, stdout=None, stderr=None):
        if self.on_spawn is not None:
            self.on_spawn(cmd)
        proc = FakeFFmpegProcess(self, cmd)
        self.processes.append(proc)
        return proc


# ── Frame Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def codec() -> PILImageCodec:
    return PILImageCodec()


@pytest.fixture
def slide_sequence() -> dict[int, Frame]:
    """Frames 0-2 are near-identical, frame 3 is a sharp change."""
    return {
        0: make_frame(100, index=0),
        1: make_frame(101, index=1),
        2: make_frame(100, index=2),
        3: make_frame(250, index=3),
    }


# ── Job Fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def make_job(tmp_path):
    def _make(**overrides) -> VideoJob:
        params = dict(
            source_path=tmp_path / "lecture.mp4",
            output_dir=tmp_path / "out" / "lecture",
            interval_seconds=1.0,
            threshold=NEAR_DUPLICATE_THRESHOLD,
            image_format=ImageFormat.PNG,
            workers=3,
            max_frames=25,
        )
        params.update(overrides)
        job = VideoJob(**params)
        job.output_dir.mkdir(parents=True, exist_ok=True)
        return job

    return _make


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_duration_probe():
    mock = AsyncMock()
    mock.probe_duration.return_value = 4.0
    return mock


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def threshold() -> int:
    return NEAR_DUPLICATE_THRESHOLD


@pytest.fixture
def file_decoder_factory(codec):
    def _make(frames: dict[int, Frame], interval_us: int = 1_000_000, fail: set[int] = frozenset()):
        return FakeFileDecoder(codec, frames, interval_us, fail)

    return _make


@pytest.fixture
def pipe_decoder_factory(codec):
    def _make(frames: dict[int, Frame], interval_us: int = 1_000_000):
        return FakePipeDecoder(codec, frames, interval_us)

    return _make


@pytest.fixture
def ffmpeg_spawner():
    """Patches ffmpeg process creation; yields a factory for the fake spawner."""
    patchers = []

    def _make(**kwargs) -> FakeFFmpegSpawner:
        spawner = FakeFFmpegSpawner(**kwargs)
        patcher = patch(
            "slidextract.adapters.outbound.ffmpeg.ffmpeg_base.asyncio.create_subprocess_exec",
            new=spawner,
        )
        patcher.start()
        patchers.append(patcher)
        return spawner

    yield _make
    for patcher in reversed(patchers):
        patcher.stop()
