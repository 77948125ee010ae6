"""
Dependency container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from slidextract.infrastructure.config import Settings
from slidextract.ports.inbound.extract_slides_use_case import ExtractSlidesUseCase
from slidextract.ports.outbound.worker_pool_port import WorkerPoolPort

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        orchestrator = container.batch_orchestrator()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_duration_probe(settings: Settings):
        from slidextract.adapters.outbound.ffmpeg.ffprobe_duration import FFprobeDurationProbe
        return FFprobeDurationProbe(
            ffprobe_path=settings.ffmpeg.ffprobe_path,
            timeout=settings.ffmpeg.probe_timeout,
        )

    @staticmethod
    def _build_frame_decoder(settings: Settings):
        from slidextract.adapters.outbound.ffmpeg.ffmpeg_frame_decoder import FFmpegFrameDecoder
        return FFmpegFrameDecoder(ffmpeg_path=settings.ffmpeg.ffmpeg_path)

    @staticmethod
    def _build_image_codec(settings: Settings):
        from slidextract.adapters.outbound.media.pil_image_codec import PILImageCodec
        return PILImageCodec(jpeg_quality=settings.extraction.jpeg_quality)

    @staticmethod
    def _build_worker_pool_factory(settings: Settings) -> Callable[[int], WorkerPoolPort]:
        from slidextract.adapters.outbound.queue.async_worker_pool import AsyncWorkerPool
        task_timeout = settings.extraction.task_timeout

        def factory(workers: int) -> WorkerPoolPort:
            return AsyncWorkerPool(workers, task_timeout=task_timeout)

        return factory

    # ── Public accessors ──────────────────────────────────────────

    def duration_probe(self):
        return self._get_or_create("duration_probe", self._build_duration_probe)

    def frame_decoder(self):
        return self._get_or_create("frame_decoder", self._build_frame_decoder)

    def image_codec(self):
        return self._get_or_create("image_codec", self._build_image_codec)

    def worker_pool_factory(self) -> Callable[[int], WorkerPoolPort]:
        return self._get_or_create("worker_pool_factory", self._build_worker_pool_factory)

    def disk_pipeline(self):
        from slidextract.application.disk_pipeline import DiskModePipeline
        return self._get_or_create(
            "disk_pipeline",
            lambda s: DiskModePipeline(
                probe=self.duration_probe(),
                decoder=self.frame_decoder(),
                codec=self.image_codec(),
                pool_factory=self.worker_pool_factory(),
                probe_timeout=s.ffmpeg.probe_timeout,
            ),
        )

    def streaming_pipeline(self):
        from slidextract.application.streaming_pipeline import StreamingPipeline
        return self._get_or_create(
            "streaming_pipeline",
            lambda s: StreamingPipeline(
                probe=self.duration_probe(),
                decoder=self.frame_decoder(),
                codec=self.image_codec(),
                probe_timeout=s.ffmpeg.probe_timeout,
            ),
        )

    def batch_orchestrator(self) -> ExtractSlidesUseCase:
        from slidextract.application.batch_orchestrator import BatchOrchestrator
        return self._get_or_create(
            "batch_orchestrator",
            lambda s: BatchOrchestrator(
                disk_pipeline=self.disk_pipeline(),
                streaming_pipeline=self.streaming_pipeline(),
            ),
        )
