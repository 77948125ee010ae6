"""
Disk-mode slide extraction.

Every sampled frame is written to its own file by a pool of parallel
workers. Once the pool has fully drained, a single sequential pass
compares neighbouring files and deletes the earlier one of each
near-duplicate pair.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterator, Optional

from slidextract.application.dto.pipeline_result import PipelineResult
from slidextract.core.entities.frame import Frame
from slidextract.core.entities.video_job import VideoJob
from slidextract.core.services.dedup import DedupPolicy, iter_superseded
from slidextract.core.services.sampler import build_timestamps
from slidextract.core.value_objects.timestamp_sequence import TimestampSequence
from slidextract.ports.outbound.duration_probe_port import DEFAULT_PROBE_TIMEOUT
from slidextract.ports.outbound.worker_pool_port import PoolReport, WorkerPoolPort

logger = logging.getLogger(__name__)


class DiskModePipeline:
    """Parallel extract-to-file, then keep-last-of-run suppression."""

    policy = DedupPolicy.KEEP_LAST_OF_RUN

    def __init__(
        self,
        probe,          # DurationProbePort
        decoder,        # FileFrameDecoderPort
        codec,          # ImageCodecPort
        pool_factory: Callable[[int], WorkerPoolPort],
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        self._probe = probe
        self._decoder = decoder
        self._codec = codec
        self._pool_factory = pool_factory
        self._probe_timeout = probe_timeout

    async def run(self, job: VideoJob) -> PipelineResult:
        logger.info("[Video : %s] disk mode, %d workers", job.stem, job.workers)

        duration = await self._probe.probe_duration(str(job.source_path), timeout=self._probe_timeout)
        timestamps = build_timestamps(duration, job.interval_seconds)
        result = PipelineResult(
            video_path=str(job.source_path),
            output_dir=str(job.output_dir),
            mode="disk",
            policy=self.policy.value,
            sampled=len(timestamps),
        )

        # Phase 1: parallel extraction
        start = time.perf_counter()
        report = await self._extract_all(job, timestamps)
        result.extraction_seconds = time.perf_counter() - start
        result.extracted = report.completed
        result.failed = report.failed
        logger.info(
            "Time for extracting frames: %.2fs (%d/%d extracted, %d failed)",
            result.extraction_seconds, report.completed, report.submitted, report.failed,
        )

        # Phase 2: sequential suppression, strictly after every worker exited
        start = time.perf_counter()
        loop = asyncio.get_running_loop()
        result.removed = await loop.run_in_executor(None, self._suppress, job, len(timestamps))
        result.suppression_seconds = time.perf_counter() - start
        logger.info(
            "Time for deleting similar frames: %.2fs (%d removed)",
            result.suppression_seconds, result.removed,
        )

        result.retained_paths = [
            str(job.frame_path(i)) for i in range(len(timestamps)) if job.frame_path(i).exists()
        ]
        logger.info("Total: %.2fs, %d slides retained", result.total_seconds, result.retained)
        return result

    async def _extract_all(self, job: VideoJob, timestamps: TimestampSequence) -> PoolReport:
        pool = self._pool_factory(job.workers)
        pool.start()
        try:
            for i in range(len(timestamps)):
                await pool.submit(
                    job.frame_filename(i),
                    self._decoder.extract_to_file,
                    str(job.source_path),
                    timestamps.microseconds(i),
                    job.image_format,
                    job.frame_path(i),
                )
        finally:
            pool.close()
        return await pool.join()

    def _load_frames(self, job: VideoJob, count: int) -> Iterator[tuple[int, Optional[Frame]]]:
        for i in range(count):
            path = job.frame_path(i)
            if not path.exists():
                logger.debug("Frame %d missing, skipping comparison", i)
                yield i, None
                continue
            yield i, self._codec.read(path, index=i)

    def _suppress(self, job: VideoJob, count: int) -> int:
        removed = 0
        for index in iter_superseded(self._load_frames(job, count), job.threshold, job.normalization):
            job.frame_path(index).unlink()
            logger.debug("Removed near-duplicate frame %d", index)
            removed += 1
        return removed
