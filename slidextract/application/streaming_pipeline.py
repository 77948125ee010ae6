"""
Streaming (in-memory) slide extraction.

Frames are piped straight from the decoder into a fixed-size window,
deduplicated within that window, and only the survivors are written.
The window is the only frame storage, so peak memory is bounded by
``max_frames`` decoded frames. Work is strictly sequential.

Windows are evaluated independently: a run of near-duplicates that
straddles a window boundary yields one extra slide per window it touches.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from slidextract.application.dto.pipeline_result import PipelineResult
from slidextract.core.entities.frame import Frame
from slidextract.core.entities.retained_slide import RetainedSlide
from slidextract.core.entities.video_job import VideoJob
from slidextract.core.services.dedup import DedupPolicy, select_changes
from slidextract.core.services.sampler import build_timestamps
from slidextract.ports.outbound.duration_probe_port import DEFAULT_PROBE_TIMEOUT

logger = logging.getLogger(__name__)


class StreamingPipeline:
    """Windowed extract-to-memory with keep-first-of-change selection."""

    policy = DedupPolicy.KEEP_FIRST_OF_CHANGE

    def __init__(
        self,
        probe,      # DurationProbePort
        decoder,    # PipeFrameDecoderPort
        codec,      # ImageCodecPort
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        self._probe = probe
        self._decoder = decoder
        self._codec = codec
        self._probe_timeout = probe_timeout

    async def run(self, job: VideoJob) -> PipelineResult:
        logger.info("[Video : %s] streaming mode, window of %d frames", job.stem, job.max_frames)

        duration = await self._probe.probe_duration(str(job.source_path), timeout=self._probe_timeout)
        timestamps = build_timestamps(duration, job.interval_seconds)
        result = PipelineResult(
            video_path=str(job.source_path),
            output_dir=str(job.output_dir),
            mode="streaming",
            policy=self.policy.value,
            sampled=len(timestamps),
        )

        window: list[Optional[Frame]] = [None] * job.max_frames
        saved = 0

        for batch in timestamps.batches(job.max_frames):
            start = time.perf_counter()
            for slot, i in enumerate(batch):
                data = await self._decoder.extract_to_bytes(
                    str(job.source_path), timestamps.microseconds(i), job.image_format
                )
                window[slot] = self._codec.decode(data, index=i)
            result.extracted += len(batch)
            result.extraction_seconds += time.perf_counter() - start

            start = time.perf_counter()
            filled = window[: len(batch)]
            for slot in select_changes(filled, job.threshold, job.normalization):
                saved += 1
                slide = self._persist(job, filled[slot], saved)
                result.retained_paths.append(str(slide.path))
            result.suppression_seconds += time.perf_counter() - start
            logger.debug(
                "Window %d-%d done, %d slides so far", batch.start, batch.stop - 1, saved
            )

        result.removed = result.sampled - result.retained
        logger.info(
            "Total: %.2fs, %d of %d frames retained",
            result.total_seconds, result.retained, result.sampled,
        )
        return result

    def _persist(self, job: VideoJob, frame: Frame, output_index: int) -> RetainedSlide:
        path = self._codec.write(frame, job.frame_path(output_index), job.image_format)
        return RetainedSlide(frame=frame, output_index=output_index, path=path)
