"""
Slide extraction use case: one video, or every video in a folder.

Videos run strictly one after another; only the extraction inside a
disk-mode job is parallel. Any fatal error stops the whole run.
"""
from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from slidextract.application.dto.extraction_request import ExtractionRequest
from slidextract.application.dto.pipeline_result import BatchResult
from slidextract.core.entities.video_job import VideoJob
from slidextract.core.exceptions import ConfigurationError, OutputDirectoryError
from slidextract.core.value_objects.image_format import ImageFormat
from slidextract.core.value_objects.normalization import Normalization
from slidextract.ports.inbound.extract_slides_use_case import SlidePipeline

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """Implements :class:`ExtractSlidesUseCase`: one :class:`VideoJob` per video, each run by a pipeline."""

    def __init__(self, disk_pipeline: SlidePipeline, streaming_pipeline: SlidePipeline):
        self._disk = disk_pipeline
        self._streaming = streaming_pipeline

    async def execute(self, request: ExtractionRequest) -> BatchResult:
        # Everything is validated before touching the filesystem.
        template = VideoJob(
            source_path=Path(request.path),
            output_dir=Path(request.output_root),
            interval_seconds=request.interval_seconds,
            threshold=request.threshold,
            image_format=ImageFormat.parse(request.image_format),
            normalization=Normalization.parse(request.normalization),
            workers=request.workers,
            max_frames=request.max_frames,
        )
        sources = self._enumerate(template.source_path) if request.batch else [template.source_path]
        pipeline = self._streaming if request.in_memory else self._disk

        output_root = template.output_dir
        try:
            output_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(f"Cannot create output root {output_root}: {exc}") from exc

        result = BatchResult()
        for video in sources:
            output_dir = self._create_output_dir(output_root, video.stem)
            job = dataclasses.replace(template, source_path=video, output_dir=output_dir)
            result.results.append(await pipeline.run(job))

        logger.info(
            "Finished %d video(s), %d slides retained", len(result.results), result.total_retained
        )
        return result

    @staticmethod
    def _enumerate(folder: Path) -> list[Path]:
        if not folder.is_dir():
            raise ConfigurationError(f"Batch path is not a directory: {folder}")
        videos: list[Path] = []
        for entry in sorted(folder.iterdir(), key=lambda p: p.name):
            if not entry.is_file():
                logger.debug("Skipping non-file entry %s", entry)
                continue
            videos.append(entry)
        logger.info("Found %d video(s) in %s", len(videos), folder)
        return videos

    @staticmethod
    def _create_output_dir(output_root: Path, stem: str) -> Path:
        output_dir = output_root / stem
        try:
            output_dir.mkdir(exist_ok=False)
        except OSError as exc:
            raise OutputDirectoryError(f"Cannot create output directory {output_dir}: {exc}") from exc
        return output_dir
