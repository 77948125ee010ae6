"""Inbound port for slide extraction."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from slidextract.application.dto.extraction_request import ExtractionRequest
    from slidextract.application.dto.pipeline_result import BatchResult, PipelineResult
    from slidextract.core.entities.video_job import VideoJob


@runtime_checkable
class ExtractSlidesUseCase(Protocol):
    async def execute(self, request: ExtractionRequest) -> BatchResult: ...


@runtime_checkable
class SlidePipeline(Protocol):
    async def run(self, job: VideoJob) -> PipelineResult: ...
