from slidextract.application.batch_orchestrator import BatchOrchestrator
from slidextract.application.disk_pipeline import DiskModePipeline
from slidextract.application.streaming_pipeline import StreamingPipeline

__all__ = [
    "BatchOrchestrator",
    "DiskModePipeline",
    "StreamingPipeline",
]
