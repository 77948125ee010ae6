from slidextract.ports.outbound.duration_probe_port import DurationProbePort
from slidextract.ports.outbound.frame_decoder_port import FileFrameDecoderPort, PipeFrameDecoderPort
from slidextract.ports.outbound.image_codec_port import ImageCodecPort
from slidextract.ports.outbound.worker_pool_port import PoolReport, WorkerPoolPort

__all__ = [
    "DurationProbePort",
    "FileFrameDecoderPort",
    "PipeFrameDecoderPort",
    "ImageCodecPort",
    "PoolReport",
    "WorkerPoolPort",
]
