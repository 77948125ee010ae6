"""DTO for slide extraction requests."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ExtractionRequest:
    path: str
    output_root: str = "out"
    interval_seconds: float = 0.5
    threshold: int = 1000
    workers: int = 8
    in_memory: bool = False
    max_frames: int = 25
    image_format: str = "bmp"
    normalization: str = "pixel"
    batch: bool = False
