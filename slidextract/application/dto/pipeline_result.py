"""DTOs for pipeline and batch results."""
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class PipelineResult:
    video_path: str
    output_dir: str
    mode: str = "disk"
    policy: str = ""
    sampled: int = 0
    extracted: int = 0
    failed: int = 0
    removed: int = 0
    retained_paths: list[str] = field(default_factory=list)
    extraction_seconds: float = 0.0
    suppression_seconds: float = 0.0

    @property
    def retained(self) -> int:
        return len(self.retained_paths)

    @property
    def total_seconds(self) -> float:
        return self.extraction_seconds + self.suppression_seconds

    def to_dict(self) -> dict:
        return {
            "video_path": self.video_path,
            "output_dir": self.output_dir,
            "mode": self.mode,
            "policy": self.policy,
            "sampled": self.sampled,
            "extracted": self.extracted,
            "failed": self.failed,
            "removed": self.removed,
            "retained": self.retained,
            "retained_paths": self.retained_paths,
            "extraction_seconds": self.extraction_seconds,
            "suppression_seconds": self.suppression_seconds,
        }


@dataclass
class BatchResult:
    results: list[PipelineResult] = field(default_factory=list)

    @property
    def total_retained(self) -> int:
        return sum(r.retained for r in self.results)

    def to_dict(self) -> dict:
        return {
            "videos": len(self.results),
            "total_retained": self.total_retained,
            "results": [r.to_dict() for r in self.results],
        }
