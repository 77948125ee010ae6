"""VideoJob entity: everything one pipeline run needs to know about a video."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from slidextract.core.exceptions import ConfigurationError, InvalidIntervalError
from slidextract.core.value_objects.image_format import ImageFormat
from slidextract.core.value_objects.normalization import Normalization


@dataclass(frozen=True)
class VideoJob:
    """Immutable description of one video's extraction run.

    A job is validated on construction, so an invalid interval is rejected
    before the duration probe ever runs.
    """

    source_path: Path
    output_dir: Path
    interval_seconds: float = 0.5
    threshold: int = 1000
    image_format: ImageFormat = ImageFormat.BMP
    normalization: Normalization = Normalization.PIXEL
    workers: int = 8
    max_frames: int = 25

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_path", Path(self.source_path))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        if not math.isfinite(self.interval_seconds) or self.interval_seconds <= 0:
            raise InvalidIntervalError(
                f"Sampling interval must be positive, got {self.interval_seconds}"
            )
        if self.threshold < 0:
            raise ConfigurationError(f"Threshold must be non-negative, got {self.threshold}")
        if self.workers < 1:
            raise ConfigurationError(f"Workers must be at least 1, got {self.workers}")
        if self.max_frames < 1:
            raise ConfigurationError(f"max_frames must be at least 1, got {self.max_frames}")

    @property
    def stem(self) -> str:
        return self.source_path.stem

    def frame_filename(self, index: int) -> str:
        return f"frame_{self.stem}_{index}.{self.image_format.extension}"

    def frame_path(self, index: int) -> Path:
        return self.output_dir / self.frame_filename(index)
