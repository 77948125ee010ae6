"""RetainedSlide entity: a frame that survived duplicate suppression."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from slidextract.core.entities.frame import Frame


@dataclass
class RetainedSlide:
    """A persisted slide and the output index it was written under."""

    frame: Frame
    output_index: int
    path: Path

    @property
    def source_index(self) -> int:
        return self.frame.index
