"""Frame entity holding one decoded RGBA still image."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

CHANNELS = 4


@dataclass
class Frame:
    """A decoded frame sampled from a video.

    ``pixels`` is a ``(height, width, 4)`` ``uint8`` array.
    """

    index: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNELS:
            raise ValueError(
                f"Frame pixels must have shape (height, width, {CHANNELS}), "
                f"got {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Frame pixels must be uint8, got {self.pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height
