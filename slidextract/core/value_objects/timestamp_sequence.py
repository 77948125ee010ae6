"""TimestampSequence value object describing which instants of a video to sample."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

MICROSECONDS_PER_SECOND = 1_000_000


@dataclass(frozen=True)
class TimestampSequence:
    """Immutable, index-addressable schedule of sample times.

    Index ``i`` maps to ``i * interval``. Times are kept in integer
    microseconds so that the sample count is an exact floor division.
    """

    interval_us: int
    count: int

    def __post_init__(self) -> None:
        if self.interval_us <= 0:
            raise ValueError(f"interval_us must be positive, got {self.interval_us}")
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> float:
        return self.microseconds(index) / MICROSECONDS_PER_SECOND

    def __iter__(self) -> Iterator[float]:
        for i in range(self.count):
            yield self[i]

    @property
    def interval_seconds(self) -> float:
        return self.interval_us / MICROSECONDS_PER_SECOND

    def microseconds(self, index: int) -> int:
        if index < 0:
            index += self.count
        if not 0 <= index < self.count:
            raise IndexError(f"timestamp index {index} out of range (count={self.count})")
        return index * self.interval_us

    def batches(self, size: int) -> Iterator[range]:
        """Yield consecutive index ranges of at most *size* entries."""
        if size <= 0:
            raise ValueError(f"batch size must be positive, got {size}")
        for start in range(0, self.count, size):
            yield range(start, min(start + size, self.count))
