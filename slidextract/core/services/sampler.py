"""Sampling schedule construction."""
from __future__ import annotations

import math

from slidextract.core.exceptions import InvalidIntervalError
from slidextract.core.value_objects.timestamp_sequence import (
    MICROSECONDS_PER_SECOND,
    TimestampSequence,
)


def to_microseconds(seconds: float) -> int:
    return int(round(seconds * MICROSECONDS_PER_SECOND))


def validate_interval(interval_seconds: float) -> int:
    """Return the interval in microseconds, rejecting zero or negative values."""
    if not math.isfinite(interval_seconds):
        raise InvalidIntervalError(f"Sampling interval must be finite, got {interval_seconds}")
    interval_us = to_microseconds(interval_seconds)
    if interval_us <= 0:
        raise InvalidIntervalError(
            f"Sampling interval must be positive, got {interval_seconds}s"
        )
    return interval_us


def build_timestamps(duration_seconds: float, interval_seconds: float) -> TimestampSequence:
    """Produce ``floor(duration / interval)`` timestamps at ``0, interval, 2*interval, ...``."""
    interval_us = validate_interval(interval_seconds)
    if not math.isfinite(duration_seconds) or duration_seconds < 0:
        raise InvalidIntervalError(
            f"Video duration must be a non-negative number, got {duration_seconds}"
        )
    count = to_microseconds(duration_seconds) // interval_us
    return TimestampSequence(interval_us=interval_us, count=count)
