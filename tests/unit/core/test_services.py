"""Unit tests for core domain services."""
from __future__ import annotations

import math

import numpy as np
import pytest

from slidextract.core.entities.frame import Frame
from slidextract.core.exceptions import DimensionMismatchError, InvalidIntervalError
from slidextract.core.services.dedup import (
    iter_superseded,
    keep_last_of_run,
    select_changes,
)
from slidextract.core.services.frame_distance import frame_distance, is_near_duplicate
from slidextract.core.services.sampler import build_timestamps
from slidextract.core.value_objects.normalization import Normalization


class TestFrameDistance:
    """Tests for the pixel distance metric."""

    def test_identical_frames_have_zero_distance(self, frame_factory):
        a = frame_factory(42)
        assert frame_distance(a, a) == 0.0
        assert frame_distance(a, a, Normalization.RAW) == 0.0

    def test_symmetric(self):
        rng = np.random.default_rng(7)
        a = Frame(index=0, pixels=rng.integers(0, 256, size=(5, 9, 4), dtype=np.uint8))
        b = Frame(index=1, pixels=rng.integers(0, 256, size=(5, 9, 4), dtype=np.uint8))
        assert frame_distance(a, b) == frame_distance(b, a)
        assert frame_distance(a, b, Normalization.RAW) == frame_distance(b, a, Normalization.RAW)

    def test_raw_is_root_sum_of_squares(self, frame_factory):
        # 8x6 pixels, 3 colour channels differ by 2, alpha equal
        a = frame_factory(10)
        b = frame_factory(12)
        expected = math.sqrt(48 * 3 * 4)
        assert frame_distance(a, b, Normalization.RAW) == pytest.approx(expected)

    def test_pixel_normalization_scales_by_pixel_count(self, frame_factory):
        a = frame_factory(10)
        b = frame_factory(12)
        raw = frame_distance(a, b, Normalization.RAW)
        assert frame_distance(a, b, Normalization.PIXEL) == pytest.approx(raw * 100_000 / 48)

    def test_no_overflow_on_maximal_difference(self):
        black = Frame(index=0, pixels=np.zeros((512, 512, 4), dtype=np.uint8))
        white = Frame(index=1, pixels=np.full((512, 512, 4), 255, dtype=np.uint8))
        expected = math.sqrt(512 * 512 * 4 * 255 * 255)
        assert frame_distance(black, white, Normalization.RAW) == pytest.approx(expected)

    def test_dimension_mismatch_raises(self, frame_factory):
        a = frame_factory(0, width=8, height=6)
        b = frame_factory(0, width=6, height=8)
        with pytest.raises(DimensionMismatchError):
            frame_distance(a, b)
        with pytest.raises(DimensionMismatchError):
            frame_distance(b, a)

    def test_is_near_duplicate_is_strictly_below(self, frame_factory):
        a = frame_factory(10)
        b = frame_factory(12)
        d = frame_distance(a, b)
        assert is_near_duplicate(a, b, d + 1) is True
        assert is_near_duplicate(a, b, d) is False


class TestSampler:
    """Tests for build_timestamps."""

    @pytest.mark.parametrize("duration, interval, expected", [
        (10.0, 0.5, 20),
        (10.0, 3.0, 3),
        (3.0, 0.1, 30),
        (0.4, 0.5, 0),
        (59.999, 1.0, 59),
    ])
    def test_count_is_floor(self, duration, interval, expected):
        assert len(build_timestamps(duration, interval)) == expected

    def test_strictly_increasing_from_zero(self):
        seq = build_timestamps(7.3, 0.7)
        values = list(seq)
        assert values[0] == 0.0
        assert all(b > a for a, b in zip(values, values[1:]))
        assert values[-1] == pytest.approx(0.7 * (len(seq) - 1))

    @pytest.mark.parametrize("interval", [0.0, -0.5])
    def test_non_positive_interval_rejected(self, interval):
        with pytest.raises(InvalidIntervalError):
            build_timestamps(10.0, interval)

    def test_negative_duration_rejected(self):
        with pytest.raises(InvalidIntervalError):
            build_timestamps(-1.0, 1.0)


class TestKeepLastOfRun:
    """Tests for the disk-mode suppression policy."""

    def test_run_collapses_to_last_frame(self, slide_sequence, threshold):
        frames = [slide_sequence[i] for i in range(4)]
        assert keep_last_of_run(frames, threshold) == [2, 3]

    def test_superseded_indices_in_order(self, slide_sequence, threshold):
        pairs = [(i, slide_sequence[i]) for i in range(4)]
        assert list(iter_superseded(pairs, threshold)) == [0, 1]

    def test_missing_frame_skips_comparison(self, frame_factory, threshold):
        frames = [frame_factory(100), None, frame_factory(100), frame_factory(100)]
        # 0 has no present successor to compare against, so it survives.
        assert keep_last_of_run(frames, threshold) == [0, 3]

    def test_all_different_keeps_everything(self, frame_factory, threshold):
        frames = [frame_factory(0), frame_factory(120), frame_factory(240)]
        assert keep_last_of_run(frames, threshold) == [0, 1, 2]

    def test_empty(self, threshold):
        assert keep_last_of_run([], threshold) == []


class TestSelectChanges:
    """Tests for the streaming-mode selection policy."""

    def test_keeps_first_and_first_change(self, slide_sequence, threshold):
        window = [slide_sequence[i] for i in range(4)]
        assert select_changes(window, threshold) == [0, 3]

    def test_compares_against_cursor_not_neighbour(self, frame_factory):
        # Each step drifts by 1 level; cumulative drift eventually crosses.
        window = [frame_factory(v) for v in (100, 101, 102, 103, 104)]
        step = frame_distance(window[0], window[1])
        assert select_changes(window, step * 2.5) == [0, 3]

    def test_threshold_is_inclusive(self, frame_factory):
        window = [frame_factory(10), frame_factory(12)]
        d = frame_distance(window[0], window[1])
        assert select_changes(window, d) == [0, 1]

    def test_single_and_empty_window(self, frame_factory, threshold):
        assert select_changes([frame_factory(1)], threshold) == [0]
        assert select_changes([], threshold) == []

    def test_policies_differ_on_same_input(self, slide_sequence, threshold):
        frames = [slide_sequence[i] for i in range(4)]
        assert keep_last_of_run(frames, threshold) != select_changes(frames, threshold)
