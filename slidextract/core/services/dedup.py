"""
Duplicate suppression policies - pure domain logic.

Two policies are in use and they are intentionally different:

* ``KEEP_LAST_OF_RUN`` (disk mode) walks adjacent pairs and drops the
  earlier frame of every near-duplicate pair, so a run collapses to its
  final frame.
* ``KEEP_FIRST_OF_CHANGE`` (streaming mode) keeps the first frame of a
  window and then every frame that differs from the last kept one.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence

from slidextract.core.entities.frame import Frame
from slidextract.core.services.frame_distance import frame_distance
from slidextract.core.value_objects.normalization import Normalization


class DedupPolicy(str, Enum):
    KEEP_LAST_OF_RUN = "keep_last_of_run"
    KEEP_FIRST_OF_CHANGE = "keep_first_of_change"


def iter_superseded(
    frames: Iterable[tuple[int, Optional[Frame]]],
    threshold: float,
    normalization: Normalization = Normalization.PIXEL,
) -> Iterator[int]:
    """Yield the indices dropped by the keep-last-of-run policy.

    *frames* must be in ascending index order. ``None`` marks a frame that
    was never extracted; any comparison involving it is skipped. Each frame
    is compared with its immediate predecessor, not with the last survivor.
    Only two frames are held at any time.
    """
    prev_index: Optional[int] = None
    prev_frame: Optional[Frame] = None

    for index, frame in frames:
        if (
            prev_frame is not None
            and frame is not None
            and prev_index == index - 1
            and frame_distance(prev_frame, frame, normalization) < threshold
        ):
            yield prev_index
        prev_index, prev_frame = index, frame


def keep_last_of_run(
    frames: Sequence[Optional[Frame]],
    threshold: float,
    normalization: Normalization = Normalization.PIXEL,
) -> list[int]:
    """Positions in *frames* that survive the keep-last-of-run policy."""
    dropped = set(iter_superseded(enumerate(frames), threshold, normalization))
    return [i for i, f in enumerate(frames) if f is not None and i not in dropped]


def select_changes(
    window: Sequence[Frame],
    threshold: float,
    normalization: Normalization = Normalization.PIXEL,
) -> list[int]:
    """Positions in *window* kept by the keep-first-of-change policy.

    Slot 0 is always kept. A later slot is kept when its distance to the
    cursor (the last kept slot) is at or above *threshold*.
    """
    if not window:
        return []

    cursor = 0
    kept = [0]
    for k in range(1, len(window)):
        if frame_distance(window[cursor], window[k], normalization) >= threshold:
            cursor = k
            kept.append(k)
    return kept
