from slidextract.core.services.dedup import (
    DedupPolicy,
    iter_superseded,
    keep_last_of_run,
    select_changes,
)
from slidextract.core.services.frame_distance import frame_distance, is_near_duplicate
from slidextract.core.services.sampler import build_timestamps, validate_interval

__all__ = [
    "DedupPolicy",
    "build_timestamps",
    "frame_distance",
    "is_near_duplicate",
    "iter_superseded",
    "keep_last_of_run",
    "select_changes",
    "validate_interval",
]
