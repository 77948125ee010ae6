"""
Pixel distance between two frames - pure domain logic.
"""
from __future__ import annotations

import math

import numpy as np

from slidextract.core.entities.frame import Frame
from slidextract.core.exceptions import DimensionMismatchError
from slidextract.core.value_objects.normalization import Normalization

PIXEL_SCALE = 100_000


def frame_distance(
    a: Frame,
    b: Frame,
    normalization: Normalization = Normalization.PIXEL,
) -> float:
    """Root of the summed squared channel differences between *a* and *b*.

    Every channel of every pixel (alpha included) contributes. Frames of
    different size are never cropped to fit; they raise
    :class:`DimensionMismatchError`.
    """
    if a.size != b.size:
        raise DimensionMismatchError(a.size, b.size)

    diff = a.pixels.astype(np.int64) - b.pixels.astype(np.int64)
    accum = int(np.einsum("ijk,ijk->", diff, diff))
    root = math.sqrt(accum)

    if normalization is Normalization.RAW:
        return root
    return root * PIXEL_SCALE / a.pixel_count


def is_near_duplicate(
    a: Frame,
    b: Frame,
    threshold: float,
    normalization: Normalization = Normalization.PIXEL,
) -> bool:
    """True when the two frames are closer than *threshold*."""
    return frame_distance(a, b, normalization) < threshold
