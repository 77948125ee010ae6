"""Distance normalization modes."""

from __future__ import annotations

from enum import Enum

from slidextract.core.exceptions import ConfigurationError


class Normalization(str, Enum):
    """How the root-sum-of-squares pixel error is scaled.

    ``RAW`` leaves it untouched, so thresholds depend on resolution.
    ``PIXEL`` multiplies by ``100000 / pixel_count`` which keeps a single
    threshold usable across resolutions.
    """

    RAW = "raw"
    PIXEL = "pixel"

    @classmethod
    def parse(cls, name: str) -> Normalization:
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unrecognized normalization {name!r}: allowed values are raw and pixel"
            ) from None
