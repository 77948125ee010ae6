from slidextract.core.value_objects.image_format import ImageFormat
from slidextract.core.value_objects.normalization import Normalization
from slidextract.core.value_objects.timestamp_sequence import TimestampSequence

__all__ = ["ImageFormat", "Normalization", "TimestampSequence"]
